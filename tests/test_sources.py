"""Tests for loading shared input."""

from __future__ import annotations

import pytest

from decider.errors import InputDecodeError, InputError, InputReadError
from decider.sources import decode_shared_bytes, load_shared_text, read_shared_file


class TestLoadSharedText:
    """Shared content arrives as bytes, a string, or a file."""

    def test_string_passes_through(self):
        assert load_shared_text("Pizza\nSushi") == "Pizza\nSushi"

    def test_utf8_bytes(self):
        assert load_shared_text("Crème brûlée\nTiramisu".encode()) == "Crème brûlée\nTiramisu"

    def test_bom_is_stripped(self):
        assert decode_shared_bytes(b"\xef\xbb\xbfPizza") == "Pizza"
        assert load_shared_text("\ufeffPizza") == "Pizza"

    def test_invalid_bytes(self):
        with pytest.raises(InputDecodeError) as exc_info:
            load_shared_text(b"\xff\xfe\xfa")
        assert isinstance(exc_info.value, InputError)

    def test_file(self, shopping_list):
        text = load_shared_text(shopping_list)
        assert text.startswith("Shopping List")

    def test_missing_file(self, temp_dir):
        with pytest.raises(InputReadError) as exc_info:
            read_shared_file(temp_dir / "missing.txt")
        assert "missing.txt" in exc_info.value.message
