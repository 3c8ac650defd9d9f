"""Loading shared input into text.

Shared content arrives as raw bytes, a string, or a file on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from decider.errors import InputDecodeError, InputReadError

logger = logging.getLogger(__name__)

_UTF8_BOM = "\ufeff"


def decode_shared_bytes(data: bytes) -> str:
    """Decode shared bytes as UTF-8.

    Raises:
        InputDecodeError: If the bytes are not valid UTF-8.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InputDecodeError("Shared content is not valid UTF-8 text") from exc
    return text.removeprefix(_UTF8_BOM)


def read_shared_file(path: Path) -> str:
    """Read a shared file as UTF-8 text.

    Raises:
        InputReadError: If the file cannot be read.
        InputDecodeError: If the file is not valid UTF-8.
    """
    try:
        data = path.expanduser().read_bytes()
    except OSError as exc:
        raise InputReadError(f"Could not read {path}: {exc.strerror or exc}") from exc
    logger.debug("Read %d bytes from %s", len(data), path)
    return decode_shared_bytes(data)


def load_shared_text(source: str | bytes | Path) -> str:
    """Turn any supported shared input into text."""
    if isinstance(source, Path):
        return read_shared_file(source)
    if isinstance(source, bytes):
        return decode_shared_bytes(source)
    return source.removeprefix(_UTF8_BOM)
