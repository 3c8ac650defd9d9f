"""Exception types for Decider.

Parsing never raises. Validation errors are raised at the caller boundary
(``check_decidable`` / ``decide``) so the CLI and API can report them.
"""

from __future__ import annotations


class DeciderError(Exception):
    """Base class for all Decider errors."""

    code = "decider_error"
    default_message = "Decider could not complete the request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DeciderError):
    """A parsed list cannot be used to make a decision."""

    code = "invalid_list"


class EmptyInputError(ValidationError):
    """Parsing produced zero items."""

    code = "empty_input"
    default_message = "No items found"


class InsufficientItemsError(ValidationError):
    """Parsing produced fewer items than a decision needs."""

    code = "insufficient_items"
    default_message = "Add one more item to make a decision"

    def __init__(self, count: int, minimum: int, message: str | None = None) -> None:
        self.count = count
        self.minimum = minimum
        super().__init__(message)


class SelectionOnEmptyError(DeciderError, ValueError):
    """``pick`` was called with an empty sequence."""

    code = "selection_on_empty"
    default_message = "Cannot pick from an empty list"


class InputError(DeciderError):
    """Shared input could not be turned into text."""

    code = "input_error"
    default_message = "Could not process the shared content"


class InputDecodeError(InputError):
    """Shared bytes are not valid UTF-8."""

    code = "input_decode_error"


class InputReadError(InputError):
    """A shared file could not be read."""

    code = "input_read_error"
