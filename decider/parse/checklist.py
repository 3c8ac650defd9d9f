"""Shared-text list parsing.

Turns pasted or shared text into the list of candidate items. Plain lists
keep every non-blank line. Checklists (``[ ] Bread`` / ``[x] Milk``) keep only
the unchecked entries, and a single heading line directly above the checklist
becomes the list title.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CHECKBOX_OPEN = "["
CHECKBOX_CLOSE = "]"
CHECKED_MARKER = "x"
CHECKBOX_PREFIX_LEN = 3


@dataclass(frozen=True)
class ParsedList:
    """Items extracted from shared text."""

    items: tuple[str, ...] = ()
    title: str | None = None

    def __len__(self) -> int:
        return len(self.items)


def candidate_lines(text: str) -> list[str]:
    """Split text into trimmed, non-blank lines in original order."""
    stripped = (line.strip() for line in text.splitlines())
    return [line for line in stripped if line]


def is_checkbox_line(line: str) -> bool:
    """Check whether a line uses ``[<marker>]`` checkbox notation.

    Examples:
        >>> is_checkbox_line("[ ] Bread")
        True
        >>> is_checkbox_line("[x]")
        True
        >>> is_checkbox_line("[Bread]")
        False
    """
    trimmed = line.strip()
    return (
        len(trimmed) >= CHECKBOX_PREFIX_LEN
        and trimmed[0] == CHECKBOX_OPEN
        and trimmed[2] == CHECKBOX_CLOSE
    )


def is_checked(line: str) -> bool:
    """Check whether a checkbox line is ticked (``x`` or ``X``)."""
    return is_checkbox_line(line) and line.strip()[1].lower() == CHECKED_MARKER


def checkbox_text(line: str) -> str:
    """Return the text after the checkbox prefix, trimmed."""
    return line.strip()[CHECKBOX_PREFIX_LEN:].strip()


def _detect_title(lines: list[str]) -> str | None:
    # Only a heading immediately followed by the checklist counts.
    if len(lines) < 2 or is_checkbox_line(lines[0]):
        return None
    if is_checkbox_line(lines[1]):
        return lines[0]
    return None


def parse_list(text: str) -> ParsedList:
    """Parse shared text into a list of items.

    Args:
        text: Raw shared text, newline separated.

    Returns:
        ParsedList with the items in original order and an optional title.
        Empty or whitespace-only input gives an empty list.

    Examples:
        >>> parse_list("Pizza\\nSushi\\nBurgers").items
        ('Pizza', 'Sushi', 'Burgers')
        >>> parsed = parse_list("Shopping List\\n[x] Milk\\n[ ] Bread\\n[ ] Eggs")
        >>> parsed.title, parsed.items
        ('Shopping List', ('Bread', 'Eggs'))
    """
    lines = candidate_lines(text)

    if not any(is_checkbox_line(line) for line in lines):
        logger.debug("Parsed plain list with %d items", len(lines))
        return ParsedList(items=tuple(lines))

    items: list[str] = []
    for line in lines:
        if not is_checkbox_line(line) or is_checked(line):
            continue
        entry = checkbox_text(line)
        # "[ ]" on its own carries no item
        if entry:
            items.append(entry)

    title = _detect_title(lines)
    logger.debug(
        "Parsed checklist with %d unchecked items (title=%r)", len(items), title
    )
    return ParsedList(items=tuple(items), title=title)
