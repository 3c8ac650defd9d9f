"""List parsing for shared text."""

from decider.parse.checklist import (
    ParsedList,
    candidate_lines,
    checkbox_text,
    is_checkbox_line,
    is_checked,
    parse_list,
)

__all__ = [
    "ParsedList",
    "candidate_lines",
    "checkbox_text",
    "is_checkbox_line",
    "is_checked",
    "parse_list",
]
