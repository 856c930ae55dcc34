"""
Outline snapshot models.

An Outline is the structural index of a note: where its headings start and
where its list items start (with the checkbox character, if any). It is
produced by parsers.outline_scanner and treated as an immutable snapshot by
the task parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class HeadingInfo:
    text: str
    start_line: int
    level: int = 1


@dataclass(frozen=True)
class ListItemInfo:
    """
    A list item position.

    checkbox_char is None for plain bullets, " " for an open checkbox and any
    other single character for a completed one.
    """

    start_line: int
    start_column: int = 0
    checkbox_char: Optional[str] = None

    @property
    def is_task(self) -> bool:
        return self.checkbox_char is not None


@dataclass(frozen=True)
class Outline:
    """
    Headings (sorted by start_line) and list items of one note.

    list_items is None when no list-item information is available at all,
    which the parser treats as "nothing to show" rather than an error.
    """

    headings: Tuple[HeadingInfo, ...] = ()
    list_items: Optional[Tuple[ListItemInfo, ...]] = None
