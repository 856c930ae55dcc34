"""
Outline scanner for markdown notes.

Builds the Outline snapshot (heading and list-item positions) that
parse_tasks consumes. This is deliberately shallow: it recognises ATX
headings and list markers line by line, skipping YAML frontmatter and
fenced code blocks, and does not otherwise parse markdown.
"""

import re
from typing import List, Optional, Tuple

from models.outline import HeadingInfo, ListItemInfo, Outline

_HEADING = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.*?)(?:[ \t]+#+)?[ \t]*$")
_LIST_ITEM = re.compile(r"^([ \t]*)([-*+]|\d+[.)])(?:[ \t]+|$)")
_CHECKBOX = re.compile(r"\[(.)\](?=\s|$)")
_FENCE = re.compile(r"^[ \t]*(`{3,}|~{3,})")


def _frontmatter_end(lines: List[str]) -> int:
    """
    Return the index of the first line after YAML frontmatter.

    Returns 0 when the note has no (closed) frontmatter block.
    """
    if not lines or lines[0].strip() != "---":
        return 0

    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            return i + 1

    # Never closed — treat as no frontmatter
    return 0


def _parse_heading(line: str) -> Optional[Tuple[int, str]]:
    """Return (level, text) or None if line is not a heading."""
    m = _HEADING.match(line)
    if not m:
        return None
    return len(m.group(1)), m.group(2).strip()


def _parse_list_item(line: str, line_num: int) -> Optional[ListItemInfo]:
    m = _LIST_ITEM.match(line)
    if not m:
        return None

    checkbox_char = None
    box = _CHECKBOX.match(line, m.end())
    if box:
        checkbox_char = box.group(1)

    return ListItemInfo(
        start_line=line_num,
        start_column=len(m.group(1)),
        checkbox_char=checkbox_char,
    )


def scan_lines(lines: List[str]) -> Outline:
    """
    Scan note lines into an Outline.

    list_items is None when the note contains no list items at all.
    """
    headings: List[HeadingInfo] = []
    list_items: List[ListItemInfo] = []
    fence: Optional[str] = None

    for line_num in range(_frontmatter_end(lines), len(lines)):
        line = lines[line_num]

        fence_match = _FENCE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
            continue
        if fence is not None:
            continue

        heading = _parse_heading(line)
        if heading:
            level, text = heading
            headings.append(HeadingInfo(text=text, start_line=line_num, level=level))
            continue

        item = _parse_list_item(line, line_num)
        if item:
            list_items.append(item)

    return Outline(
        headings=tuple(headings),
        list_items=tuple(list_items) if list_items else None,
    )


def scan_content(content: str) -> Outline:
    """Scan full note content (split on newlines) into an Outline."""
    return scan_lines(content.split("\n"))
