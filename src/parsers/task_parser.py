"""
Task extraction for a single note.

Main API:
    parse_tasks(outline, lines)  → ParseResult
    toggle_task(content, task)   → new content, or None if the line is gone

parse_tasks trusts the outline snapshot for *where* list items and headings
are, and only reads the raw lines to get each task's text. The two sources
can briefly disagree while the note is being edited; items whose line no
longer exists are skipped rather than treated as errors.
"""

import re
from typing import Dict, List, Optional, Sequence

from models.outline import Outline
from models.task import NO_HEADING, ParseResult, Task, TaskGroup
from parsers.outline_index import find_enclosing_heading
from parsers.task_tree import build_forest

# List marker + checkbox prefix: "- [ ] ", "  * [x] ", "1. [/] "
_CHECKBOX_PREFIX = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s*\[.\]\s*")

# Same prefix, captured around the checkbox character for in-place rewrites
_CHECKBOX_CHAR = re.compile(r"^(\s*(?:[-*+]|\d+[.)])\s*\[)(.)(\])")


def strip_checkbox(line: str) -> str:
    """Remove the list marker and checkbox from a task line and trim it."""
    return _CHECKBOX_PREFIX.sub("", line, count=1).strip()


def parse_tasks(outline: Outline, lines: Sequence[str]) -> ParseResult:
    """
    Parse checkbox tasks into heading groups.

    Args:
        outline: Snapshot of heading and list-item positions
        lines: The note content split into lines

    Returns:
        ParseResult with groups ordered by heading line (the no-heading
        group first) and note-wide open/completed totals
    """
    if outline.list_items is None:
        return ParseResult.empty()

    # Insertion-ordered: tasks within a group stay in line order
    grouped: Dict[str, List[Task]] = {}
    heading_lines: Dict[str, int] = {}

    for item in outline.list_items:
        if not item.is_task:
            continue

        line_num = item.start_line
        if line_num < 0 or line_num >= len(lines):
            continue

        text = strip_checkbox(lines[line_num])
        if not text:
            continue

        task = Task(
            text=text,
            line=line_num,
            completed=item.checkbox_char != " ",
            indent=item.start_column,
        )

        heading = find_enclosing_heading(line_num, outline.headings)
        key = heading.text if heading else NO_HEADING
        if key not in grouped:
            grouped[key] = []
            heading_lines[key] = heading.start_line if heading else -1
        grouped[key].append(task)

    result = ParseResult()
    for heading_text, tasks in grouped.items():
        forest = build_forest(tasks)
        result.groups.append(
            TaskGroup(
                heading=heading_text,
                heading_line=heading_lines[heading_text],
                open_tasks=forest.open_tasks,
                completed_tasks=forest.completed_tasks,
                open_count=forest.open_count,
                completed_count=forest.completed_count,
            )
        )
        result.total_open += forest.open_count
        result.total_completed += forest.completed_count

    result.groups.sort(key=lambda g: g.heading_line)
    return result


# ---------------------------------------------------------------------------
# Toggling
# ---------------------------------------------------------------------------

def toggle_line(line: str, completed: bool) -> Optional[str]:
    """
    Flip the checkbox on a single task line.

    Only the character between the brackets changes: an open task gets
    ``x``, a completed one gets a space.

    Returns:
        The rewritten line, or None if the line has no leading checkbox
    """
    m = _CHECKBOX_CHAR.match(line)
    if not m:
        return None
    mark = " " if completed else "x"
    return f"{m.group(1)}{mark}{m.group(3)}{line[m.end():]}"


def toggle_task(content: str, task: Task) -> Optional[str]:
    """
    Return ``content`` with the checkbox on ``task.line`` flipped.

    Returns None (nothing to write) when the line no longer exists or no
    longer carries a checkbox.
    """
    lines = content.split("\n")
    if task.line < 0 or task.line >= len(lines):
        return None

    new_line = toggle_line(lines[task.line], task.completed)
    if new_line is None:
        return None

    lines[task.line] = new_line
    return "\n".join(lines)
