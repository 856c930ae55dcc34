"""
Plain-text rendering of the task panel.

Mirrors the panel layout: an empty-state message, or heading groups (or a
flat list) of task rows with children indented under their parent.
Rendering never mutates the parsed tasks; alphabetical order is applied
with sorted() at each level.
"""

from typing import Iterable, List

from config.settings import PanelSettings
from models.task import Task, TaskGroup

INDENT = "  "


def _ordered(tasks: Iterable[Task], settings: PanelSettings) -> List[Task]:
    if settings.sort_order == "alphabetical":
        return sorted(tasks, key=lambda t: t.text.lower())
    return list(tasks)


def render_task_row(task: Task, depth: int = 0) -> str:
    """Render one task as ``- [x] text  (line N)``."""
    mark = "x" if task.completed else " "
    return f"{INDENT * depth}- [{mark}] {task.text}  (line {task.line})"


def render_task_list(
    tasks: Iterable[Task], settings: PanelSettings, depth: int = 0
) -> List[str]:
    """Render tasks and, beneath each, all of its descendants."""
    rows: List[str] = []
    for task in _ordered(tasks, settings):
        rows.append(render_task_row(task, depth))
        rows.extend(render_task_list(task.children, settings, depth + 1))
    return rows


def group_is_visible(group: TaskGroup, settings: PanelSettings) -> bool:
    """A group is shown if it has open tasks, or completed ones being shown."""
    if group.open_count > 0:
        return True
    return settings.show_completed and group.completed_count > 0


def render_grouped(groups: Iterable[TaskGroup], settings: PanelSettings) -> List[str]:
    rows: List[str] = []
    for group in groups:
        if not group_is_visible(group, settings):
            continue
        if rows:
            rows.append("")
        rows.append(f"## {group.heading}")
        rows.extend(render_task_list(group.open_tasks, settings))
        if settings.show_completed:
            rows.extend(render_task_list(group.completed_tasks, settings))
    return rows


def render_flat(groups: List[TaskGroup], settings: PanelSettings) -> List[str]:
    rows: List[str] = []
    for group in groups:
        rows.extend(render_task_list(group.open_tasks, settings))
    if settings.show_completed:
        for group in groups:
            rows.extend(render_task_list(group.completed_tasks, settings))
    return rows


def render_groups(groups: List[TaskGroup], settings: PanelSettings) -> str:
    """Render parsed groups according to the panel settings."""
    if settings.group_by_heading:
        rows = render_grouped(groups, settings)
    else:
        rows = render_flat(groups, settings)
    return "\n".join(rows)
