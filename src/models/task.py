"""
Core task data models.

A Task is one checkbox list item from the active note. Tasks are rebuilt
from scratch on every parse cycle; the line number is the only link back to
the source note and is what toggling and navigation use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

# Group label for tasks that precede the first heading (or notes with none)
NO_HEADING = "(No heading)"


@dataclass
class Task:
    """
    A single checkbox item parsed from a note.

    ``indent`` is the column where the list marker starts. It is only ever
    compared against other tasks' indents, never interpreted as a depth.
    """

    text: str
    line: int
    completed: bool = False
    indent: int = 0
    children: List[Task] = field(default_factory=list)

    def all_tasks(self) -> List[Task]:
        """Return this task and all descendants as a flat list."""
        result = [self]
        for child in self.children:
            result.extend(child.all_tasks())
        return result


@dataclass
class TaskGroup:
    """
    The tasks whose nearest preceding heading is ``heading``.

    open_tasks / completed_tasks hold root tasks only, split by the root's
    own checkbox. The counts cover the whole forest including descendants.
    """

    heading: str
    heading_line: int
    open_tasks: List[Task] = field(default_factory=list)
    completed_tasks: List[Task] = field(default_factory=list)
    open_count: int = 0
    completed_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.open_count == 0 and self.completed_count == 0

    def all_tasks(self) -> List[Task]:
        """Return every task in the group, open roots first."""
        result = []
        for task in self.open_tasks + self.completed_tasks:
            result.extend(task.all_tasks())
        return result


@dataclass
class ParseResult:
    """Ordered heading groups plus note-wide totals."""

    groups: List[TaskGroup] = field(default_factory=list)
    total_open: int = 0
    total_completed: int = 0

    @classmethod
    def empty(cls) -> ParseResult:
        return cls()

    def all_tasks(self) -> List[Task]:
        result = []
        for group in self.groups:
            result.extend(group.all_tasks())
        return result

    def find_by_line(self, line: int):
        """Find the task parsed from ``line``, or None."""
        for task in self.all_tasks():
            if task.line == line:
                return task
        return None
