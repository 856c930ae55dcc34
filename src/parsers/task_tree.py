"""
Task tree construction from a flat, line-ordered task list.

Parent/child relationships are reconstructed purely from relative
indentation: a task's parent is the nearest preceding task with a smaller
indent that has not been closed off by a same-or-shallower task in
between. Tabs vs. spaces never need normalising since indents are only
compared with each other.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from models.task import Task


@dataclass
class Forest:
    """Result of build_forest for one heading group."""

    roots: List[Task] = field(default_factory=list)
    open_tasks: List[Task] = field(default_factory=list)
    completed_tasks: List[Task] = field(default_factory=list)
    open_count: int = 0
    completed_count: int = 0


def count_tasks(tasks: Iterable[Task]) -> Tuple[int, int]:
    """
    Count open and completed tasks across a forest, descendants included.

    Each task is counted by its own checkbox, independent of its ancestors.

    Returns:
        (open_count, completed_count)
    """
    open_count = 0
    completed_count = 0
    for task in tasks:
        if task.completed:
            completed_count += 1
        else:
            open_count += 1
        child_open, child_completed = count_tasks(task.children)
        open_count += child_open
        completed_count += child_completed
    return open_count, completed_count


def build_forest(flat_tasks: Sequence[Task]) -> Forest:
    """
    Link tasks into a forest and split the roots by completion.

    The tasks' ``children`` lists are filled in place; callers pass freshly
    built Task objects with empty children.

    Args:
        flat_tasks: Tasks of one heading group, ordered by line

    Returns:
        Forest with roots bucketed by the root's own checkbox and counts
        covering every task
    """
    forest = Forest()
    stack: List[Task] = []

    for task in flat_tasks:
        # A same-or-shallower task can never be this task's parent
        while stack and stack[-1].indent >= task.indent:
            stack.pop()

        if stack:
            stack[-1].children.append(task)
        else:
            forest.roots.append(task)
        stack.append(task)

    for root in forest.roots:
        if root.completed:
            forest.completed_tasks.append(root)
        else:
            forest.open_tasks.append(root)

    forest.open_count, forest.completed_count = count_tasks(forest.roots)
    return forest
