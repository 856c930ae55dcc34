from .task import NO_HEADING, Task, TaskGroup, ParseResult
from .outline import HeadingInfo, ListItemInfo, Outline

__all__ = [
    "NO_HEADING",
    "Task",
    "TaskGroup",
    "ParseResult",
    "HeadingInfo",
    "ListItemInfo",
    "Outline",
]
