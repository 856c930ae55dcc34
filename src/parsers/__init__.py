from .outline_index import find_enclosing_heading
from .outline_scanner import scan_content, scan_lines
from .task_parser import parse_tasks, strip_checkbox, toggle_line, toggle_task
from .task_tree import Forest, build_forest, count_tasks

__all__ = [
    "find_enclosing_heading",
    "scan_content",
    "scan_lines",
    "parse_tasks",
    "strip_checkbox",
    "toggle_line",
    "toggle_task",
    "Forest",
    "build_forest",
    "count_tasks",
]
