"""
Panel tool handlers.

Core logic lives in handle_* functions (return dicts).
MCP wrappers in register_panel_tools() serialize to JSON strings.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

log = logging.getLogger(__name__)


def _task_to_dict(task, include_children: bool = True) -> dict:
    """Serialize a Task to a JSON-serializable dict."""
    d = {
        "text": task.text,
        "line": task.line,
        "completed": task.completed,
        "indent": task.indent,
    }
    if include_children:
        d["children"] = [_task_to_dict(c, include_children=True) for c in task.children]
    return d


def _group_to_dict(group) -> dict:
    return {
        "heading": group.heading,
        "heading_line": group.heading_line,
        "open_count": group.open_count,
        "completed_count": group.completed_count,
        "open_tasks": [_task_to_dict(t) for t in group.open_tasks],
        "completed_tasks": [_task_to_dict(t) for t in group.completed_tasks],
    }


# ---------------------------------------------------------------------------
# Handler functions (return dicts, shared by MCP tools and REST API)
# ---------------------------------------------------------------------------


def handle_panel_show(panel, *, refresh: bool = False) -> dict:
    view = panel.refresh() if refresh else panel.view
    return {
        "note_path": str(view.note_path) if view.note_path else None,
        "message": view.message,
        "total_open": view.result.total_open,
        "total_completed": view.result.total_completed,
        "groups": [_group_to_dict(g) for g in view.result.groups],
        "text": view.text,
    }


def handle_panel_text(panel) -> str:
    view = panel.view
    return view.message if view.message else view.text


def handle_panel_open(panel, *, file_path: Optional[str]) -> dict:
    if not file_path:
        panel.on_file_open(None)
        return handle_panel_show(panel)
    path = Path(file_path)
    if not path.is_file():
        return {"error": f"Note '{file_path}' not found"}
    panel.on_file_open(path)
    return handle_panel_show(panel)


def handle_task_toggle(panel, *, line: int) -> dict:
    task = panel.find_task(line)
    if task is None:
        return {"error": f"No task on line {line}"}
    if not panel.toggle(task):
        return {
            "error": f"Line {line} changed before it could be toggled",
            "conflict": True,
        }
    log.info("Toggled task on line %d (%s)", line, task.text)
    return {"line": line, "text": task.text, "completed": not task.completed}


def handle_settings_get(panel) -> dict:
    return panel.settings.model_dump()


def handle_settings_update(
    panel,
    *,
    show_completed: Optional[bool] = None,
    group_by_heading: Optional[bool] = None,
    sort_order: Optional[str] = None,
) -> dict:
    settings = panel.update_settings(
        show_completed=show_completed,
        group_by_heading=group_by_heading,
        sort_order=sort_order,
    )
    return settings.model_dump()


def handle_panel_status(panel) -> dict:
    return panel.status()


# ---------------------------------------------------------------------------
# MCP registration
# ---------------------------------------------------------------------------


def register_panel_tools(mcp: FastMCP, panel) -> None:
    """Register all panel tools on the MCP server."""

    @mcp.tool()
    def panel_show(refresh: bool = False) -> str:
        """
        Show the tasks of the active note, grouped by heading.

        Args:
            refresh: Re-read and re-parse the note before answering

        Returns:
            JSON with groups (open/completed root tasks with children),
            totals, an empty-state message if any, and the rendered text
        """
        return json.dumps(handle_panel_show(panel, refresh=refresh), indent=2)

    @mcp.tool()
    def panel_open(file_path: str) -> str:
        """
        Switch the panel to a different note.

        Args:
            file_path: Path to a markdown note

        Returns:
            The panel JSON for the new note, or an error
        """
        try:
            return json.dumps(handle_panel_open(panel, file_path=file_path), indent=2)
        except Exception as e:
            return json.dumps({"error": str(e)})

    @mcp.tool()
    def task_toggle(line: int) -> str:
        """
        Check or uncheck the task on a line of the active note.

        Only the character inside the checkbox brackets is changed.

        Args:
            line: Zero-based line number of the task (as shown by panel_show)

        Returns:
            JSON with the task's new state, or an error
        """
        try:
            return json.dumps(handle_task_toggle(panel, line=line), indent=2)
        except Exception as e:
            return json.dumps({"error": str(e)})

    @mcp.tool()
    def settings_get() -> str:
        """Show the current panel settings."""
        return json.dumps(handle_settings_get(panel), indent=2)

    @mcp.tool()
    def settings_update(
        show_completed: Optional[bool] = None,
        group_by_heading: Optional[bool] = None,
        sort_order: Optional[str] = None,
    ) -> str:
        """
        Update panel settings. Only fields you pass are changed.

        Args:
            show_completed: Show completed tasks after the open ones
            group_by_heading: Group tasks under their heading, else a flat list
            sort_order: "file-order" or "alphabetical"

        Returns:
            The updated settings JSON or an error
        """
        try:
            return json.dumps(
                handle_settings_update(
                    panel,
                    show_completed=show_completed,
                    group_by_heading=group_by_heading,
                    sort_order=sort_order,
                ),
                indent=2,
            )
        except Exception as e:
            return json.dumps({"error": str(e)})

    @mcp.tool()
    def panel_status() -> str:
        """
        Show panel diagnostics.

        Returns:
            JSON with the active note, outline sizes, totals and refresh count
        """
        return json.dumps(handle_panel_status(panel), indent=2)
