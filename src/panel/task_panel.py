"""
Task panel: the event → debounce → parse → render pipeline.

The panel reacts to host notifications about the active note:

    on_file_open(path)       switch note, refresh now
    on_changed(path)         debounced refresh (edits arrive per keystroke)
    on_renamed(old, new)     follow the note, refresh now
    on_deleted(path)         clear the note, refresh now
    redraw()                 refresh now (e.g. after a settings change)

Every refresh re-reads the store, re-parses from scratch and replaces the
current PanelView. Nothing from an earlier parse is reused.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from cache.note_store import NoteStore
from config.settings import PanelSettings, save_settings
from models.task import ParseResult, Task
from panel.render import render_groups
from parsers.task_parser import parse_tasks
from utils.debounce import DEFAULT_WAIT, Debouncer

log = logging.getLogger(__name__)

MSG_NO_NOTE = "No active note"
MSG_NOT_MARKDOWN = "Not a markdown file"
MSG_NO_OPEN_TASKS = "No open tasks"


@dataclass
class PanelView:
    """What the panel currently shows."""

    note_path: Optional[Path] = None
    result: ParseResult = field(default_factory=ParseResult)
    message: Optional[str] = MSG_NO_NOTE
    text: str = ""
    rendered_at: Optional[datetime] = None


class TaskPanel:
    """
    Keeps a rendered view of the active note's tasks up to date.

    ``on_render`` is called with every new PanelView, from whichever thread
    ran the refresh (the caller's thread, or the debounce timer thread).
    """

    def __init__(
        self,
        store: NoteStore,
        settings: Optional[PanelSettings] = None,
        *,
        settings_path: Optional[Path] = None,
        debounce_wait: float = DEFAULT_WAIT,
        on_render: Optional[Callable[[PanelView], None]] = None,
    ) -> None:
        self._store = store
        self._settings = settings or PanelSettings()
        self._settings_path = settings_path
        self._on_render = on_render
        self._lock = threading.RLock()
        self._view = PanelView()
        self._refreshes = 0
        self.debounced_refresh = Debouncer(self.refresh, wait=debounce_wait, leading=True)

    @property
    def store(self) -> NoteStore:
        return self._store

    @property
    def settings(self) -> PanelSettings:
        return self._settings

    @property
    def view(self) -> PanelView:
        with self._lock:
            return self._view

    # ------------------------------------------------------------------
    # Host notifications
    # ------------------------------------------------------------------

    def on_file_open(self, path: Optional[Path]) -> None:
        self.debounced_refresh.cancel()
        self._store.open(path)
        self.refresh()

    def on_changed(self, path: Path) -> None:
        if self._store.path is None or path != self._store.path:
            return
        log.debug("Note changed: %s", path)
        self.debounced_refresh()

    def on_renamed(self, old_path: Path, new_path: Path) -> None:
        if self._store.on_renamed(old_path, new_path):
            self.refresh()

    def on_deleted(self, path: Path) -> None:
        if self._store.on_deleted(path):
            self.debounced_refresh.cancel()
            self.refresh()

    def redraw(self) -> None:
        """Re-render without waiting for a change notification."""
        self.refresh()

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh(self) -> PanelView:
        """Re-read, re-parse and re-render the active note."""
        with self._lock:
            self._store.refresh()
            snap = self._store.snapshot()
            view = PanelView(note_path=snap.path, rendered_at=datetime.now())

            if snap.path is None:
                view.message = MSG_NO_NOTE
            elif not snap.is_markdown:
                view.message = MSG_NOT_MARKDOWN
            else:
                view.result = parse_tasks(snap.outline, snap.lines)
                if view.result.total_open == 0 and not self._settings.show_completed:
                    view.message = MSG_NO_OPEN_TASKS
                else:
                    view.message = None
                    view.text = render_groups(view.result.groups, self._settings)

            self._view = view
            self._refreshes += 1

        log.debug(
            "Panel refreshed: %s (%d open, %d completed)",
            view.note_path,
            view.result.total_open,
            view.result.total_completed,
        )
        if self._on_render is not None:
            self._on_render(view)
        return view

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def find_task(self, line: int) -> Optional[Task]:
        """Return the task on ``line`` in the current view, or None."""
        return self.view.result.find_by_line(line)

    def toggle(self, task: Task) -> bool:
        """
        Toggle ``task`` in the note and refresh.

        Returns False when the target line vanished and nothing was written.
        """
        written = self._store.toggle(task)
        if written:
            self.refresh()
        return written

    def update_settings(self, **changes) -> PanelSettings:
        """
        Apply setting changes, persist them and redraw.

        Raises pydantic.ValidationError for invalid values.
        """
        with self._lock:
            updated = self._settings.model_copy()
            for key, value in changes.items():
                if value is None:
                    continue
                if key not in PanelSettings.model_fields:
                    raise ValueError(f"Unknown setting '{key}'")
                setattr(updated, key, value)
            self._settings = updated

        if self._settings_path is not None:
            save_settings(self._settings_path, updated)
        self.redraw()
        return updated

    def status(self) -> dict:
        view = self.view
        return {
            **self._store.status(),
            "message": view.message,
            "total_open": view.result.total_open,
            "total_completed": view.result.total_completed,
            "groups": len(view.result.groups),
            "refreshes": self._refreshes,
            "rendered_at": view.rendered_at.isoformat() if view.rendered_at else None,
        }
