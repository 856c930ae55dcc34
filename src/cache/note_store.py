"""
Thread-safe store for the active note.

Design:
    CachedNote  — path, raw content, Outline snapshot, mtime
    _lock       — threading.RLock guarding every read and write

The store is the only component that touches the note on disk. Parsing is
never done here; callers take a NoteSnapshot and hand it to parse_tasks.
Toggles read the current file, rewrite one checkbox and write the whole
content back while holding the lock, so two toggles never interleave.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from models.outline import Outline
from models.task import Task
from parsers.outline_scanner import scan_content
from parsers.task_parser import toggle_task

log = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md"})


def _read_note(path: Path) -> str:
    # newline="" keeps \r\n intact so write-back is byte-identical
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _write_note(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


@dataclass
class CachedNote:
    """The active note as last read from disk."""

    path: Path
    content: str
    outline: Outline
    mtime: float


@dataclass(frozen=True)
class NoteSnapshot:
    """Immutable view of the active note handed to the parser."""

    path: Optional[Path]
    lines: List[str]
    outline: Outline

    @property
    def is_markdown(self) -> bool:
        return self.path is not None and self.path.suffix.lower() in MARKDOWN_SUFFIXES


class NoteStore:
    """
    Holds the active note and performs write-through toggles.

    Usage:
        store = NoteStore()
        store.open(Path("notes/today.md"))
        snap = store.snapshot()
        store.toggle(task)
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._path: Optional[Path] = None
        self._note: Optional[CachedNote] = None
        self._last_loaded: Optional[datetime] = None
        self._writes = 0

    # ------------------------------------------------------------------
    # Active note
    # ------------------------------------------------------------------

    @property
    def path(self) -> Optional[Path]:
        with self._lock:
            return self._path

    def open(self, path: Optional[Path]) -> None:
        """
        Make ``path`` the active note (None clears it).

        Non-markdown files are accepted as active but never read.
        """
        with self._lock:
            self._path = path
            self._note = None
            if path is not None:
                log.info("Active note: %s", path)
                self._load()
            else:
                log.info("Active note cleared")

    def on_renamed(self, old_path: Path, new_path: Path) -> bool:
        """Follow a rename of the active note. Returns True if it applied."""
        with self._lock:
            if self._path is None or self._path != old_path:
                return False
            log.info("Active note renamed: %s -> %s", old_path, new_path)
            self._path = new_path
            if self._note is not None:
                self._note.path = new_path
            return True

    def on_deleted(self, path: Path) -> bool:
        """Clear the active note if it was deleted. Returns True if it applied."""
        with self._lock:
            if self._path is None or self._path != path:
                return False
            log.info("Active note deleted: %s", path)
            self._path = None
            self._note = None
            return True

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load(self) -> bool:
        """Read the active note from disk (caller holds _lock)."""
        path = self._path
        if path is None or path.suffix.lower() not in MARKDOWN_SUFFIXES:
            return False
        try:
            mtime = path.stat().st_mtime
            content = _read_note(path)
        except OSError:
            log.warning("Could not read note %s", path)
            self._note = None
            return False

        self._note = CachedNote(
            path=path, content=content, outline=scan_content(content), mtime=mtime
        )
        self._last_loaded = datetime.now()
        return True

    def refresh(self, force: bool = False) -> bool:
        """
        Re-read the active note if it changed on disk.

        Returns True if new content was loaded.
        """
        with self._lock:
            if self._path is None:
                return False
            if not force and self._note is not None:
                try:
                    mtime = self._path.stat().st_mtime
                except OSError:
                    return False
                if mtime <= self._note.mtime:
                    return False
            return self._load()

    def is_stale(self) -> bool:
        """Return True if the note on disk is newer than the cached copy."""
        with self._lock:
            if self._path is None:
                return False
            try:
                mtime = self._path.stat().st_mtime
            except OSError:
                return False
            return self._note is None or self._note.mtime < mtime

    def snapshot(self) -> NoteSnapshot:
        """Return the cached note as lines + outline."""
        with self._lock:
            if self._note is None:
                return NoteSnapshot(path=self._path, lines=[], outline=Outline())
            return NoteSnapshot(
                path=self._path,
                lines=self._note.content.split("\n"),
                outline=self._note.outline,
            )

    def content(self) -> Optional[str]:
        with self._lock:
            return self._note.content if self._note else None

    # ------------------------------------------------------------------
    # Mutations (write-through to disk)
    # ------------------------------------------------------------------

    def toggle(self, task: Task) -> bool:
        """
        Flip the checkbox on ``task.line`` in the active note.

        The full content is re-read, one line rewritten, and the full
        content written back. If the line vanished in the meantime nothing
        is written.

        Returns:
            True if the note was written
        """
        with self._lock:
            path = self._path
            if path is None or path.suffix.lower() not in MARKDOWN_SUFFIXES:
                return False
            try:
                content = _read_note(path)
            except OSError:
                log.warning("Toggle skipped, could not read %s", path)
                return False

            new_content = toggle_task(content, task)
            if new_content is None:
                log.debug("Toggle skipped, line %d has no checkbox", task.line)
                return False

            _write_note(path, new_content)
            self._writes += 1
            log.debug("Toggled line %d in %s", task.line, path)
            self._load()
            return True

    # ------------------------------------------------------------------
    # Status / diagnostics
    # ------------------------------------------------------------------

    def status(self) -> dict:
        with self._lock:
            note = self._note
            return {
                "active_note": str(self._path) if self._path else None,
                "loaded": note is not None,
                "lines": len(note.content.split("\n")) if note else 0,
                "headings": len(note.outline.headings) if note else 0,
                "list_items": len(note.outline.list_items or ()) if note else 0,
                "last_loaded": self._last_loaded.isoformat() if self._last_loaded else None,
                "writes": self._writes,
            }
