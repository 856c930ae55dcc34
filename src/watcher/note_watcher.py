"""
Active-note watcher — polling-based.

Docker volume mounts from Windows do not forward filesystem events (inotify)
into the container, so we poll the active note's mtime instead of relying on
event-based observers.

The watcher runs a daemon thread that:
1. Stats the panel's active note every POLL_INTERVAL seconds
2. Sends a change notification when the mtime moved
3. Sends a delete notification when the file disappeared

Change notifications go through the panel's debouncer, so a burst of saves
still produces one leading and one trailing re-parse.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

# Default polling interval in seconds (configurable via POLL_INTERVAL env var)
_DEFAULT_POLL_INTERVAL = 1.0


class NoteWatcher:
    """
    Polling watcher for the panel's active note.

    Usage:
        watcher = NoteWatcher(panel)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(self, panel, poll_interval: Optional[float] = None) -> None:
        self._panel = panel
        self._poll_interval = poll_interval or float(
            os.environ.get("POLL_INTERVAL", _DEFAULT_POLL_INTERVAL)
        )
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        # Path and mtime seen on the last poll cycle
        self._known_path: Optional[Path] = None
        self._known_mtime: Optional[float] = None

    def start(self) -> None:
        """Start the polling thread (daemon)."""
        log.info("Starting note watcher (polling every %.1fs)", self._poll_interval)
        self._known_path, self._known_mtime = self._snapshot()

        self._thread = threading.Thread(
            target=self._poll_loop, daemon=True, name="note-watcher"
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the poll thread to stop and wait for it."""
        log.info("Stopping note watcher")
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=self._poll_interval + 2)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _poll_loop(self) -> None:
        """Main polling loop — runs until stop_event is set."""
        while not self._stop_event.is_set():
            self._stop_event.wait(self._poll_interval)
            if self._stop_event.is_set():
                break
            try:
                self._check_for_changes()
            except Exception:
                log.exception("Error during poll cycle")

    def _snapshot(self):
        """Return (active path, mtime or None if missing)."""
        path = self._panel.store.path
        if path is None:
            return None, None
        try:
            return path, path.stat().st_mtime
        except OSError:
            return path, None

    def _check_for_changes(self) -> None:
        """Single poll cycle: compare the active note against the last poll."""
        path, mtime = self._snapshot()

        if path != self._known_path:
            # The panel switched notes; start tracking the new one
            self._known_path, self._known_mtime = path, mtime
            return

        if path is None:
            return

        if mtime is None:
            log.debug("Active note deleted: %s", path)
            self._panel.on_deleted(path)
            self._known_path, self._known_mtime = None, None
            return

        if self._known_mtime is None or mtime != self._known_mtime:
            log.debug("Active note modified: %s", path)
            self._panel.on_changed(path)

        self._known_mtime = mtime
