"""
Leading + trailing edge debounce on top of threading.Timer.

The first call after a quiet period runs immediately. Calls that arrive
while the timer is running are collapsed into a single trailing call that
runs ``wait`` seconds after the last of them.
"""

import logging
import threading
from typing import Any, Callable, Optional, Tuple

log = logging.getLogger(__name__)

DEFAULT_WAIT = 0.3


class Debouncer:
    """
    Wrap ``fn`` so bursts of calls collapse into at most two invocations.

    Usage:
        refresh = Debouncer(panel.refresh, wait=0.3)
        refresh()   # runs now
        refresh()   # deferred
        refresh()   # replaces the deferred call; runs 0.3s from now
    """

    def __init__(
        self, fn: Callable[..., Any], wait: float = DEFAULT_WAIT, leading: bool = True
    ) -> None:
        self._fn = fn
        self._wait = wait
        self._leading = leading
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[tuple, dict]] = None
        self.calls = 0

    def __call__(self, *args, **kwargs) -> None:
        run_now = False
        with self._lock:
            if self._timer is None and self._leading:
                run_now = True
            else:
                self._pending = (args, kwargs)
            self._restart_timer()

        if run_now:
            self._invoke(args, kwargs)

    def _restart_timer(self) -> None:
        """Caller holds _lock."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = threading.Timer(self._wait, self._on_timeout)
        self._timer.daemon = True
        self._timer.start()

    def _on_timeout(self) -> None:
        with self._lock:
            self._timer = None
            pending, self._pending = self._pending, None
        if pending is not None:
            self._invoke(*pending)

    def _invoke(self, args: tuple, kwargs: dict) -> None:
        self.calls += 1
        try:
            self._fn(*args, **kwargs)
        except Exception:
            log.exception("Debounced call to %r failed", self._fn)

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def flush(self) -> None:
        """Run the pending trailing call now, if there is one."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            pending, self._pending = self._pending, None
        if pending is not None:
            self._invoke(*pending)

    def cancel(self) -> None:
        """Drop the pending trailing call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None
