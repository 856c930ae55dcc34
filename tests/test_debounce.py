"""
Tests for utils/debounce.py.

Covers:
- Leading edge: the first call runs immediately
- Bursts collapse into a single trailing call with the latest arguments
- flush / cancel
- A failing callback does not break the debouncer
"""

import sys
import threading
import time
from pathlib import Path
from unittest.mock import Mock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.debounce import Debouncer

# Long enough that nothing fires on its own during a test unless we wait
LONG_WAIT = 30.0


class TestLeadingEdge:
    def test_first_call_runs_immediately(self):
        fn = Mock()
        d = Debouncer(fn, wait=LONG_WAIT)
        d("a")
        fn.assert_called_once_with("a")
        assert not d.pending
        d.cancel()

    def test_burst_defers_later_calls(self):
        fn = Mock()
        d = Debouncer(fn, wait=LONG_WAIT)
        d(1)
        d(2)
        d(3)
        assert fn.call_count == 1
        assert d.pending
        d.cancel()

    def test_no_leading_edge(self):
        fn = Mock()
        d = Debouncer(fn, wait=LONG_WAIT, leading=False)
        d()
        fn.assert_not_called()
        assert d.pending
        d.cancel()


class TestTrailingEdge:
    def test_flush_runs_latest_call_once(self):
        fn = Mock()
        d = Debouncer(fn, wait=LONG_WAIT)
        d(1)
        d(2)
        d(3)
        d.flush()
        assert [c.args for c in fn.call_args_list] == [(1,), (3,)]
        d.flush()
        assert fn.call_count == 2

    def test_cancel_drops_pending(self):
        fn = Mock()
        d = Debouncer(fn, wait=LONG_WAIT)
        d(1)
        d(2)
        d.cancel()
        d.flush()
        assert fn.call_count == 1

    def test_after_cancel_next_call_is_leading(self):
        fn = Mock()
        d = Debouncer(fn, wait=LONG_WAIT)
        d(1)
        d.cancel()
        d(2)
        assert fn.call_count == 2
        d.cancel()

    def test_timer_fires_trailing_call(self):
        done = threading.Event()
        calls = []

        def fn(value):
            calls.append(value)
            if value == "last":
                done.set()

        d = Debouncer(fn, wait=0.05)
        d("first")
        d("middle")
        d("last")
        assert done.wait(timeout=5)
        assert calls == ["first", "last"]

    def test_quiet_period_without_pending_calls_nothing(self):
        fn = Mock()
        d = Debouncer(fn, wait=0.05)
        d()
        time.sleep(0.3)
        assert fn.call_count == 1


class TestErrors:
    def test_exception_is_logged_not_raised(self):
        fn = Mock(side_effect=RuntimeError("boom"))
        d = Debouncer(fn, wait=LONG_WAIT)
        d()
        d()
        d.flush()
        assert fn.call_count == 2
        assert d.calls == 2
