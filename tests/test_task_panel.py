"""
Tests for panel/task_panel.py.

Covers:
- Empty states: no note, non-markdown, no open tasks
- Rendering after open / change / rename / delete notifications
- Change notifications for other files are ignored
- Debounced change handling (leading call + collapsed trailing call)
- toggle: writes through and re-renders; vanished line is a no-op
- update_settings: persistence, validation, redraw
"""

import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from pydantic import ValidationError

from cache.note_store import NoteStore
from config.settings import PanelSettings, load_settings
from models.task import NO_HEADING
from panel.task_panel import (
    MSG_NO_NOTE,
    MSG_NO_OPEN_TASKS,
    MSG_NOT_MARKDOWN,
    TaskPanel,
)

NOTE = "# A\n- [ ] one\n  - [x] two\n- [ ] three"


def _write(path: Path, content: str) -> None:
    """Rewrite the note with an mtime strictly newer than the previous one."""
    previous = path.stat().st_mtime
    path.write_text(content, encoding="utf-8")
    os.utime(path, (previous + 10, previous + 10))


@pytest.fixture
def note(tmp_path):
    path = tmp_path / "note.md"
    path.write_text(NOTE, encoding="utf-8")
    return path


@pytest.fixture
def panel(tmp_path, note):
    renders = []
    p = TaskPanel(
        NoteStore(),
        settings_path=tmp_path / "settings.json",
        debounce_wait=30.0,
        on_render=renders.append,
    )
    p.renders = renders
    p.on_file_open(note)
    yield p
    p.debounced_refresh.cancel()


# ---------------------------------------------------------------------------
# Empty states
# ---------------------------------------------------------------------------

class TestEmptyStates:
    def test_no_active_note(self):
        view = TaskPanel(NoteStore()).refresh()
        assert view.message == MSG_NO_NOTE
        assert view.text == ""

    def test_not_markdown(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("- [ ] x")
        panel = TaskPanel(NoteStore())
        panel.on_file_open(path)
        assert panel.view.message == MSG_NOT_MARKDOWN

    def test_no_open_tasks(self, tmp_path):
        path = tmp_path / "done.md"
        path.write_text("- [x] finished\n")
        panel = TaskPanel(NoteStore())
        panel.on_file_open(path)
        assert panel.view.message == MSG_NO_OPEN_TASKS
        assert panel.view.result.total_completed == 1

    def test_no_open_tasks_but_showing_completed(self, tmp_path):
        path = tmp_path / "done.md"
        path.write_text("- [x] finished\n")
        panel = TaskPanel(NoteStore(), PanelSettings(show_completed=True))
        panel.on_file_open(path)
        assert panel.view.message is None
        assert "finished" in panel.view.text


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class TestNotifications:
    def test_open_renders(self, panel):
        view = panel.view
        assert view.message is None
        assert [g.heading for g in view.result.groups] == ["A"]
        assert view.result.total_open == 2
        assert view.result.total_completed == 1
        assert len(panel.renders) == 1

    def test_change_reparses(self, panel, note):
        _write(note, NOTE + "\n- [ ] four")
        panel.on_changed(note)
        assert panel.view.result.total_open == 3

    def test_change_to_other_file_ignored(self, panel, tmp_path):
        panel.on_changed(tmp_path / "other.md")
        assert len(panel.renders) == 1

    def test_burst_of_changes_collapses(self, panel, note):
        _write(note, NOTE + "\n- [ ] four")
        panel.on_changed(note)
        _write(note, NOTE + "\n- [ ] four\n- [ ] five")
        panel.on_changed(note)
        _write(note, NOTE + "\n- [ ] four\n- [ ] five\n- [ ] six")
        panel.on_changed(note)

        # Leading call only so far
        assert len(panel.renders) == 2
        assert panel.view.result.total_open == 3

        panel.debounced_refresh.flush()
        assert len(panel.renders) == 3
        assert panel.view.result.total_open == 5

    def test_rename_follows_note(self, panel, note, tmp_path):
        new = tmp_path / "moved.md"
        note.rename(new)
        panel.on_renamed(note, new)
        assert panel.view.note_path == new
        assert panel.view.result.total_open == 2

    def test_delete_clears_view(self, panel, note):
        note.unlink()
        panel.on_deleted(note)
        assert panel.view.message == MSG_NO_NOTE
        assert panel.view.result.groups == []

    def test_file_switch(self, panel, tmp_path):
        other = tmp_path / "other.md"
        other.write_text("- [ ] loose\n")
        panel.on_file_open(other)
        assert [g.heading for g in panel.view.result.groups] == [NO_HEADING]

    def test_redraw_renders_again(self, panel):
        panel.redraw()
        assert len(panel.renders) == 2


# ---------------------------------------------------------------------------
# Toggle
# ---------------------------------------------------------------------------

class TestToggle:
    def test_toggle_open_task(self, panel, note):
        task = panel.find_task(1)
        assert task.text == "one"
        assert panel.toggle(task) is True
        assert note.read_text(encoding="utf-8").split("\n")[1] == "- [x] one"
        # Re-rendered: "one" is now a completed root
        group = panel.view.result.groups[0]
        assert [t.text for t in group.completed_tasks] == ["one"]

    def test_toggle_back_restores_content(self, panel, note):
        before = note.read_bytes()
        panel.toggle(panel.find_task(3))
        panel.toggle(panel.find_task(3))
        assert note.read_bytes() == before

    def test_toggle_nested_completed(self, panel, note):
        panel.toggle(panel.find_task(2))
        assert note.read_text(encoding="utf-8").split("\n")[2] == "  - [ ] two"

    def test_find_missing_task(self, panel):
        assert panel.find_task(0) is None

    def test_vanished_line_noop(self, panel, note):
        task = panel.find_task(3)
        note.write_text("# A\n- [ ] one", encoding="utf-8")
        assert panel.toggle(task) is False
        assert note.read_text(encoding="utf-8") == "# A\n- [ ] one"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class TestSettings:
    def test_update_persists_and_redraws(self, panel, tmp_path):
        settings = panel.update_settings(show_completed=True)
        assert settings.show_completed is True
        assert load_settings(tmp_path / "settings.json").show_completed is True
        assert len(panel.renders) == 2

    def test_none_values_ignored(self, panel):
        panel.update_settings(sort_order="alphabetical")
        settings = panel.update_settings(sort_order=None, show_completed=None)
        assert settings.sort_order == "alphabetical"
        assert settings.show_completed is False

    def test_invalid_value_rejected(self, panel):
        with pytest.raises(ValidationError):
            panel.update_settings(sort_order="random")
        assert panel.settings.sort_order == "file-order"

    def test_unknown_setting_rejected(self, panel):
        with pytest.raises(ValueError):
            panel.update_settings(colour="red")

    def test_flat_layout_applied(self, panel):
        panel.update_settings(group_by_heading=False)
        assert "## A" not in panel.view.text
        assert "- [ ] one  (line 1)" in panel.view.text

    def test_status(self, panel):
        st = panel.status()
        assert st["total_open"] == 2
        assert st["groups"] == 1
        assert st["refreshes"] == 1
        assert st["message"] is None
