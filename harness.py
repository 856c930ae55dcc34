"""
Interactive harness for testing the task panel without MCP integration.

Usage:
    python harness.py <NOTE_PATH> [--completed] [--flat] [--alphabetical]

Renders the panel for the note once (smoke test), then drops you into a
REPL where you can toggle tasks and flip settings.
"""

import json
import sys
from pathlib import Path

# Add src/ to path so imports work
sys.path.insert(0, str(Path(__file__).parent / "src"))

from cache.note_store import NoteStore
from config.settings import PanelSettings
from panel.task_panel import TaskPanel


def show(panel: TaskPanel) -> None:
    view = panel.refresh()
    print(f"\n=== {view.note_path} ===")
    if view.message:
        print(f"  {view.message}")
    else:
        print(view.text)
    print(
        f"\n  open={view.result.total_open}  completed={view.result.total_completed}"
        f"  groups={len(view.result.groups)}\n"
    )


def _on_off(value: str) -> bool:
    return value.lower() in ("on", "true", "1", "yes")


def repl(panel: TaskPanel) -> None:
    """Simple REPL for interactive exploration."""
    print("Interactive mode. Type 'help' for commands, 'quit' to exit.\n")

    commands = {
        "help":      "Show this help",
        "show":      "Re-parse and render the panel",
        "toggle":    "Toggle a task. Usage: toggle <line>",
        "completed": "Show completed tasks. Usage: completed on|off",
        "group":     "Group by heading. Usage: group on|off",
        "sort":      "Sort order. Usage: sort file-order|alphabetical",
        "status":    "Show panel status",
        "quit":      "Exit",
    }

    while True:
        try:
            line = input("task-panel> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        parts = line.split()
        cmd = parts[0].lower()

        if cmd == "quit" or cmd == "exit":
            break

        elif cmd == "help":
            for k, v in commands.items():
                print(f"  {k:12s} {v}")

        elif cmd == "show":
            show(panel)

        elif cmd == "status":
            print(json.dumps(panel.status(), indent=2, default=str))

        elif cmd == "toggle":
            if len(parts) < 2 or not parts[1].isdigit():
                print("Usage: toggle <line>")
                continue
            task = panel.find_task(int(parts[1]))
            if task is None:
                print(f"  No task on line {parts[1]}")
                continue
            if panel.toggle(task):
                show(panel)
            else:
                print(f"  Line {parts[1]} changed, nothing written")

        elif cmd in ("completed", "group", "sort"):
            if len(parts) < 2:
                print(f"Usage: {commands[cmd].split('Usage: ')[1]}")
                continue
            try:
                if cmd == "completed":
                    panel.update_settings(show_completed=_on_off(parts[1]))
                elif cmd == "group":
                    panel.update_settings(group_by_heading=_on_off(parts[1]))
                else:
                    panel.update_settings(sort_order=parts[1])
            except ValueError as e:
                print(f"  Invalid value: {e}")
                continue
            show(panel)

        else:
            print(f"Unknown command: {cmd}. Type 'help' for available commands.")


def main():
    if len(sys.argv) < 2:
        print("Usage: python harness.py <NOTE_PATH> [--completed] [--flat] [--alphabetical]")
        sys.exit(1)

    note_path = Path(sys.argv[1]).resolve()
    if not note_path.is_file():
        print(f"Error: {note_path} is not a file")
        sys.exit(1)

    flags = set(sys.argv[2:])
    settings = PanelSettings(
        show_completed="--completed" in flags,
        group_by_heading="--flat" not in flags,
        sort_order="alphabetical" if "--alphabetical" in flags else "file-order",
    )

    panel = TaskPanel(NoteStore(), settings)
    panel.on_file_open(note_path)

    show(panel)
    repl(panel)

    print("Done.")


if __name__ == "__main__":
    main()
