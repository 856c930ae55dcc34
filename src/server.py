"""
Task panel server entry point.

Startup sequence:
1. Read NOTE_PATH, SETTINGS_PATH and DEBOUNCE_MS from environment
2. Load panel settings
3. Open the initial note (if any) and render the panel
4. Start NoteWatcher daemon thread
5. Register all MCP tools
6. Start REST API server in background thread (if API_ENABLED)
7. Run MCP server (stdio transport)
"""

import logging
import os
import sys
import threading
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from cache.note_store import NoteStore
from config.settings import DEFAULT_SETTINGS_PATH, load_settings
from panel.task_panel import TaskPanel
from tools import register_panel_tools
from watcher.note_watcher import NoteWatcher

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger(__name__)


def _start_api_server(panel, port: int) -> None:
    """Run the FastAPI/uvicorn server in a daemon thread."""
    import uvicorn

    from api.app import create_app

    app = create_app(panel)
    log.info("Starting REST API on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")


def main() -> None:
    settings_path = Path(
        os.environ.get("SETTINGS_PATH", str(DEFAULT_SETTINGS_PATH))
    ).expanduser()
    settings = load_settings(settings_path)
    log.info("Settings: %s (%s)", settings_path, settings.model_dump())

    debounce_ms = int(os.environ.get("DEBOUNCE_MS", "300"))

    store = NoteStore()
    panel = TaskPanel(
        store,
        settings,
        settings_path=settings_path,
        debounce_wait=debounce_ms / 1000.0,
    )

    note_env = os.environ.get("NOTE_PATH", "")
    if note_env:
        note_path = Path(note_env).expanduser()
        if not note_path.is_file():
            log.error("NOTE_PATH does not exist or is not a file: %s", note_path)
            sys.exit(1)
        panel.on_file_open(note_path)
    else:
        panel.redraw()

    # Start file system watcher
    watcher = NoteWatcher(panel)
    watcher.start()

    # Start REST API in a daemon thread
    api_enabled = os.environ.get("API_ENABLED", "true").lower() in ("true", "1", "yes")
    if api_enabled:
        api_port = int(os.environ.get("API_PORT", "9410"))
        api_thread = threading.Thread(
            target=_start_api_server, args=(panel, api_port), daemon=True
        )
        api_thread.start()

    # Create MCP server and register tools
    mcp = FastMCP("task-panel")
    register_panel_tools(mcp, panel)

    log.info("Starting task-panel server")
    try:
        mcp.run(transport="stdio")
    finally:
        watcher.stop()
        panel.debounced_refresh.cancel()


if __name__ == "__main__":
    main()
