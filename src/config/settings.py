"""
Panel settings.

Settings are a small pydantic model persisted as JSON. Loading merges the
stored values over the defaults, so a settings file written by an older
version (or edited by hand) only needs the keys it wants to change.
"""

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

log = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "task-panel" / "settings.json"

SortOrder = Literal["file-order", "alphabetical"]


class PanelSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    # Show completed tasks struck through after the open ones
    show_completed: bool = False
    # Group under headings; otherwise a flat list
    group_by_heading: bool = True
    sort_order: SortOrder = "file-order"


def load_settings(path: Path) -> PanelSettings:
    """
    Load settings from ``path``, falling back to defaults.

    A missing or unreadable file yields the defaults. Values that fail
    validation raise pydantic.ValidationError.
    """
    if not path.exists():
        return PanelSettings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        log.warning("Ignoring unreadable settings file %s", path)
        return PanelSettings()
    if not isinstance(data, dict):
        log.warning("Ignoring settings file %s: expected a JSON object", path)
        return PanelSettings()
    return PanelSettings.model_validate(data)


def save_settings(path: Path, settings: PanelSettings) -> None:
    """Write settings as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(), indent=2), encoding="utf-8")
    log.debug("Saved settings to %s", path)
