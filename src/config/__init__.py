from .settings import DEFAULT_SETTINGS_PATH, PanelSettings, load_settings, save_settings

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "PanelSettings",
    "load_settings",
    "save_settings",
]
