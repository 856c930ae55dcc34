from .panel_tools import register_panel_tools

__all__ = ["register_panel_tools"]
