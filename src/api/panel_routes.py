"""REST API routes for the task panel."""

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from tools.panel_tools import (
    handle_panel_open,
    handle_panel_show,
    handle_panel_status,
    handle_panel_text,
    handle_settings_get,
    handle_settings_update,
    handle_task_toggle,
)


class PanelOpenBody(BaseModel):
    file_path: Optional[str] = None


class SettingsUpdateBody(BaseModel):
    show_completed: Optional[bool] = None
    group_by_heading: Optional[bool] = None
    sort_order: Optional[Literal["file-order", "alphabetical"]] = None


def register_panel_routes(app_router: APIRouter, panel) -> None:
    """Attach panel REST routes that use the shared panel."""

    @app_router.get("/panel")
    def show_panel(refresh: bool = Query(False)):
        return handle_panel_show(panel, refresh=refresh)

    @app_router.get("/panel/text", response_class=PlainTextResponse)
    def show_panel_text():
        return handle_panel_text(panel)

    @app_router.post("/panel/open")
    def open_note(body: PanelOpenBody):
        result = handle_panel_open(panel, file_path=body.file_path)
        if "error" in result:
            raise HTTPException(status_code=404, detail=result["error"])
        return result

    @app_router.get("/panel/status")
    def panel_status():
        return handle_panel_status(panel)

    @app_router.post("/tasks/{line}/toggle")
    def toggle_task(line: int):
        result = handle_task_toggle(panel, line=line)
        if "error" in result:
            status_code = 409 if result.get("conflict") else 404
            raise HTTPException(status_code=status_code, detail=result["error"])
        return result

    @app_router.get("/settings")
    def get_settings():
        return handle_settings_get(panel)

    @app_router.patch("/settings")
    def update_settings(body: SettingsUpdateBody):
        try:
            return handle_settings_update(panel, **body.model_dump())
        except Exception as e:
            raise HTTPException(status_code=400, detail=str(e))
