"""FastAPI application factory for the task panel REST API."""

from fastapi import APIRouter, FastAPI

from api.panel_routes import register_panel_routes


def create_app(panel) -> FastAPI:
    """Build and return a FastAPI app wired to the given TaskPanel."""
    app = FastAPI(title="task-panel", docs_url="/api/docs", openapi_url="/api/openapi.json")

    api = APIRouter(prefix="/api")
    register_panel_routes(api, panel)
    app.include_router(api)

    return app
