"""FastAPI application entrypoint for House Points."""

from fastapi import FastAPI

from .api.v1.router import api_router
from .core.database import init_db
from .jobs import register_scheduler


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    app = FastAPI(title="House Points API", version="0.1.0")
    app.include_router(api_router, prefix="/api/v1")

    @app.on_event("startup")
    def create_tables() -> None:
        init_db()

    register_scheduler(app)
    return app


app = create_app()
