"""API route modules."""

from fastapi import FastAPI

from . import org, settings


def register_routes(app: FastAPI):
    """Register all API routers."""
    app.include_router(org.router, prefix="/api/org", tags=["org"])
    app.include_router(settings.router, prefix="/api/settings", tags=["settings"])
