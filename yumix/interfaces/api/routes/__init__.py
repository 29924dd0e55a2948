from fastapi import FastAPI

from .admin import router as admin_router
from .health import router as health_router
from .notifications import admin_router as admin_notifications_router
from .notifications import user_router as user_notifications_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(admin_router)
    app.include_router(admin_notifications_router)
    app.include_router(user_notifications_router)
