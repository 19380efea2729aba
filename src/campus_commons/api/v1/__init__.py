# src/campus_commons/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    moderation_queue_router,
    notifications_router,
    reactions_router,
    reports_router,
    resources_router,
)

__all__ = [
    "reports_router",
    "moderation_queue_router",
    "reactions_router",
    "resources_router",
    "notifications_router",
]
