# src/campus_commons/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .moderation_queue import router as moderation_queue_router
from .notifications import router as notifications_router
from .reactions import router as reactions_router
from .reports import router as reports_router
from .resources import router as resources_router

__all__ = [
    "reports_router",
    "moderation_queue_router",
    "reactions_router",
    "resources_router",
    "notifications_router",
]
