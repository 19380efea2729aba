# src/campus_commons/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ApiResponse, ErrorResponse, FieldError, Pagination, UserSummary
from .moderation import (
    EntityDetail,
    QueueItemCreate,
    QueueItemHandle,
    QueueItemResponse,
    ReportCreate,
    ReportResponse,
    ReportStatusUpdate,
)
from .notification import NotificationResponse
from .reaction import ReactionCreate, ReactionStats, ResourceStats
from .resource import ResourceResponse, ResourceUpdate

__all__ = [
    "ApiResponse", "ErrorResponse", "FieldError", "Pagination", "UserSummary",
    "EntityDetail", "QueueItemCreate", "QueueItemHandle", "QueueItemResponse",
    "ReportCreate", "ReportResponse", "ReportStatusUpdate",
    "NotificationResponse",
    "ReactionCreate", "ReactionStats", "ResourceStats",
    "ResourceResponse", "ResourceUpdate",
]
