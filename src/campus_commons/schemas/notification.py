"""Notification Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from campus_commons.models.enums import NotificationType
from campus_commons.schemas.common import Pagination


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    type: NotificationType
    title: str | None
    content: str | None
    entity_type: str | None
    entity_id: int | None
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationListData(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int
    pagination: Pagination


class NotificationData(BaseModel):
    notification: NotificationResponse


class MarkedReadData(BaseModel):
    updated: int
