"""Report and moderation queue Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from campus_commons.models.enums import (
    EntityType,
    ModerationAction,
    QueueStatus,
    ReportReason,
    ReportStatus,
)
from campus_commons.schemas.common import Pagination, UserSummary


class ReportCreate(BaseModel):
    """Schema for filing a report against a piece of content."""

    entity_type: EntityType
    entity_id: int = Field(..., ge=1, description="Identifier of the reported entity")
    reason: ReportReason
    details: str | None = Field(None, max_length=2000)


class ReportStatusUpdate(BaseModel):
    status: ReportStatus


class ReportResponse(BaseModel):
    """Schema for report information returned by the API."""

    id: int
    reporter_id: int
    entity_type: EntityType
    entity_id: int
    reason: ReportReason
    details: str | None
    status: ReportStatus
    created_at: datetime
    reporter: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class QueueItemCreate(BaseModel):
    """Schema for an admin opening a queue item by hand."""

    entity_type: EntityType
    entity_id: int = Field(..., ge=1)
    notes: str | None = None


class QueueItemHandle(BaseModel):
    """Schema for an admin decision on a queue item."""

    status: QueueStatus
    action: ModerationAction | None = Field(
        None, description="Only 'hide' is supported, and only for resources"
    )
    notes: str | None = None


class QueueItemResponse(BaseModel):
    id: int
    entity_type: EntityType
    entity_id: int
    report_count: int
    status: QueueStatus
    handled_by: int | None
    handled_at: datetime | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
    handler: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class CourseSummary(BaseModel):
    id: int
    code: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class EntityDetail(BaseModel):
    """Normalised view of a moderated entity, whatever its concrete kind."""

    entity_type: EntityType
    id: int
    status: str
    owner: UserSummary | None = None
    title: str | None = None
    content: str | None = None
    created_at: datetime | None = None
    stats: dict[str, Any] | None = None
    parent: EntityDetail | None = None
    course: CourseSummary | None = None
    floor_number: int | None = None


class ReportData(BaseModel):
    report: ReportResponse


class ReportListData(BaseModel):
    reports: list[ReportResponse]
    pagination: Pagination


class QueueItemData(BaseModel):
    item: QueueItemResponse


class QueueListData(BaseModel):
    items: list[QueueItemResponse]
    pagination: Pagination


class QueueDetailData(BaseModel):
    item: QueueItemResponse
    reports: list[ReportResponse]
    entity: EntityDetail | None


class QueueStatusCounts(BaseModel):
    pending: int = 0
    pending_review: int = 0
    approved: int = 0
    rejected: int = 0
    removed: int = 0


class ReportStatusCounts(BaseModel):
    pending: int = 0
    handled: int = 0
    total: int = 0


class ModerationStats(BaseModel):
    queue: QueueStatusCounts
    reports: ReportStatusCounts


class ModerationStatsData(BaseModel):
    stats: ModerationStats
