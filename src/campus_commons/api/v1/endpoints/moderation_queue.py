"""Admin endpoints for the moderation queue."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from campus_commons.api.v1.dependencies import AdminUserDep, ModerationServiceDep, SessionDep
from campus_commons.models.enums import EntityType, QueueStatus
from campus_commons.schemas.common import ApiResponse
from campus_commons.schemas.moderation import (
    ModerationStatsData,
    QueueDetailData,
    QueueItemCreate,
    QueueItemData,
    QueueItemHandle,
    QueueItemResponse,
    QueueListData,
    ReportResponse,
)
from campus_commons.services.moderation_queue import ModerationQueue, QueueFilters
from campus_commons.services.pagination import PageRequest


router = APIRouter(prefix="/moderation-queue", tags=["moderation"])


@router.get("", response_model=ApiResponse[QueueListData])
async def list_queue(
    _admin: AdminUserDep,
    db: SessionDep,
    status_filter: QueueStatus | None = Query(None, alias="status"),
    entity_type: EntityType | None = Query(None),
    sort_by: str = Query("report_count", description="report_count, created_at or updated_at"),
    sort_order: str = Query("desc", description="asc or desc"),
    page: int = Query(1),
    limit: int = Query(20),
) -> ApiResponse[QueueListData]:
    """List queue items, most-reported first by default."""
    filters = QueueFilters(
        status=status_filter,
        entity_type=entity_type,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items, pagination = ModerationQueue.search(db, filters, PageRequest.from_params(page, limit))
    return ApiResponse(
        message="Moderation queue retrieved successfully",
        data=QueueListData(
            items=[QueueItemResponse.model_validate(item) for item in items],
            pagination=pagination,
        ),
    )


@router.post(
    "",
    response_model=ApiResponse[QueueItemData],
    status_code=status.HTTP_201_CREATED,
)
async def create_queue_item(
    payload: QueueItemCreate,
    _admin: AdminUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[QueueItemData]:
    """Open a queue item for an entity nobody has reported yet."""
    item = moderation.create_manual_item(
        db,
        entity_type=payload.entity_type,
        entity_id=payload.entity_id,
        notes=payload.notes,
    )
    return ApiResponse(
        message="Moderation queue item created successfully",
        data=QueueItemData(item=QueueItemResponse.model_validate(item)),
    )


@router.put("/{item_id}/handle", response_model=ApiResponse[QueueItemData])
async def handle_queue_item(
    item_id: int,
    payload: QueueItemHandle,
    admin: AdminUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[QueueItemData]:
    """Record an admin decision and apply its side effects."""
    outcome = moderation.handle_item(
        db,
        item_id,
        decision=payload.status,
        admin_id=admin.id,
        action=payload.action,
        notes=payload.notes,
    )
    return ApiResponse(
        message="Moderation queue item handled successfully",
        data=QueueItemData(item=QueueItemResponse.model_validate(outcome.item)),
    )


@router.delete("/{item_id}", response_model=ApiResponse[None])
async def delete_queue_item(
    item_id: int,
    _admin: AdminUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[None]:
    moderation.delete_item(db, item_id)
    return ApiResponse(message="Moderation queue item deleted successfully")


@router.get("/stats", response_model=ApiResponse[ModerationStatsData])
async def queue_stats(
    _admin: AdminUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[ModerationStatsData]:
    """Counts of queue items and reports grouped by status."""
    return ApiResponse(
        message="Moderation statistics retrieved successfully",
        data=ModerationStatsData(stats=moderation.stats(db)),
    )


@router.get("/{item_id}", response_model=ApiResponse[QueueDetailData])
async def get_queue_item(
    item_id: int,
    _admin: AdminUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[QueueDetailData]:
    """Queue item with its report history and a view of the reported content."""
    detail = moderation.get_detail(db, item_id)
    return ApiResponse(
        message="Moderation queue item retrieved successfully",
        data=QueueDetailData(
            item=QueueItemResponse.model_validate(detail.item),
            reports=[ReportResponse.model_validate(report) for report in detail.reports],
            entity=detail.entity,
        ),
    )
