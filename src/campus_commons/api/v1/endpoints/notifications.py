"""Notification centre endpoints for the current user."""

from __future__ import annotations

from fastapi import APIRouter, Query
from sqlalchemy import func, update

from campus_commons.api.v1.dependencies import CurrentUserDep, SessionDep
from campus_commons.core.errors import NotFoundError
from campus_commons.models import Notification
from campus_commons.schemas.common import ApiResponse
from campus_commons.schemas.notification import (
    MarkedReadData,
    NotificationData,
    NotificationListData,
    NotificationResponse,
)
from campus_commons.services.pagination import PageRequest, paginate

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=ApiResponse[NotificationListData])
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    is_read: bool | None = Query(None),
    page: int = Query(1),
    limit: int = Query(20),
) -> ApiResponse[NotificationListData]:
    """List the current user's notifications, newest first."""
    query = db.query(Notification).filter(Notification.user_id == current_user.id)
    if is_read is not None:
        query = query.filter(Notification.is_read.is_(is_read))
    query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
    rows, pagination = paginate(query, PageRequest.from_params(page, limit))

    unread = (
        db.query(func.count(Notification.id))
        .filter(Notification.user_id == current_user.id, Notification.is_read.is_(False))
        .scalar()
    )
    return ApiResponse(
        message="Notifications retrieved successfully",
        data=NotificationListData(
            notifications=[NotificationResponse.model_validate(row) for row in rows],
            unread_count=int(unread or 0),
            pagination=pagination,
        ),
    )


@router.put("/read-all", response_model=ApiResponse[MarkedReadData])
async def mark_all_read(current_user: CurrentUserDep, db: SessionDep) -> ApiResponse[MarkedReadData]:
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == current_user.id, Notification.is_read.is_(False))
        .values(is_read=True)
        .execution_options(synchronize_session="fetch")
    )
    db.commit()
    return ApiResponse(
        message="All notifications marked as read",
        data=MarkedReadData(updated=result.rowcount or 0),
    )


@router.put("/{notification_id}/read", response_model=ApiResponse[NotificationData])
async def mark_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ApiResponse[NotificationData]:
    notification = db.get(Notification, notification_id)
    # Other users' notifications are indistinguishable from missing ones.
    if notification is None or notification.user_id != current_user.id:
        raise NotFoundError("Notification not found")
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return ApiResponse(
        message="Notification marked as read",
        data=NotificationData(notification=NotificationResponse.model_validate(notification)),
    )
