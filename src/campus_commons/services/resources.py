"""Write paths and counters for shared resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from campus_commons.core.errors import ForbiddenError, NotFoundError, ValidationFailed
from campus_commons.models import (
    Resource,
    ResourceComment,
    ResourceCommentReaction,
    ResourceCommentStat,
    ResourceCourseLink,
    ResourceFavorite,
    ResourceLike,
    ResourceStat,
    User,
)
from campus_commons.models.enums import ContentStatus, EntityType
from campus_commons.schemas.resource import ResourceUpdate
from campus_commons.services.moderation import ModerationService, get_moderation_service
from campus_commons.services.upsert import adjust_counter, find_or_create

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleOutcome:
    active: bool
    stats: ResourceStat


def get_resource(db: Session, resource_id: int) -> Resource:
    resource = db.get(Resource, resource_id)
    if resource is None or resource.status == ContentStatus.DELETED:
        raise NotFoundError("Resource not found")
    return resource


def _ensure_owner_or_admin(resource: Resource, user: User) -> None:
    if resource.uploader_id != user.id and not user.is_admin:
        raise ForbiddenError("You can only modify your own resources")


def ensure_stats(db: Session, resource_id: int) -> ResourceStat:
    stat, _ = find_or_create(
        db,
        ResourceStat,
        defaults={"view_count": 0, "download_count": 0, "favorite_count": 0, "like_count": 0},
        resource_id=resource_id,
    )
    return stat


def _bump(db: Session, resource_id: int, counter: Any, delta: int) -> None:
    adjust_counter(
        db,
        ResourceStat.resource_id,
        resource_id,
        counter,
        delta,
        touch=ResourceStat.last_interacted_at,
    )


def update_resource(
    db: Session,
    resource_id: int,
    payload: ResourceUpdate,
    user: User,
    moderation: ModerationService | None = None,
) -> Resource:
    """Apply an owner or admin edit.

    Editing a hidden resource without an explicit status keeps it hidden
    and puts it back in front of the moderators as ``pending_review``.
    """
    resource = get_resource(db, resource_id)
    _ensure_owner_or_admin(resource, user)

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationFailed("No fields to update")
    status = changes.pop("status", None)
    if status is not None and not user.is_admin:
        raise ForbiddenError("Only administrators can change a resource's status")

    was_hidden = resource.status == ContentStatus.HIDDEN
    moderation = moderation or get_moderation_service()
    try:
        for field, value in changes.items():
            setattr(resource, field, value)
        if status is not None:
            resource.status = status
        elif was_hidden and changes:
            resource.status = ContentStatus.HIDDEN
            moderation.request_re_review(db, EntityType.RESOURCE, resource.id)
            logger.info("Hidden resource %s edited by user %s; re-queued for review", resource.id, user.id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(resource)
    return resource


def delete_resource(db: Session, resource_id: int, user: User) -> None:
    """Delete a resource together with its counters, links and comments.

    Everything runs in one transaction. Reports and queue items are left in
    place; moderation treats the entity as missing from then on.
    """
    resource = db.get(Resource, resource_id)
    if resource is None:
        raise NotFoundError("Resource not found")
    _ensure_owner_or_admin(resource, user)

    comment_ids = select(ResourceComment.id).where(ResourceComment.resource_id == resource_id)
    try:
        db.execute(
            delete(ResourceCommentReaction)
            .where(ResourceCommentReaction.comment_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(ResourceCommentStat)
            .where(ResourceCommentStat.comment_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        for model in (ResourceComment, ResourceStat, ResourceLike, ResourceFavorite, ResourceCourseLink):
            db.execute(
                delete(model)
                .where(model.resource_id == resource_id)
                .execution_options(synchronize_session=False)
            )
        db.delete(resource)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Failed to delete resource %s; rolled back", resource_id, exc_info=True)
        raise
    logger.info("Resource %s deleted by user %s", resource_id, user.id)


def toggle_like(db: Session, resource_id: int, user_id: int) -> ToggleOutcome:
    """Like the resource, or remove the like if the user already gave one."""
    get_resource(db, resource_id)
    try:
        stat = ensure_stats(db, resource_id)
        like, created = find_or_create(db, ResourceLike, user_id=user_id, resource_id=resource_id)
        if created:
            _bump(db, resource_id, ResourceStat.like_count, 1)
        else:
            db.delete(like)
            db.flush()
            _bump(db, resource_id, ResourceStat.like_count, -1)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(stat)
    return ToggleOutcome(active=created, stats=stat)


def add_favorite(db: Session, resource_id: int, user_id: int) -> ToggleOutcome:
    """Bookmark the resource. Repeating the call changes nothing."""
    get_resource(db, resource_id)
    try:
        stat = ensure_stats(db, resource_id)
        _, created = find_or_create(db, ResourceFavorite, user_id=user_id, resource_id=resource_id)
        if created:
            _bump(db, resource_id, ResourceStat.favorite_count, 1)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(stat)
    return ToggleOutcome(active=True, stats=stat)


def remove_favorite(db: Session, resource_id: int, user_id: int) -> ToggleOutcome:
    get_resource(db, resource_id)
    try:
        stat = ensure_stats(db, resource_id)
        favorite = db.get(ResourceFavorite, (user_id, resource_id))
        if favorite is not None:
            db.delete(favorite)
            db.flush()
            _bump(db, resource_id, ResourceStat.favorite_count, -1)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(stat)
    return ToggleOutcome(active=False, stats=stat)


def record_view(db: Session, resource_id: int) -> ResourceStat:
    return _record(db, resource_id, ResourceStat.view_count)


def record_download(db: Session, resource_id: int) -> ResourceStat:
    return _record(db, resource_id, ResourceStat.download_count)


def _record(db: Session, resource_id: int, counter: Any) -> ResourceStat:
    get_resource(db, resource_id)
    try:
        stat = ensure_stats(db, resource_id)
        _bump(db, resource_id, counter, 1)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(stat)
    return stat


def get_stats(db: Session, resource_id: int) -> ResourceStat:
    get_resource(db, resource_id)
    stat = ensure_stats(db, resource_id)
    db.commit()
    db.refresh(stat)
    return stat
