"""Entity store adapters for the four moderatable content kinds.

Every :class:`EntityType` maps to exactly one :class:`EntityAdapter`; the
registry is checked at import time so a new kind cannot be added without
an adapter. Adapters expose a common capability set (find, status update,
owner lookup, detail projection) so the moderation workflow never branches
on the concrete model.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, update
from sqlalchemy.orm import InstrumentedAttribute, Session

from campus_commons.models import (
    Course,
    CourseReview,
    Resource,
    ResourceComment,
    ResourceCommentStat,
    ResourceCourseLink,
    ResourceStat,
    ReviewComment,
    ReviewCommentStat,
    ReviewStat,
    User,
)
from campus_commons.models.enums import ContentStatus, EntityType
from campus_commons.schemas.common import UserSummary
from campus_commons.schemas.moderation import CourseSummary, EntityDetail

Projector = Callable[[Session, Any], EntityDetail]


@dataclass(frozen=True)
class EntityAdapter:
    """Capability interface over one concrete content model."""

    entity_type: EntityType
    model: type[Any]
    owner_field: str
    projector: Projector

    def find(self, db: Session, entity_id: int) -> Any | None:
        """Return the entity or None when it does not exist (or was deleted meanwhile)."""
        return db.get(self.model, entity_id)

    def update_status(self, db: Session, entity_id: int, status: ContentStatus) -> None:
        """Set the entity's visibility status with a single UPDATE."""
        db.execute(
            update(self.model).where(self.model.id == entity_id).values(status=status)
        )

    def owner_id(self, entity: Any) -> int | None:
        return getattr(entity, self.owner_field, None)

    def project(self, db: Session, entity: Any) -> EntityDetail:
        return self.projector(db, entity)


def floor_number(db: Session, comment: ResourceComment | ReviewComment) -> int:
    """Return the 1-based position of ``comment`` among live comments on its parent.

    Counts non-deleted comments on the same parent created at or before this
    comment, so ties on ``created_at`` share the higher floor.
    """
    if isinstance(comment, ResourceComment):
        model: Any = ResourceComment
        parent_column: InstrumentedAttribute[int] = ResourceComment.resource_id
        parent_id = comment.resource_id
    else:
        model = ReviewComment
        parent_column = ReviewComment.review_id
        parent_id = comment.review_id

    count = (
        db.query(func.count(model.id))
        .filter(
            parent_column == parent_id,
            model.created_at <= comment.created_at,
            model.status != ContentStatus.DELETED,
        )
        .scalar()
    )
    return int(count or 0)


def _user_summary(db: Session, user_id: int | None) -> UserSummary | None:
    if user_id is None:
        return None
    user = db.get(User, user_id)
    return UserSummary.model_validate(user) if user else None


def _stats_dict(stat: Any, fields: tuple[str, ...]) -> dict[str, Any] | None:
    if stat is None:
        return None
    return {name: getattr(stat, name) for name in fields}


_REACTION_FIELDS = ("like_count", "dislike_count", "net_score", "last_reacted_at")
_RESOURCE_FIELDS = (
    "view_count",
    "download_count",
    "favorite_count",
    "like_count",
    "last_interacted_at",
)


def _project_resource(db: Session, resource: Resource) -> EntityDetail:
    link = (
        db.query(ResourceCourseLink)
        .filter(ResourceCourseLink.resource_id == resource.id)
        .first()
    )
    return EntityDetail(
        entity_type=EntityType.RESOURCE,
        id=resource.id,
        status=resource.status,
        owner=_user_summary(db, resource.uploader_id),
        title=resource.title,
        content=resource.description,
        created_at=resource.created_at,
        stats=_stats_dict(db.get(ResourceStat, resource.id), _RESOURCE_FIELDS),
        course=CourseSummary.model_validate(link.course) if link else None,
    )


def _project_review(db: Session, review: CourseReview) -> EntityDetail:
    course = db.get(Course, review.course_id)
    return EntityDetail(
        entity_type=EntityType.REVIEW,
        id=review.id,
        status=review.status,
        owner=_user_summary(db, review.author_id),
        title=review.title,
        content=review.content,
        created_at=review.created_at,
        stats=_stats_dict(db.get(ReviewStat, review.id), _REACTION_FIELDS),
        course=CourseSummary.model_validate(course) if course else None,
    )


def _project_resource_comment(db: Session, comment: ResourceComment) -> EntityDetail:
    resource = db.get(Resource, comment.resource_id)
    return EntityDetail(
        entity_type=EntityType.RESOURCE_COMMENT,
        id=comment.id,
        status=comment.status,
        owner=_user_summary(db, comment.user_id),
        content=comment.content,
        created_at=comment.created_at,
        stats=_stats_dict(db.get(ResourceCommentStat, comment.id), _REACTION_FIELDS),
        parent=_project_resource(db, resource) if resource else None,
        floor_number=floor_number(db, comment),
    )


def _project_review_comment(db: Session, comment: ReviewComment) -> EntityDetail:
    review = db.get(CourseReview, comment.review_id)
    parent = _project_review(db, review) if review else None
    return EntityDetail(
        entity_type=EntityType.REVIEW_COMMENT,
        id=comment.id,
        status=comment.status,
        owner=_user_summary(db, comment.user_id),
        content=comment.content,
        created_at=comment.created_at,
        stats=_stats_dict(db.get(ReviewCommentStat, comment.id), _REACTION_FIELDS),
        parent=parent,
        course=parent.course if parent else None,
        floor_number=floor_number(db, comment),
    )


_ADAPTERS: dict[EntityType, EntityAdapter] = {
    EntityType.RESOURCE: EntityAdapter(
        entity_type=EntityType.RESOURCE,
        model=Resource,
        owner_field="uploader_id",
        projector=_project_resource,
    ),
    EntityType.REVIEW: EntityAdapter(
        entity_type=EntityType.REVIEW,
        model=CourseReview,
        owner_field="author_id",
        projector=_project_review,
    ),
    EntityType.RESOURCE_COMMENT: EntityAdapter(
        entity_type=EntityType.RESOURCE_COMMENT,
        model=ResourceComment,
        owner_field="user_id",
        projector=_project_resource_comment,
    ),
    EntityType.REVIEW_COMMENT: EntityAdapter(
        entity_type=EntityType.REVIEW_COMMENT,
        model=ReviewComment,
        owner_field="user_id",
        projector=_project_review_comment,
    ),
}

_missing = set(EntityType) - set(_ADAPTERS)
if _missing:  # pragma: no cover - import-time guard
    raise RuntimeError(f"No entity adapter registered for: {sorted(_missing)}")


def get_adapter(entity_type: EntityType) -> EntityAdapter:
    """Return the adapter for ``entity_type``."""
    return _ADAPTERS[EntityType(entity_type)]
