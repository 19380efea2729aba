"""Like/dislike toggling for reviews and both comment kinds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from campus_commons.core.errors import NotFoundError
from campus_commons.models import (
    CourseReview,
    ResourceComment,
    ResourceCommentReaction,
    ResourceCommentStat,
    ReviewComment,
    ReviewCommentReaction,
    ReviewCommentStat,
    ReviewReaction,
    ReviewStat,
)
from campus_commons.models.enums import ContentStatus, EntityType, ReactionKind
from campus_commons.services.upsert import adjust_counter, find_or_create

logger = logging.getLogger(__name__)

_COUNTER_FIELDS = {
    ReactionKind.LIKE: "like_count",
    ReactionKind.DISLIKE: "dislike_count",
}


class ReactionChange(Enum):
    ADDED = "added"
    REMOVED = "removed"
    SWITCHED = "switched"


@dataclass(frozen=True)
class ReactionTarget:
    """Tables backing reactions on one kind of content."""

    entity_type: EntityType
    entity_model: type[Any]
    reaction_model: type[Any]
    stat_model: type[Any]
    # Column name of the content id on the reaction and stat tables.
    key_field: str
    label: str

    @property
    def stat_key(self) -> Any:
        return getattr(self.stat_model, self.key_field)


REVIEW_TARGET = ReactionTarget(
    entity_type=EntityType.REVIEW,
    entity_model=CourseReview,
    reaction_model=ReviewReaction,
    stat_model=ReviewStat,
    key_field="review_id",
    label="Review",
)
RESOURCE_COMMENT_TARGET = ReactionTarget(
    entity_type=EntityType.RESOURCE_COMMENT,
    entity_model=ResourceComment,
    reaction_model=ResourceCommentReaction,
    stat_model=ResourceCommentStat,
    key_field="comment_id",
    label="Comment",
)
REVIEW_COMMENT_TARGET = ReactionTarget(
    entity_type=EntityType.REVIEW_COMMENT,
    entity_model=ReviewComment,
    reaction_model=ReviewCommentReaction,
    stat_model=ReviewCommentStat,
    key_field="comment_id",
    label="Comment",
)


@dataclass(frozen=True)
class ReactionOutcome:
    change: ReactionChange
    reaction: ReactionKind | None
    stats: Any


def _load_entity(db: Session, target: ReactionTarget, entity_id: int) -> Any:
    entity = db.get(target.entity_model, entity_id)
    if entity is None or entity.status == ContentStatus.DELETED:
        raise NotFoundError(f"{target.label} not found")
    return entity


def ensure_stats(db: Session, target: ReactionTarget, entity_id: int) -> Any:
    """Return the stats row for ``entity_id``, creating a zeroed one if absent."""
    stat, _ = find_or_create(
        db,
        target.stat_model,
        defaults={"like_count": 0, "dislike_count": 0, "net_score": 0},
        **{target.key_field: entity_id},
    )
    return stat


def _bump(db: Session, target: ReactionTarget, entity_id: int, kind: ReactionKind, delta: int) -> None:
    adjust_counter(
        db,
        target.stat_key,
        entity_id,
        getattr(target.stat_model, _COUNTER_FIELDS[kind]),
        delta,
        touch=target.stat_model.last_reacted_at,
    )


def _recompute_net_score(db: Session, target: ReactionTarget, entity_id: int) -> None:
    model = target.stat_model
    db.execute(
        update(model)
        .where(target.stat_key == entity_id)
        .values(net_score=model.like_count - model.dislike_count)
        .execution_options(synchronize_session=False)
    )


def toggle_reaction(
    db: Session,
    target: ReactionTarget,
    entity_id: int,
    user_id: int,
    kind: ReactionKind,
) -> ReactionOutcome:
    """Apply a like/dislike from ``user_id``.

    No prior reaction adds one, repeating the same reaction removes it, and
    the opposite reaction switches it. Counters move atomically and never
    drop below zero.
    """
    _load_entity(db, target, entity_id)
    try:
        stat = ensure_stats(db, target, entity_id)
        reaction, created = find_or_create(
            db,
            target.reaction_model,
            defaults={"reaction": kind},
            user_id=user_id,
            **{target.key_field: entity_id},
        )
        if created:
            change = ReactionChange.ADDED
            _bump(db, target, entity_id, kind, 1)
        elif reaction.reaction == kind:
            change = ReactionChange.REMOVED
            db.delete(reaction)
            db.flush()
            _bump(db, target, entity_id, kind, -1)
        else:
            change = ReactionChange.SWITCHED
            previous = ReactionKind(reaction.reaction)
            reaction.reaction = kind
            db.flush()
            _bump(db, target, entity_id, previous, -1)
            _bump(db, target, entity_id, kind, 1)
        _recompute_net_score(db, target, entity_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(stat)

    logger.debug(
        "User %s %s %s on %s #%s", user_id, change.value, kind, target.entity_type, entity_id
    )
    return ReactionOutcome(
        change=change,
        reaction=None if change is ReactionChange.REMOVED else kind,
        stats=stat,
    )


def get_stats(db: Session, target: ReactionTarget, entity_id: int) -> Any:
    """Return the counters for ``entity_id``, creating the row on first access."""
    _load_entity(db, target, entity_id)
    stat = ensure_stats(db, target, entity_id)
    db.commit()
    db.refresh(stat)
    return stat
