"""Reaction and counter Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from campus_commons.models.enums import ReactionKind


class ReactionCreate(BaseModel):
    reaction: ReactionKind


class ReactionStats(BaseModel):
    """Counters for reviews and both comment kinds."""

    like_count: int
    dislike_count: int
    net_score: int
    last_reacted_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class ResourceStats(BaseModel):
    resource_id: int
    view_count: int
    download_count: int
    favorite_count: int
    like_count: int
    last_interacted_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class ReactionData(BaseModel):
    """Outcome of a reaction toggle; ``reaction`` is None after toggling off."""

    reaction: ReactionKind | None
    stats: ReactionStats


class ReactionStatsData(BaseModel):
    stats: ReactionStats


class ResourceToggleData(BaseModel):
    active: bool
    stats: ResourceStats


class ResourceStatsData(BaseModel):
    stats: ResourceStats
