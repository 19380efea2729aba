"""Resource editing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campus_commons.models.enums import ContentStatus


class ResourceUpdate(BaseModel):
    """Partial update of a resource. ``status`` may only be changed by admins."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    url_or_path: str | None = Field(None, max_length=255)
    visibility: Literal["public", "course", "private"] | None = None
    tags: list[str] | None = None
    status: ContentStatus | None = None

    @field_validator("title", "visibility", "status")
    @classmethod
    def reject_explicit_null(cls, v: object) -> object:
        """Omit a field to leave it unchanged; these columns cannot be cleared."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ResourceResponse(BaseModel):
    id: int
    uploader_id: int
    type: str
    title: str
    description: str | None
    url_or_path: str | None
    visibility: str
    status: ContentStatus
    tags: list[str] | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResourceData(BaseModel):
    resource: ResourceResponse
