"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

import math
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every successful response."""

    status: Literal["success"] = "success"
    message: str
    data: DataT | None = None


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    status: Literal["error"] = "error"
    message: str
    errors: list[FieldError] | None = None
    error: str | None = Field(default=None, description="Internal detail, debug mode only.")


class Pagination(BaseModel):
    """Page metadata for list endpoints."""

    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> Pagination:
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


class UserSummary(BaseModel):
    """Public projection of a user embedded in other payloads."""

    id: int
    nickname: str
    email: str | None = None
    student_id: str | None = None
    avatar_path: str | None = None

    model_config = ConfigDict(from_attributes=True)
