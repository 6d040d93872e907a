"""
Common response models and utilities.

Generic response wrappers, pagination metadata and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

import math
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys, populated by either name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StrictCamelModel(CamelModel):
    """Request schema that rejects unknown fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class SuccessResponse(CamelModel, Generic[T]):
    """Generic success response wrapper."""

    success: bool = True
    message: str | None = None
    data: T


class ErrorDetail(CamelModel):
    """A single field-level validation failure."""

    field: str
    message: str
    code: str


class ErrorResponse(CamelModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error label")
    message: str | None = Field(default=None, description="Human-readable explanation")
    details: list[ErrorDetail] | dict[str, Any] | None = Field(
        default=None,
        description="Field errors or additional error context",
    )


class Pagination(CamelModel):
    """Page metadata for list endpoints."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """
        Derive page counts from a total.

        Args:
            page: 1-based current page
            limit: Page size
            total: Total number of matching items

        Returns:
            Pagination: Metadata with totalPages, hasNext and hasPrev
        """
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class PaginatedResponse(CamelModel, Generic[T]):
    """Generic paginated response wrapper."""

    success: bool = True
    message: str | None = None
    data: list[T]
    pagination: Pagination


class DeletedResponse(CamelModel):
    """ID of a deleted resource."""

    id: UUID
