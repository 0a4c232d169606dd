"""
Base schemas and common response models.
"""
from datetime import datetime
from typing import Any, Generic, TypeVar, Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class BaseSchema(BaseModel):
    """ORM-readable, and accepts either field names or aliases on input."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class TimestampSchema(BaseSchema):
    created_at: datetime
    updated_at: datetime


class IDSchema(BaseSchema):
    id: UUID


class PaginatedResponse(BaseSchema, Generic[T]):
    """One page of a 1-indexed listing."""

    items: List[T]
    total: int = Field(..., description="Rows matching the query across all pages")
    page: int = Field(..., description="Page actually served (invalid input falls back to 1)")
    limit: int = Field(..., description="Page size")
    pages: int = Field(..., description="ceil(total / limit)")


class ErrorResponse(BaseSchema):
    """Body of every error response."""

    error: str = Field(..., description="Machine-readable code, e.g. COMPANY_NOT_FOUND")
    message: str
    details: Optional[Any] = None
