"""
User (actor profile) schemas.
"""
from typing import Optional

from pydantic import EmailStr, Field, field_validator
from app.schemas.base import BaseSchema, TimestampSchema, IDSchema


class ProfileUpdateRequest(BaseSchema):
    """Body of POST /profile/update."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class ProfileResponse(IDSchema, TimestampSchema):
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
