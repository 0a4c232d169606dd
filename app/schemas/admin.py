"""
Admin (approval workflow) schemas.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema


class CompanyStatusRequest(BaseSchema):
    """Body of POST /admin/companies/approve and /reject."""

    company_id: UUID = Field(alias="companyId")


class CompanyStatusBrief(BaseSchema):
    id: UUID
    name: str
    slug: str
    status: str
    updated_at: datetime


class CompanyStatusResponse(BaseSchema):
    success: bool = True
    changed: bool
    company: CompanyStatusBrief
