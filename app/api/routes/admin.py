"""
Admin routes - listing review workflow.

The approve/reject bodies are parsed inside the handler, after the admin
dependency has run, so a non-admin caller always gets 403 whatever they send.
"""
import json
from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import BadRequestException
from app.core.security import AuthIdentity
from app.api.deps import get_admin_identity
from app.services.admin_service import AdminService
from app.schemas.admin import CompanyStatusRequest, CompanyStatusResponse
from app.schemas.base import ErrorResponse
from app.schemas.company import PendingCompanyResponse

router = APIRouter(
    prefix="/admin/companies",
    tags=["admin"],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)

admin_service = AdminService()


async def _read_status_request(request: Request) -> CompanyStatusRequest:
    """
    Raises:
        BadRequestException: Missing body, missing or malformed companyId.
    """
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else {}
    except ValueError:
        raise BadRequestException("Request body must be JSON")

    if not isinstance(body, dict) or not body.get("companyId"):
        raise BadRequestException("Company ID is required")

    try:
        return CompanyStatusRequest.model_validate(body)
    except ValidationError:
        raise BadRequestException("Company ID must be a UUID")


@router.post("/approve", response_model=CompanyStatusResponse)
async def approve_company(
    request: Request,
    admin: AuthIdentity = Depends(get_admin_identity),
    db: AsyncSession = Depends(get_db),
):
    """Move a listing to APPROVED (idempotent)."""
    data = await _read_status_request(request)
    return await admin_service.approve(db, admin.id, data.company_id)


@router.post("/reject", response_model=CompanyStatusResponse)
async def reject_company(
    request: Request,
    admin: AuthIdentity = Depends(get_admin_identity),
    db: AsyncSession = Depends(get_db),
):
    """Move a listing to REJECTED (idempotent)."""
    data = await _read_status_request(request)
    return await admin_service.reject(db, admin.id, data.company_id)


@router.get("/pending", response_model=List[PendingCompanyResponse])
async def list_pending_companies(
    admin: AuthIdentity = Depends(get_admin_identity),
    db: AsyncSession = Depends(get_db),
):
    """Review queue, newest first."""
    return await admin_service.list_pending(db)
