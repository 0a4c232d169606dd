"""
Listing management routes for signed-in users.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_SUBMIT, RATE_LOGO_UPLOAD
from app.core.security import AuthIdentity
from app.api.deps import get_current_identity
from app.services.company_service import CompanyService
from app.schemas.company import (
    CompanyResponse,
    CompanySubmission,
    CompanyUpdateRequest,
    LogoPresignRequest,
    LogoPresignResponse,
    MyCompanyResponse,
)
from app.schemas.base import ErrorResponse

router = APIRouter(
    prefix="/company",
    tags=["company"],
    responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)

company_service = CompanyService()


@router.post("", response_model=CompanyResponse, status_code=201)
@limiter.limit(RATE_SUBMIT)
async def create_company(
    request: Request,
    data: CompanySubmission,
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Submit a new listing. It stays PENDING until an admin approves it."""
    return await company_service.create_company(db, identity, data)


@router.get("/mine", response_model=List[MyCompanyResponse])
async def list_my_companies(
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Listings the caller owns or edits, in any status."""
    return await company_service.list_user_companies(db, identity)


@router.post("/logo/presign", response_model=LogoPresignResponse)
@limiter.limit(RATE_LOGO_UPLOAD)
async def presign_logo_upload(
    request: Request,
    data: LogoPresignRequest,
    identity: AuthIdentity = Depends(get_current_identity),
):
    """
    Presigned POST for uploading a logo straight to object storage.

    Submit the returned `logo_url` with the listing once the upload succeeds.
    """
    return await company_service.presign_logo(identity, data)


@router.post("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: UUID,
    data: CompanyUpdateRequest,
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Replace a listing's content and its services, certifications and areas."""
    return await company_service.update_company(db, identity, company_id, data)
