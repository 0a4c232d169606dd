"""
Public company directory routes.

Thin controllers - CompanyService builds the filters' result page, batches
the child collection queries and shapes the response.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.repositories.company_filters import CompanyFilters
from app.services.company_service import CompanyService
from app.schemas.base import ErrorResponse
from app.schemas.company import CompanyPage, CompanyResponse, FilterOptions

router = APIRouter(prefix="/companies", tags=["companies"])

company_service = CompanyService()


@router.get("", response_model=CompanyPage)
async def search_companies(
    search: Optional[str] = Query(None, description="Substring of name or description"),
    service: Optional[str] = Query(None),
    location: Optional[str] = Query(None, description="Headquarters state code"),
    size: Optional[str] = Query(None),
    certifications: Optional[str] = Query(None, description="Comma-separated, any of"),
    areas_served: Optional[str] = Query(None, alias="areasServed", description="Comma-separated state codes"),
    page: Optional[str] = Query(None, description="1-indexed; invalid values fall back to 1"),
    db: AsyncSession = Depends(get_db),
):
    """Browse approved listings, 30 per page, with facet metadata."""
    filters = CompanyFilters.from_query(
        search=search,
        service=service,
        location=location,
        size=size,
        certifications=certifications,
        areas_served=areas_served,
    )
    return await company_service.search_companies(db, filters, page)


@router.get("/filters", response_model=FilterOptions)
async def get_filter_options(db: AsyncSession = Depends(get_db)):
    """Distinct facet values across approved listings."""
    return await company_service.get_filter_options(db)


@router.get("/{slug}", response_model=CompanyResponse, responses={404: {"model": ErrorResponse}})
async def get_company(slug: str, db: AsyncSession = Depends(get_db)):
    """An approved listing by slug."""
    return await company_service.get_company_by_slug(db, slug)
