"""
API Routes package.
"""
from fastapi import APIRouter

from app.api.routes.health import router as health_router
from app.api.routes.companies import router as companies_router
from app.api.routes.company import router as company_router
from app.api.routes.admin import router as admin_router
from app.api.routes.profile import router as profile_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(companies_router)
api_router.include_router(company_router)
api_router.include_router(admin_router)
api_router.include_router(profile_router)

__all__ = [
    "api_router",
    "health_router",
    "companies_router",
    "company_router",
    "admin_router",
    "profile_router",
]
