"""
Actor profile routes.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_PROFILE
from app.core.security import AuthIdentity
from app.api.deps import get_current_identity
from app.services.user_service import UserService
from app.schemas.user import ProfileResponse, ProfileUpdateRequest

router = APIRouter(prefix="/profile", tags=["profile"])

user_service = UserService()


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.get_profile(db, identity)


@router.post("/update", response_model=ProfileResponse)
@limiter.limit(RATE_PROFILE)
async def update_my_profile(
    request: Request,
    data: ProfileUpdateRequest,
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Create or update the caller's name and email. The role is never changed."""
    return await user_service.update_profile(db, identity, data)
