"""
User service - the caller's actor profile.

Roles are never set here; a new profile always starts as USER and only
an operator promotes it.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ProfileNotFoundException
from app.core.logging import get_logger
from app.core.security import AuthIdentity
from app.repositories.user_repository import UserRepository
from app.schemas.user import ProfileResponse, ProfileUpdateRequest

logger = get_logger(__name__)


class UserService:
    """Handles actor profile reads and upserts."""

    def __init__(self, user_repo: Optional[UserRepository] = None):
        self.user_repo = user_repo or UserRepository()

    async def get_profile(
        self,
        db: AsyncSession,
        identity: AuthIdentity,
    ) -> ProfileResponse:
        """
        Raises:
            ProfileNotFoundException: The caller never created a profile.
        """
        user = await self.user_repo.get_by_id(db, identity.id)
        if not user:
            raise ProfileNotFoundException()
        return ProfileResponse.model_validate(user)

    async def update_profile(
        self,
        db: AsyncSession,
        identity: AuthIdentity,
        data: ProfileUpdateRequest,
    ) -> ProfileResponse:
        """Create or update the caller's profile keyed by the token subject."""
        try:
            user = await self.user_repo.upsert_profile(
                db, identity.id, email=data.email, name=data.name
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("profile_upserted", user_id=str(identity.id))
        return ProfileResponse.model_validate(user)
