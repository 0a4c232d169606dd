"""
User repository - data access for actor profiles.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import utcnow
from app.models.user import User, ROLE_USER
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def get_role(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Optional[str]:
        """Role of a profile, or None when the profile doesn't exist."""
        result = await db.execute(
            select(User.role).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert_profile(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        email: str,
        name: str,
    ) -> User:
        """
        Insert or update a profile keyed by the identity-provider subject.

        New rows get the USER role; the role of an existing row is left alone.
        """
        now = utcnow()
        stmt = (
            pg_insert(User)
            .values(id=user_id, email=email, name=name, role=ROLE_USER, created_at=now, updated_at=now)
            .on_conflict_do_update(
                index_elements=[User.id],
                set_={"email": email, "name": name, "updated_at": now},
            )
            .returning(User)
        )
        result = await db.execute(stmt, execution_options={"populate_existing": True})
        return result.scalar_one()

    async def ensure_exists(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        email: Optional[str] = None,
    ) -> None:
        """Create a bare USER profile if none exists yet (needed before linking companies)."""
        stmt = (
            pg_insert(User)
            .values(id=user_id, email=email, role=ROLE_USER)
            .on_conflict_do_nothing(index_elements=[User.id])
        )
        await db.execute(stmt)
