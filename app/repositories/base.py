"""
Base repository shared by every entity repository.

Repositories flush but never commit; the calling service owns the
transaction boundary.
"""
from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Usage:
        class CompanyRepository(BaseRepository[Company]):
            def __init__(self):
                super().__init__(Company)
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self._columns = {attr.key for attr in inspect(model).column_attrs}

    def _assign(self, instance: ModelType, values: dict) -> None:
        unknown = set(values) - self._columns
        if unknown:
            raise AttributeError(
                f"{self.model.__name__} has no column(s): {', '.join(sorted(unknown))}"
            )
        for key, value in values.items():
            setattr(instance, key, value)

    async def get_by_id(
        self,
        db: AsyncSession,
        id: UUID,
    ) -> Optional[ModelType]:
        result = await db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        **values: Any,
    ) -> ModelType:
        """Insert a row and return it with defaults populated."""
        instance = self.model()
        self._assign(instance, values)
        db.add(instance)
        await db.flush()
        await db.refresh(instance)
        return instance

    async def update(
        self,
        db: AsyncSession,
        instance: ModelType,
        **values: Any,
    ) -> ModelType:
        """
        Set columns on a loaded row and flush.

        Raises:
            AttributeError: A key is not a column of the model.
        """
        self._assign(instance, values)
        await db.flush()
        await db.refresh(instance)
        return instance
