from __future__ import annotations

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD helpers.

    No commits are performed here - the request session owns the transaction.
    """

    model: Type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with an async session."""
        self.session = session

    async def add(self, entity: T) -> T:
        """Add an entity to the session (not committed)."""
        self.session.add(entity)
        return entity

    async def get_by_name(self, name: str) -> Optional[T]:
        """Get an entity by its natural key."""
        stmt = select(self.model).where(self.model.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[T]:
        """List every entity, insertion order."""
        stmt = select(self.model).order_by(self.model.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_all(self) -> int:
        """Bulk delete every row of the table (not committed). Returns rows deleted."""
        result = await self.session.execute(delete(self.model))
        return result.rowcount or 0

    async def flush(self) -> None:
        await self.session.flush()
