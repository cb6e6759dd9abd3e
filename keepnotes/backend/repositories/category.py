"""
Category Repository.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from keepnotes.backend.models.category import Category
from keepnotes.backend.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    model = Category

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_all(self) -> list[Category]:
        """Get all categories sorted by name."""
        result = await self.session.execute(
            select(Category).order_by(Category.name.asc())
        )
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Category | None:
        """Get a category by its exact name."""
        result = await self.session.execute(
            select(Category).where(Category.name == name)
        )
        return result.scalar_one_or_none()
