"""
Category Service.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from keepnotes.backend.core.exceptions import ConflictError
from keepnotes.backend.models.category import Category
from keepnotes.backend.repositories.category import CategoryRepository
from keepnotes.backend.repositories.note import NoteRepository
from keepnotes.backend.schemas.category import CategoryCreate
from keepnotes.backend.services.base import BaseService

DEFAULT_CATEGORIES: tuple[dict[str, str], ...] = (
    {"name": "Personal", "icon": "user", "color": "#3b82f6"},
    {"name": "Work", "icon": "briefcase", "color": "#f59e0b"},
    {"name": "Ideas", "icon": "lightbulb", "color": "#ec4899"},
    {"name": "Goals", "icon": "target", "color": "#8b5cf6"},
    {"name": "Recipes", "icon": "utensils", "color": "#10b981"},
)


class CategoryService(BaseService):
    """Service for category business logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = CategoryRepository(session)
        self.note_repo = NoteRepository(session)

    async def list_categories(self) -> list[Category]:
        """List all categories by name."""
        return await self.repo.get_all()

    async def get_category(self, category_id: int) -> Category:
        """
        Get a category by ID.

        Raises:
            NotFoundError: If category not found
        """
        return await self.repo.get_by_id(category_id)

    async def create_category(self, data: CategoryCreate) -> Category:
        """
        Create a category.

        Raises:
            ConflictError: If the name is already taken
        """
        if await self.repo.get_by_name(data.name) is not None:
            raise ConflictError(f'Category "{data.name}" already exists')

        self._log_operation("Creating category", name=data.name)
        return await self._execute_db_operation(
            "create_category",
            self.repo.create(**data.model_dump(exclude_none=True)),
        )

    async def delete_category(self, category_id: int) -> None:
        """
        Delete a category, leaving its notes uncategorized.

        Raises:
            NotFoundError: If category not found
        """
        category = await self.repo.get_by_id(category_id)
        self._log_operation("Deleting category", category_id=category_id)

        await self.note_repo.detach_category(category.id)
        await self._execute_db_operation(
            "delete_category",
            self.repo.delete(category.id),
        )

    async def seed(self) -> int:
        """Create any missing default category. Returns how many were added."""
        created = 0
        for defaults in DEFAULT_CATEGORIES:
            if await self.repo.get_by_name(defaults["name"]) is None:
                await self.repo.create(**defaults)
                created += 1

        if created:
            self._log_operation("Seeded default categories", created=created)
        return created
