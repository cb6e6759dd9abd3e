"""
Note Repository.

Data access layer for notes, including the order-key queries used by
note creation and the reorder batch.
"""

from collections.abc import Iterable

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from keepnotes.backend.models.note import Note
from keepnotes.backend.repositories.base import BaseRepository
from keepnotes.backend.schemas.note import NoteOrder

# Listing order the client relies on: pinned section first, then rank,
# newest first among equal ranks, id as the final stable tiebreaker.
DISPLAY_ORDER = (
    Note.is_pinned.desc(),
    Note.order.asc(),
    Note.created_at.desc(),
    Note.id.desc(),
)


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_all_active(self, category_id: int | None = None) -> list[Note]:
        """
        Get all non-archived notes in display order.

        Args:
            category_id: Restrict to one category when given

        Returns:
            Active notes sorted pinned first, then by order
        """
        query = select(Note).where(Note.is_archived == False)  # noqa: E712
        if category_id is not None:
            query = query.where(Note.category_id == category_id)
        result = await self.session.execute(query.order_by(*DISPLAY_ORDER))
        return list(result.scalars().all())

    async def get_pinned(self) -> list[Note]:
        """Get active pinned notes by order."""
        result = await self.session.execute(
            select(Note)
            .where(Note.is_pinned == True)  # noqa: E712
            .where(Note.is_archived == False)  # noqa: E712
            .order_by(Note.order.asc(), Note.created_at.desc(), Note.id.desc())
        )
        return list(result.scalars().all())

    async def get_archived(self) -> list[Note]:
        """Get archived notes, most recently changed first."""
        result = await self.session.execute(
            select(Note)
            .where(Note.is_archived == True)  # noqa: E712
            .order_by(Note.updated_at.desc(), Note.id.desc())
        )
        return list(result.scalars().all())

    async def get_max_order(self) -> float:
        """
        Highest order key across all notes, any section, archived included.

        Returns 0 for an empty table.
        """
        result = await self.session.execute(select(func.max(Note.order)))
        return result.scalar_one_or_none() or 0

    async def apply_orders(self, pairs: Iterable[NoteOrder]) -> int:
        """
        Write each (id, order) pair as an independent point update.

        Ids that match no row update nothing and are not reported as
        errors.

        Returns:
            Number of rows actually updated
        """
        updated = 0
        for pair in pairs:
            result = await self.session.execute(
                update(Note)
                .where(Note.id == pair.id)
                .values(order=pair.order)
                .execution_options(synchronize_session="evaluate")
            )
            updated += result.rowcount or 0
        return updated

    async def archive(self, id: int) -> Note:
        """
        Archive a note.

        Raises:
            NotFoundError: If note not found
        """
        return await self.update(id, is_archived=True)

    async def unarchive(self, id: int) -> Note:
        """
        Unarchive a note.

        Raises:
            NotFoundError: If note not found
        """
        return await self.update(id, is_archived=False)

    async def delete_many(self, ids: list[int]) -> int:
        """Delete every note whose id is listed. Returns rows deleted."""
        if not ids:
            return 0
        result = await self.session.execute(
            delete(Note)
            .where(Note.id.in_(ids))
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    async def archive_many(self, ids: list[int]) -> int:
        """Archive every note whose id is listed. Returns rows updated."""
        if not ids:
            return 0
        result = await self.session.execute(
            update(Note)
            .where(Note.id.in_(ids))
            .values(is_archived=True)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    async def detach_category(self, category_id: int) -> None:
        """Unlink every note of a category, archived ones included."""
        result = await self.session.execute(
            select(Note).where(Note.category_id == category_id)
        )
        for note in result.scalars():
            note.category = None
        await self.session.flush()
