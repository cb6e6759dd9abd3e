"""
Note Service.

Business logic layer for notes. Owns order-key assignment on creation
and duplication, and applies client-computed reorder batches.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from keepnotes.backend.core.exceptions import ValidationError
from keepnotes.backend.models.note import Note
from keepnotes.backend.repositories.category import CategoryRepository
from keepnotes.backend.repositories.note import NoteRepository
from keepnotes.backend.schemas.note import (
    BulkIdsRequest,
    NoteCreate,
    NoteUpdate,
    ReorderRequest,
)
from keepnotes.backend.services.base import BaseService

# Fields a partial update may explicitly clear with null
NULLABLE_FIELDS = frozenset({"content", "list_items", "category_id"})


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, updates, retrieval and reordering with
    proper error handling.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.category_repo = CategoryRepository(session)

    async def _next_order(self) -> float:
        # Global, not per section: a new note ranks after every sibling
        # in whichever section it lands in.
        return await self.repo.get_max_order() + 1

    async def _check_category(self, category_id: int | None) -> None:
        if category_id is None:
            return
        if await self.category_repo.get_by_id_or_none(category_id) is None:
            raise ValidationError(
                f"Category with ID {category_id} does not exist",
                details={"category_id": category_id},
            )

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note ranked last.

        Args:
            data: Note creation data

        Returns:
            Created note

        Raises:
            ValidationError: If category_id names no category
        """
        await self._check_category(data.category_id)
        fields = data.model_dump(exclude_none=True)
        order = await self._next_order()
        self._log_operation("Creating note", title=data.title, order=order)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(**fields, order=order),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: int) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return await self.repo.get_by_id(note_id)

    async def list_notes(self, category_id: int | None = None) -> list[Note]:
        """List active notes in display order, optionally for one category."""
        return await self.repo.get_all_active(category_id=category_id)

    async def list_pinned(self) -> list[Note]:
        """List active pinned notes."""
        return await self.repo.get_pinned()

    async def list_archived(self) -> list[Note]:
        """List archived notes."""
        return await self.repo.get_archived()

    async def update_note(self, note_id: int, data: NoteUpdate) -> Note:
        """
        Update an existing note.

        Only fields present in the request are written. Pinning or
        unpinning keeps the order key as is.

        Raises:
            NotFoundError: If note not found
            ValidationError: If category_id names no category
        """
        update_data = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }

        if not update_data:
            return await self.repo.get_by_id(note_id)

        await self._check_category(update_data.get("category_id"))

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, **update_data),
        )

    async def delete_note(self, note_id: int) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note", note_id=note_id)
        await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )

    async def archive_note(self, note_id: int) -> Note:
        """
        Archive a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Archiving note", note_id=note_id)
        return await self.repo.archive(note_id)

    async def unarchive_note(self, note_id: int) -> Note:
        """
        Unarchive a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Unarchiving note", note_id=note_id)
        return await self.repo.unarchive(note_id)

    async def duplicate_note(self, note_id: int) -> Note:
        """
        Copy a note into the unpinned section, ranked last.

        Raises:
            NotFoundError: If the source note is not found
        """
        original = await self.repo.get_by_id(note_id)
        order = await self._next_order()
        self._log_operation("Duplicating note", note_id=note_id, order=order)

        list_items = (
            [dict(item) for item in original.list_items]
            if original.list_items is not None
            else None
        )
        return await self._execute_db_operation(
            "duplicate_note",
            self.repo.create(
                title=f"{original.title} (Copy)",
                content=original.content,
                type=original.type,
                list_items=list_items,
                color=original.color,
                category_id=original.category_id,
                is_pinned=False,
                is_archived=False,
                order=order,
            ),
        )

    async def bulk_delete(self, data: BulkIdsRequest) -> int:
        """Delete several notes. Unknown ids are skipped."""
        self._log_operation("Bulk deleting notes", count=len(data.ids))
        return await self._execute_db_operation(
            "bulk_delete",
            self.repo.delete_many(data.ids),
        )

    async def bulk_archive(self, data: BulkIdsRequest) -> int:
        """Archive several notes. Unknown ids are skipped."""
        self._log_operation("Bulk archiving notes", count=len(data.ids))
        return await self._execute_db_operation(
            "bulk_archive",
            self.repo.archive_many(data.ids),
        )

    async def reorder(self, data: ReorderRequest) -> None:
        """
        Persist a reorder batch as computed by the client.

        Each pair is an independent point write keyed by id. The batch is
        trusted as is: no cross-section re-derivation, no duplicate check.
        Ids that match no note are ignored rather than rejected.
        """
        self._log_operation("Reordering notes", count=len(data.notes))

        updated = await self._execute_db_operation(
            "reorder_notes",
            self.repo.apply_orders(data.notes),
        )

        ignored = len(data.notes) - updated
        if ignored:
            self._logger.warning(
                "Reorder batch referenced unknown notes",
                extra={"ignored": ignored, "updated": updated},
            )
        self._log_debug("Reorder applied", updated=updated)
