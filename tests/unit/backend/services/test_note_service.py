"""
Unit Tests for Note Service.

Tests the NoteService business logic with mocked dependencies.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from keepnotes.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from keepnotes.backend.schemas.note import (
    BulkIdsRequest,
    NoteCreate,
    NoteOrder,
    NoteUpdate,
    ReorderRequest,
)
from keepnotes.backend.services.note import NoteService


@pytest.fixture
def service(mock_db_session):
    """Create NoteService with mocked session."""
    return NoteService(mock_db_session)


class TestNoteServiceCreate:
    """Tests for note creation."""

    async def test_new_note_ranks_after_global_max(self, service):
        """With max order 5 the new note gets 6."""
        mock_note = MagicMock(id=1, order=6)

        with patch.object(service.repo, "get_max_order", return_value=5), \
             patch.object(service.repo, "create", return_value=mock_note) as mock_create:
            result = await service.create_note(NoteCreate(title="Groceries", content="Milk"))

        mock_create.assert_called_once_with(title="Groceries", content="Milk", type="text", order=6)
        assert result.order == 6

    async def test_first_note_gets_one(self, service):
        with patch.object(service.repo, "get_max_order", return_value=0), \
             patch.object(service.repo, "create", return_value=MagicMock()) as mock_create:
            await service.create_note(NoteCreate(title=""))

        assert mock_create.call_args.kwargs["order"] == 1

    async def test_create_conflict_is_translated(self, service):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        with patch.object(service.repo, "get_max_order", return_value=0), \
             patch.object(service.repo, "create", side_effect=error):
            with pytest.raises(ConflictError):
                await service.create_note(NoteCreate(title="Dup"))


class TestNoteServiceCategoryCheck:
    """Tests for the category a note may reference."""

    async def test_create_with_known_category(self, service):
        with patch.object(service.category_repo, "get_by_id_or_none", return_value=MagicMock(id=2)), \
             patch.object(service.repo, "get_max_order", return_value=0), \
             patch.object(service.repo, "create", return_value=MagicMock()) as mock_create:
            await service.create_note(NoteCreate(title="Report", category_id=2))

        assert mock_create.call_args.kwargs["category_id"] == 2

    async def test_create_with_unknown_category(self, service):
        with patch.object(service.category_repo, "get_by_id_or_none", return_value=None), \
             patch.object(service.repo, "create") as mock_create:
            with pytest.raises(ValidationError) as exc_info:
                await service.create_note(NoteCreate(title="Report", category_id=99))

        assert exc_info.value.details == {"category_id": 99}
        mock_create.assert_not_called()

    async def test_update_with_unknown_category(self, service):
        with patch.object(service.category_repo, "get_by_id_or_none", return_value=None), \
             patch.object(service.repo, "update") as mock_update:
            with pytest.raises(ValidationError):
                await service.update_note(3, NoteUpdate(category_id=99))

        mock_update.assert_not_called()

    async def test_clearing_category_skips_lookup(self, service):
        with patch.object(service.category_repo, "get_by_id_or_none") as mock_lookup, \
             patch.object(service.repo, "update", return_value=MagicMock()) as mock_update:
            await service.update_note(3, NoteUpdate(category_id=None))

        mock_lookup.assert_not_called()
        mock_update.assert_called_once_with(3, category_id=None)


class TestNoteServiceUpdate:
    """Tests for partial updates."""

    async def test_only_set_fields_are_written(self, service):
        with patch.object(service.repo, "update", return_value=MagicMock()) as mock_update:
            await service.update_note(3, NoteUpdate(is_pinned=True))

        mock_update.assert_called_once_with(3, is_pinned=True)

    async def test_nullable_fields_can_be_cleared(self, service):
        with patch.object(service.repo, "update", return_value=MagicMock()) as mock_update:
            await service.update_note(3, NoteUpdate(content=None, title=None))

        mock_update.assert_called_once_with(3, content=None)

    async def test_empty_update_returns_note(self, service):
        note = MagicMock(id=3)
        with patch.object(service.repo, "get_by_id", return_value=note), \
             patch.object(service.repo, "update") as mock_update:
            result = await service.update_note(3, NoteUpdate())

        assert result is note
        mock_update.assert_not_called()

    async def test_update_missing_note(self, service):
        with patch.object(
            service.repo, "update", side_effect=NotFoundError("Note with ID 9 not found")
        ):
            with pytest.raises(NotFoundError):
                await service.update_note(9, NoteUpdate(title="x"))


class TestNoteServiceDuplicate:
    """Tests for duplication."""

    async def test_duplicate_is_unpinned_and_last(self, service):
        original = MagicMock(
            title="Ideas",
            content="Boat",
            type="list",
            list_items=[{"id": "a", "text": "Hull", "completed": False}],
            color="#fff",
            category_id=2,
        )
        with patch.object(service.repo, "get_by_id", return_value=original), \
             patch.object(service.repo, "get_max_order", return_value=4), \
             patch.object(service.repo, "create", return_value=MagicMock()) as mock_create:
            await service.duplicate_note(1)

        kwargs = mock_create.call_args.kwargs
        assert kwargs["title"] == "Ideas (Copy)"
        assert kwargs["is_pinned"] is False
        assert kwargs["order"] == 5
        assert kwargs["list_items"] == original.list_items
        assert kwargs["list_items"] is not original.list_items


class TestNoteServiceReorder:
    """Tests for applying reorder batches."""

    async def test_reorder_applies_all_pairs(self, service):
        request = ReorderRequest(notes=[NoteOrder(id=3, order=0), NoteOrder(id=1, order=1)])

        with patch.object(service.repo, "apply_orders", return_value=2) as mock_apply, \
             patch.object(service, "_logger") as mock_logger:
            await service.reorder(request)

        mock_apply.assert_called_once_with(request.notes)
        mock_logger.warning.assert_not_called()

    async def test_unknown_ids_are_ignored_with_warning(self, service):
        request = ReorderRequest(notes=[NoteOrder(id=7, order=2)])

        with patch.object(service.repo, "apply_orders", return_value=0), \
             patch.object(service, "_logger") as mock_logger:
            await service.reorder(request)

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["extra"]["ignored"] == 1

    async def test_empty_batch_is_a_noop(self, service):
        with patch.object(service.repo, "apply_orders", return_value=0) as mock_apply:
            await service.reorder(ReorderRequest(notes=[]))

        mock_apply.assert_called_once_with([])

    async def test_database_failure_is_translated(self, service):
        error = OperationalError("UPDATE", {}, Exception("database is locked"))

        with patch.object(service.repo, "apply_orders", side_effect=error):
            with pytest.raises(DatabaseError):
                await service.reorder(ReorderRequest(notes=[NoteOrder(id=1, order=0)]))


class TestNoteServiceBulk:
    """Tests for bulk operations."""

    async def test_bulk_delete(self, service):
        with patch.object(service.repo, "delete_many", return_value=2) as mock_delete:
            assert await service.bulk_delete(BulkIdsRequest(ids=[1, 2])) == 2

        mock_delete.assert_called_once_with([1, 2])

    async def test_bulk_archive(self, service):
        with patch.object(service.repo, "archive_many", return_value=1) as mock_archive:
            assert await service.bulk_archive(BulkIdsRequest(ids=[4])) == 1

        mock_archive.assert_called_once_with([4])
