"""
Unit Tests for the Notes Board.

NotesAPI is mocked; each handler is checked for what it does to the
store on success and on failure.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from keepnotes.backend.schemas.note import ListItem
from keepnotes.frontend.board import NoteBoard, matches_query
from keepnotes.frontend.ordering import Section
from keepnotes.frontend.reorder import ReorderPhase
from keepnotes.frontend.state import prepend_note


@pytest.fixture
def api() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def notify() -> MagicMock:
    return MagicMock()


@pytest.fixture
async def board(api, notify, note_factory) -> NoteBoard:
    api.list_notes.return_value = [
        note_factory(1, 0, title="Pinned groceries", is_pinned=True),
        note_factory(2, 1, title="Ideas", content="Build a boat"),
        note_factory(3, 2, title="Todo"),
    ]
    board = NoteBoard(api, notify=notify)
    await board.load()
    return board


def _ids(notes) -> list[int]:
    return [note.id for note in notes]


class TestLoadAndView:
    """Tests for loading and the derived views."""

    async def test_load_sets_state(self, board, api):
        api.list_notes.assert_awaited_once_with(None)
        assert _ids(board.store.notes) == [1, 2, 3]

    async def test_load_failure_keeps_state(self, board, api, notify):
        api.list_notes.side_effect = httpx.ConnectError("down")

        assert await board.load() is None
        assert _ids(board.store.notes) == [1, 2, 3]
        notify.assert_called_once_with("Failed to load notes")

    async def test_visible_notes_pinned_first(self, board):
        assert _ids(board.visible_notes()) == [1, 2, 3]
        assert _ids(board.visible_notes(pinned_only=True)) == [1]

    async def test_visible_notes_query(self, board):
        assert _ids(board.visible_notes(query="boat")) == [2]
        assert _ids(board.visible_notes(query="GROCER")) == [1]
        assert board.visible_notes(query="nothing") == []

    def test_matches_list_items(self, note_factory):
        note = note_factory(
            1, 0, type="list", list_items=[ListItem(id="a", text="Milk")]
        )

        assert matches_query(note, "milk")
        assert not matches_query(note, "eggs")


class TestWriteHandlers:
    """Tests for the confirmed-write handlers."""

    async def test_add_note_prepends(self, board, api, note_factory):
        api.create_note.return_value = note_factory(9, 3, title="New")

        note = await board.add_note(title="New")

        api.create_note.assert_awaited_once_with(title="New")
        assert note.id == 9
        assert _ids(board.store.notes) == [9, 1, 2, 3]
        assert _ids(board.section(Section.OTHER)) == [2, 3, 9]

    async def test_pin_keeps_order(self, board, api, note_factory):
        api.update_note.return_value = note_factory(3, 2, title="Todo", is_pinned=True)

        await board.pin(3)

        api.update_note.assert_awaited_once_with(3, is_pinned=True)
        assert _ids(board.section(Section.PINNED)) == [1, 3]
        assert board.store.state.get(3).order == 2

    async def test_update_failure_notifies(self, board, api, notify):
        api.update_note.side_effect = httpx.ReadTimeout("slow")

        assert await board.change_color(2, "#ff0000") is None
        notify.assert_called_once_with("Failed to update note")
        assert board.store.state.get(2).color == "transparent"

    async def test_toggle_list_item(self, board, api, note_factory):
        items = [ListItem(id="a", text="Milk"), ListItem(id="b", text="Eggs")]
        board.store.apply(prepend_note, note_factory(4, 3, type="list", list_items=items))
        api.update_note.return_value = note_factory(4, 3)

        await board.toggle_list_item(4, "b")

        api.update_note.assert_awaited_once_with(
            4,
            list_items=[
                {"id": "a", "text": "Milk", "completed": False},
                {"id": "b", "text": "Eggs", "completed": True},
            ],
        )

    async def test_toggle_list_item_on_text_note_is_noop(self, board, api):
        assert await board.toggle_list_item(2, "a") is None
        api.update_note.assert_not_awaited()

    async def test_duplicate_prepends(self, board, api, note_factory):
        api.duplicate.return_value = note_factory(7, 3, title="Ideas (Copy)")

        await board.duplicate(2)

        assert board.store.notes[0].title == "Ideas (Copy)"

    async def test_archive_removes(self, board, api, note_factory):
        api.archive.return_value = note_factory(2, 1, is_archived=True)

        await board.archive(2)

        assert _ids(board.store.notes) == [1, 3]

    async def test_unarchive_prepends(self, board, api, note_factory):
        api.unarchive.return_value = note_factory(8, 5)

        await board.unarchive(8)

        assert _ids(board.store.notes) == [8, 1, 2, 3]

    async def test_delete(self, board, api):
        assert await board.delete(3) is True
        api.delete.assert_awaited_once_with(3)
        assert _ids(board.store.notes) == [1, 2]

    async def test_delete_failure_keeps_note(self, board, api, notify):
        api.delete.side_effect = httpx.ConnectError("down")

        assert await board.delete(3) is False
        assert _ids(board.store.notes) == [1, 2, 3]
        notify.assert_called_once_with("Failed to delete note")

    async def test_bulk_delete_and_archive(self, board, api):
        assert await board.bulk_delete([1, 3]) is True
        assert _ids(board.store.notes) == [2]

        assert await board.bulk_archive([2]) is True
        assert board.store.notes == ()


class TestOrdering:
    """Tests for the reorder entry points."""

    async def test_move_delegates_to_controller(self, board, api):
        outcome = await board.move(Section.OTHER, active_id=3, over_id=2)

        assert outcome.phase is ReorderPhase.COMMITTED
        api.reorder.assert_awaited_once()
        assert _ids(board.section(Section.OTHER)) == [3, 2]

    async def test_reorder_failure_rolls_back(self, board, api, notify):
        api.reorder.side_effect = httpx.ConnectError("down")

        outcome = await board.reorder(3, -5.0, Section.OTHER)

        assert outcome.phase is ReorderPhase.ROLLED_BACK
        assert _ids(board.section(Section.OTHER)) == [2, 3]
        notify.assert_called_once()
