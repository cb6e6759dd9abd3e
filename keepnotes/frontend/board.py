"""
Notes Board.

Client-side handlers for everything the notes screen does. Each handler
calls the API, then reduces the server's answer into the NoteStore.
Only reordering is optimistic (see ReorderController); the other
handlers change state after the server confirms. A failed call is
logged and notified, leaves state as it was, and returns None.
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx

from keepnotes.backend.core.logging import get_logger, log_with_source
from keepnotes.backend.schemas.note import NoteResponse
from keepnotes.frontend.api import NotesAPI
from keepnotes.frontend.ordering import Section, section_notes
from keepnotes.frontend.reorder import Notifier, ReorderController, ReorderOutcome
from keepnotes.frontend.state import (
    NoteStore,
    filter_remove,
    prepend_note,
    replace_note,
    set_notes,
)

logger = get_logger(__name__)

T = TypeVar("T")


def matches_query(note: NoteResponse, query: str) -> bool:
    """Case-insensitive match on title, content or any list item text."""
    needle = query.lower()
    if needle in note.title.lower():
        return True
    if note.content and needle in note.content.lower():
        return True
    return any(needle in item.text.lower() for item in note.list_items or ())


class NoteBoard:
    """
    State and handlers behind the notes screen.

    Usage:
        board = NoteBoard(NotesAPI(APIClient(frontend="web")))
        await board.load()
        await board.move(Section.OTHER, active_id=5, over_id=2)
        board.section(Section.OTHER)
    """

    def __init__(
        self,
        api: NotesAPI,
        store: NoteStore | None = None,
        notify: Notifier | None = None,
        source: str = "web",
    ) -> None:
        self.api = api
        self.store = store or NoteStore()
        self.source = source
        self._notify = notify or self._log_notification
        self.reorderer = ReorderController(
            self.store, api, notify=self._notify, source=source
        )

    def _log_notification(self, message: str) -> None:
        log_with_source(logger, self.source, "warning", message)

    async def _call(self, action: str, awaitable: Awaitable[T]) -> T | None:
        try:
            return await awaitable
        except httpx.HTTPError as exc:
            log_with_source(
                logger, self.source, "error", "Note action failed",
                action=action, error=str(exc),
            )
            self._notify(f"Failed to {action}")
            return None

    # -- reading -------------------------------------------------------------

    def section(self, section: Section) -> list[NoteResponse]:
        """Notes of one section in display order."""
        return section_notes(self.store.notes, section)

    def visible_notes(
        self,
        query: str | None = None,
        pinned_only: bool = False,
    ) -> list[NoteResponse]:
        """Pinned section then other section, filtered for display."""
        sections = [Section.PINNED] if pinned_only else [Section.PINNED, Section.OTHER]
        return [
            note
            for section in sections
            for note in self.section(section)
            if not query or matches_query(note, query)
        ]

    async def load(self, category_id: int | None = None) -> list[NoteResponse] | None:
        """Replace local state with the server's active notes."""
        notes = await self._call("load notes", self.api.list_notes(category_id))
        if notes is not None:
            self.store.apply(set_notes, notes)
        return notes

    # -- writing -------------------------------------------------------------

    async def add_note(self, **fields: Any) -> NoteResponse | None:
        note = await self._call("create note", self.api.create_note(**fields))
        if note is not None:
            self.store.apply(prepend_note, note)
        return note

    async def update_note(self, note_id: int, **fields: Any) -> NoteResponse | None:
        note = await self._call("update note", self.api.update_note(note_id, **fields))
        if note is not None:
            self.store.apply(replace_note, note)
        return note

    async def pin(self, note_id: int, is_pinned: bool = True) -> NoteResponse | None:
        """Move a note to the pinned or other section. Its key is kept."""
        return await self.update_note(note_id, is_pinned=is_pinned)

    async def change_color(self, note_id: int, color: str) -> NoteResponse | None:
        return await self.update_note(note_id, color=color)

    async def toggle_list_item(self, note_id: int, item_id: str) -> NoteResponse | None:
        note = self.store.state.get(note_id)
        if note is None or not note.list_items:
            return None

        items = [
            {**item.model_dump(), "completed": not item.completed}
            if item.id == item_id
            else item.model_dump()
            for item in note.list_items
        ]
        return await self.update_note(note_id, list_items=items)

    async def duplicate(self, note_id: int) -> NoteResponse | None:
        note = await self._call("duplicate note", self.api.duplicate(note_id))
        if note is not None:
            self.store.apply(prepend_note, note)
        return note

    async def archive(self, note_id: int) -> NoteResponse | None:
        note = await self._call("archive note", self.api.archive(note_id))
        if note is not None:
            self.store.apply(filter_remove, lambda n: n.id == note_id)
        return note

    async def unarchive(self, note_id: int) -> NoteResponse | None:
        note = await self._call("restore note", self.api.unarchive(note_id))
        if note is not None:
            self.store.apply(filter_remove, lambda n: n.id == note_id)
            self.store.apply(prepend_note, note)
        return note

    async def delete(self, note_id: int) -> bool:
        done = await self._call("delete note", self._acknowledged(self.api.delete(note_id)))
        if done:
            self.store.apply(filter_remove, lambda n: n.id == note_id)
        return bool(done)

    async def bulk_delete(self, ids: list[int]) -> bool:
        selected = set(ids)
        done = await self._call("delete notes", self._acknowledged(self.api.bulk_delete(ids)))
        if done:
            self.store.apply(filter_remove, lambda n: n.id in selected)
        return bool(done)

    async def bulk_archive(self, ids: list[int]) -> bool:
        selected = set(ids)
        done = await self._call("archive notes", self._acknowledged(self.api.bulk_archive(ids)))
        if done:
            self.store.apply(filter_remove, lambda n: n.id in selected)
        return bool(done)

    @staticmethod
    async def _acknowledged(awaitable: Awaitable[None]) -> bool:
        await awaitable
        return True

    # -- ordering ------------------------------------------------------------

    async def move(
        self,
        section: Section,
        active_id: int,
        over_id: int | None,
    ) -> ReorderOutcome | None:
        """Drag-and-drop: drop `active_id` onto `over_id` within a section."""
        return await self.reorderer.move(section, active_id, over_id)

    async def reorder(
        self,
        note_id: int,
        new_order: float,
        section: Section,
    ) -> ReorderOutcome | None:
        return await self.reorderer.reorder(note_id, new_order, section)
