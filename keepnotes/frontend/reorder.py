"""
Optimistic Reordering.

Applies a drag-and-drop move to the local store at once, sends the
section's dense ranks to the server, then either commits the dense
ranks locally or puts back the keys the move changed. When nothing
else touched the store meanwhile, the pre-move snapshot is restored
as is; otherwise only the section's keys are reverted, so notes
added or committed in the meantime survive.

Per section, one operation goes through:

    idle -> applying -> committed | rolled_back -> idle

A new move may start while an earlier one is still applying; it works
on the optimistic state. Each operation takes a sequence number and
the latest number issued per section is remembered. When a response
arrives for an operation that is no longer the latest of its section,
it is superseded: the newer operation's batch already covers the whole
section, so the older response neither commits nor rolls back.
"""

import itertools
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import httpx

from keepnotes.backend.core.logging import get_logger, log_with_source
from keepnotes.backend.schemas.note import NoteOrder
from keepnotes.frontend.ordering import (
    Section,
    allocate_order,
    reindex,
    resolve_move,
    section_notes,
)
from keepnotes.frontend.state import NoteStore, NotesState, merge_by_id

logger = get_logger(__name__)

FAILURE_MESSAGE = "Failed to save the new note order"

Notifier = Callable[[str], None]


class ReorderGateway(Protocol):
    async def reorder(self, pairs: tuple[NoteOrder, ...]) -> None: ...


class ReorderPhase(str, Enum):
    IDLE = "idle"
    APPLYING = "applying"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class ReorderOutcome:
    """How one reorder operation ended."""

    sequence: int
    section: Section
    note_id: int
    phase: ReorderPhase
    pairs: tuple[NoteOrder, ...]


class ReorderController:
    """
    Optimistic reorder flow over a NoteStore.

    Usage:
        controller = ReorderController(store, NotesAPI(client), notify=toast)
        await controller.move(Section.PINNED, active_id=3, over_id=1)
    """

    def __init__(
        self,
        store: NoteStore,
        api: ReorderGateway,
        notify: Notifier | None = None,
        source: str = "web",
    ) -> None:
        self.store = store
        self.api = api
        self.source = source
        self._notify = notify or self._log_notification
        self._sequence = itertools.count(1)
        self._latest: dict[Section, int] = {}
        self._in_flight: dict[Section, int] = defaultdict(int)

    def _log_notification(self, message: str) -> None:
        log_with_source(logger, self.source, "warning", message)

    def phase(self, section: Section) -> ReorderPhase:
        """APPLYING while a request for the section is in flight."""
        return ReorderPhase.APPLYING if self._in_flight[section] else ReorderPhase.IDLE

    async def move(
        self,
        section: Section,
        active_id: int,
        over_id: int | None,
    ) -> ReorderOutcome | None:
        """
        Handle a drag that ended with `active_id` dropped on `over_id`.

        Returns None when the drop is a no-op.
        """
        notes = section_notes(self.store.notes, section)
        indices = resolve_move(notes, active_id, over_id)
        if indices is None:
            return None

        new_order = allocate_order(notes, *indices)
        if new_order is None:
            return None
        return await self.reorder(active_id, new_order, section)

    async def reorder(
        self,
        note_id: int,
        new_order: float,
        section: Section,
    ) -> ReorderOutcome | None:
        """
        Give `note_id` the key `new_order` and persist its section.

        Returns None if the note is not an active member of `section`.
        """
        if all(note.id != note_id for note in section_notes(self.store.notes, section)):
            return None

        previous_state = self.store.state
        sequence = next(self._sequence)
        self._latest[section] = sequence
        self._in_flight[section] += 1

        applied_state = self.store.apply(merge_by_id, {note_id: {"order": new_order}})
        pairs = tuple(reindex(section_notes(self.store.notes, section)))

        log_with_source(
            logger,
            self.source,
            "debug",
            "Reorder applied locally",
            sequence=sequence,
            section=section.value,
            note_id=note_id,
            order=new_order,
        )

        try:
            try:
                await self.api.reorder(pairs)
            except httpx.HTTPError as exc:
                return self._finish_failed(
                    sequence, section, note_id, pairs, previous_state, applied_state, exc
                )
            return self._finish_succeeded(sequence, section, note_id, pairs)
        finally:
            self._in_flight[section] -= 1

    def _is_latest(self, sequence: int, section: Section) -> bool:
        return self._latest.get(section) == sequence

    def _finish_succeeded(
        self,
        sequence: int,
        section: Section,
        note_id: int,
        pairs: tuple[NoteOrder, ...],
    ) -> ReorderOutcome:
        if not self._is_latest(sequence, section):
            log_with_source(
                logger, self.source, "debug", "Stale reorder response ignored",
                sequence=sequence, section=section.value,
            )
            return ReorderOutcome(sequence, section, note_id, ReorderPhase.SUPERSEDED, pairs)

        self.store.apply(merge_by_id, {pair.id: {"order": pair.order} for pair in pairs})
        log_with_source(
            logger, self.source, "info", "Reorder committed",
            sequence=sequence, section=section.value, count=len(pairs),
        )
        return ReorderOutcome(sequence, section, note_id, ReorderPhase.COMMITTED, pairs)

    def _finish_failed(
        self,
        sequence: int,
        section: Section,
        note_id: int,
        pairs: tuple[NoteOrder, ...],
        previous_state: NotesState,
        applied_state: NotesState,
        exc: httpx.HTTPError,
    ) -> ReorderOutcome:
        log_with_source(
            logger, self.source, "warning", "Reorder failed",
            sequence=sequence, section=section.value, error=str(exc),
        )
        self._notify(FAILURE_MESSAGE)

        if not self._is_latest(sequence, section):
            return ReorderOutcome(sequence, section, note_id, ReorderPhase.SUPERSEDED, pairs)

        if self.store.state is applied_state:
            self.store.restore(previous_state)
        else:
            # Other changes landed while the request was in flight; only
            # this operation's keys go back.
            before = {note.id: note.order for note in previous_state.notes}
            self.store.apply(merge_by_id, {
                pair.id: {"order": before[pair.id]}
                for pair in pairs
                if pair.id in before
            })
        return ReorderOutcome(sequence, section, note_id, ReorderPhase.ROLLED_BACK, pairs)
