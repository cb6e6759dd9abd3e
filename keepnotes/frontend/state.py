"""
Client Note State.

An explicit store for the notes the client renders. State is an
immutable snapshot; every change goes through a pure transition
function taking a snapshot and returning a new one, so each transition
can be exercised without any rendering or network.

Usage:
    store = NoteStore()
    store.apply(set_notes, notes)
    store.apply(merge_by_id, {3: {"order": -1.0}})
    snapshot = store.state
    ...
    store.restore(snapshot)
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from keepnotes.backend.schemas.note import NoteResponse


@dataclass(frozen=True)
class NotesState:
    """Immutable snapshot of the client's note list."""

    notes: tuple[NoteResponse, ...] = ()

    def get(self, note_id: int) -> NoteResponse | None:
        for note in self.notes:
            if note.id == note_id:
                return note
        return None


def set_notes(state: NotesState, notes: Iterable[NoteResponse]) -> NotesState:
    """Replace the whole list."""
    return NotesState(notes=tuple(notes))


def prepend_note(state: NotesState, note: NoteResponse) -> NotesState:
    """Put a new note at the front of the list."""
    return NotesState(notes=(note, *state.notes))


def replace_note(state: NotesState, note: NoteResponse) -> NotesState:
    """Swap in the server's copy of a note, matched by id."""
    return NotesState(
        notes=tuple(note if current.id == note.id else current for current in state.notes)
    )


def merge_by_id(
    state: NotesState,
    changes: Mapping[int, Mapping[str, Any]],
) -> NotesState:
    """Apply per-id field changes. Ids not in the list are ignored."""
    return NotesState(
        notes=tuple(
            note.model_copy(update=dict(changes[note.id])) if note.id in changes else note
            for note in state.notes
        )
    )


def filter_remove(
    state: NotesState,
    predicate: Callable[[NoteResponse], bool],
) -> NotesState:
    """Drop every note the predicate matches."""
    return NotesState(notes=tuple(note for note in state.notes if not predicate(note)))


class NoteStore:
    """Holder of the current snapshot."""

    def __init__(self, state: NotesState | None = None) -> None:
        self._state = state or NotesState()

    @property
    def state(self) -> NotesState:
        return self._state

    @property
    def notes(self) -> tuple[NoteResponse, ...]:
        return self._state.notes

    def apply(
        self,
        transition: Callable[..., NotesState],
        *args: Any,
    ) -> NotesState:
        """Run a transition against the current snapshot and keep the result."""
        self._state = transition(self._state, *args)
        return self._state

    def restore(self, snapshot: NotesState) -> None:
        """Put back a previously captured snapshot verbatim."""
        self._state = snapshot
