"""
Manual Ordering.

Section partitioning and order-key allocation for drag-and-drop moves.

Active notes fall into two sections, pinned and other. A note's `order`
is only meaningful against notes of its own section. A move computes one
new key for the dragged note so that sorting the section by key puts it
at the drop position; the reorder commit then rewrites the section to
dense integers so keys never drift deep into fractions.

Everything here is pure: no I/O, no mutation of the inputs.

Float precision: each midpoint insertion between the same two neighbors
halves the gap. Between two adjacent small integers a double can absorb
about PRECISION_DEPTH_LIMIT such halvings before the midpoint equals one
of its neighbors; for keys around 2**k the limit drops by roughly k.
Reindexing after every committed move resets the gap to 1.
"""

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Protocol

from keepnotes.backend.schemas.note import NoteOrder

PRECISION_DEPTH_LIMIT = 52


class Orderable(Protocol):
    id: int
    order: float
    is_pinned: bool
    is_archived: bool


class Section(str, Enum):
    """The two display sections of the active notes."""

    PINNED = "pinned"
    OTHER = "other"


def section_of(note: Orderable) -> Section:
    """Section a note currently belongs to."""
    return Section.PINNED if note.is_pinned else Section.OTHER


def section_notes(notes: Iterable[Orderable], section: Section) -> list[Orderable]:
    """
    Active notes of one section, ascending by order key.

    The sort is stable, so notes with equal keys keep the order they
    arrived in (the server lists newest first among equals).
    """
    return sorted(
        (
            note for note in notes
            if not note.is_archived and section_of(note) is section
        ),
        key=lambda note: note.order,
    )


def resolve_move(
    notes_in_section: Sequence[Orderable],
    active_id: int,
    over_id: int | None,
) -> tuple[int, int] | None:
    """
    Turn a drag-end event into (old_index, new_index).

    Returns None when there is nothing to do: no drop target, a drop onto
    itself, or an id that is not in the section.
    """
    if over_id is None or over_id == active_id:
        return None

    ids = [note.id for note in notes_in_section]
    if active_id not in ids or over_id not in ids:
        return None
    return ids.index(active_id), ids.index(over_id)


def allocate_order(
    notes_in_section: Sequence[Orderable],
    old_index: int,
    new_index: int,
) -> float | None:
    """
    New order key for the note at old_index so it sorts at new_index.

    `notes_in_section` is ascending by key and still contains the moved
    note at old_index. Out-of-range indices return None.

    - Dropped first: one below the current first key.
    - Dropped last: one above the current last key.
    - Otherwise: midpoint between the note now at new_index and its
      neighbor on the far side of the direction of travel.
    """
    length = len(notes_in_section)
    if not (0 <= old_index < length and 0 <= new_index < length):
        return None

    if new_index == 0:
        return notes_in_section[0].order - 1

    if new_index == length - 1:
        return notes_in_section[length - 1].order + 1

    after_order = notes_in_section[new_index].order
    if new_index > old_index:
        # Moving down: land between the target and the one below it
        far = new_index + 1
        before_order = (
            notes_in_section[far].order if far < length else after_order + 2
        )
    else:
        far = new_index - 1
        before_order = (
            notes_in_section[far].order if far >= 0 else after_order - 2
        )
    return (after_order + before_order) / 2


def reindex(ordered_notes: Iterable[Orderable]) -> list[NoteOrder]:
    """Dense (id, 0..n-1) pairs in the given sequence order."""
    return [
        NoteOrder(id=note.id, order=index)
        for index, note in enumerate(ordered_notes)
    ]
