"""
Notes API Endpoints.

REST API endpoints for note management and manual reordering.

Fixed paths (/pinned, /archived, /bulk, /reorder) are declared before
/{note_id} so they are not captured by it.
"""

from fastapi import APIRouter, Query

from keepnotes.backend.core.dependencies import DbSession, RequestId
from keepnotes.backend.schemas.base import ApiResponse
from keepnotes.backend.schemas.note import (
    BulkIdsRequest,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    ReorderRequest,
)
from keepnotes.backend.services.note import NoteService

router = APIRouter()


def _many(notes) -> ApiResponse[list[NoteResponse]]:
    return ApiResponse(data=[NoteResponse.model_validate(note) for note in notes])


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List active notes",
    description=(
        "Active notes sorted pinned first, then by order ascending, "
        "then newest first."
    ),
)
async def list_notes(
    db: DbSession,
    request_id: RequestId,
    category_id: int | None = Query(
        default=None,
        description="Only notes of this category",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """List active notes."""
    service = NoteService(db)
    return _many(await service.list_notes(category_id=category_id))


@router.get(
    "/pinned",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List pinned notes",
)
async def list_pinned(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """List active pinned notes."""
    service = NoteService(db)
    return _many(await service.list_pinned())


@router.get(
    "/archived",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List archived notes",
)
async def list_archived(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """List archived notes."""
    service = NoteService(db)
    return _many(await service.list_archived())


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a note ranked after every existing note.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(data)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.patch(
    "/reorder",
    status_code=204,
    summary="Reorder notes",
    description=(
        "Write a batch of (id, order) pairs. Each pair is applied "
        "independently; unknown ids are ignored."
    ),
)
async def reorder_notes(
    data: ReorderRequest,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Apply a reorder batch."""
    service = NoteService(db)
    await service.reorder(data)


@router.delete(
    "/bulk",
    status_code=204,
    summary="Delete several notes",
)
async def bulk_delete(
    data: BulkIdsRequest,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete several notes."""
    service = NoteService(db)
    await service.bulk_delete(data)


@router.patch(
    "/bulk/archive",
    status_code=204,
    summary="Archive several notes",
)
async def bulk_archive(
    data: BulkIdsRequest,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Archive several notes."""
    service = NoteService(db)
    await service.bulk_archive(data)


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
)
async def get_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Partial update. Pinning switches section but keeps the order key.",
)
async def update_note(
    note_id: int,
    data: NoteUpdate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, data)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id)


@router.patch(
    "/{note_id}/archive",
    response_model=ApiResponse[NoteResponse],
    summary="Archive a note",
)
async def archive_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Archive a note."""
    service = NoteService(db)
    note = await service.archive_note(note_id)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.patch(
    "/{note_id}/unarchive",
    response_model=ApiResponse[NoteResponse],
    summary="Unarchive a note",
)
async def unarchive_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Restore an archived note."""
    service = NoteService(db)
    note = await service.unarchive_note(note_id)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.post(
    "/{note_id}/duplicate",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Duplicate a note",
)
async def duplicate_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Duplicate a note."""
    service = NoteService(db)
    note = await service.duplicate_note(note_id)
    return ApiResponse(data=NoteResponse.model_validate(note))
