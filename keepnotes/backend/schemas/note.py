"""
Note Schemas.

Pydantic schemas for note API request/response validation, including
the reorder batch exchanged between the client and the server.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from keepnotes.backend.schemas.category import CategoryResponse

NoteType = Literal["text", "list"]


class ListItem(BaseModel):
    """One checklist entry of a list-type note."""

    id: str
    text: str
    completed: bool = False


class NoteCreate(BaseModel):
    """Schema for creating a new note. The server assigns `order`."""

    title: str = Field(
        ...,
        max_length=255,
        description="Note title",
        examples=["Groceries"],
    )
    content: str | None = Field(
        default=None,
        description="Note content",
    )
    type: NoteType = Field(default="text", description="text or list")
    list_items: list[ListItem] | None = None
    color: str | None = Field(default=None, max_length=32)
    category_id: int | None = None


class NoteUpdate(BaseModel):
    """
    Schema for a partial note update.

    `order` is deliberately absent: only the reorder batch changes it.
    Pinning moves a note to the other section without touching its key.
    """

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    type: NoteType | None = None
    list_items: list[ListItem] | None = None
    color: str | None = Field(default=None, max_length=32)
    is_pinned: bool | None = None
    is_archived: bool | None = None
    category_id: int | None = None


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: int = Field(description="Note identifier")
    title: str
    content: str | None = None
    type: NoteType = "text"
    list_items: list[ListItem] | None = None
    color: str = "transparent"
    is_pinned: bool = False
    is_archived: bool = False
    order: float = Field(description="Section-local rank key")
    category_id: int | None = None
    category: CategoryResponse | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteOrder(BaseModel):
    """One (id, order) pair of a reorder batch."""

    id: int
    order: float = Field(allow_inf_nan=False)


class ReorderRequest(BaseModel):
    """Body of PATCH /notes/reorder."""

    notes: list[NoteOrder]


class BulkIdsRequest(BaseModel):
    """Body of the bulk delete and bulk archive endpoints."""

    ids: list[int]
