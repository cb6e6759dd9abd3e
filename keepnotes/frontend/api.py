"""
Notes API Client.

Typed wrapper over the notes and categories endpoints. Every method
raises httpx.HTTPError on transport failure or a non-2xx status, so
callers see one failure signal regardless of cause.
"""

from collections.abc import Iterable
from typing import Any

import httpx

from keepnotes.backend.schemas.category import CategoryResponse
from keepnotes.backend.schemas.note import NoteOrder, NoteResponse
from keepnotes.cli.client import APIClient


class NotesAPI:
    """
    Client for /api/v1/notes and /api/v1/categories.

    Usage:
        api = NotesAPI(APIClient(frontend="web"))
        notes = await api.list_notes()
        await api.reorder([NoteOrder(id=3, order=0), NoteOrder(id=1, order=1)])
    """

    def __init__(self, client: APIClient, prefix: str = "/api/v1") -> None:
        self.client = client
        self.prefix = prefix.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    @staticmethod
    def _data(response: httpx.Response) -> Any:
        response.raise_for_status()
        return response.json()["data"]

    @staticmethod
    def _notes(data: list[dict[str, Any]]) -> list[NoteResponse]:
        return [NoteResponse.model_validate(item) for item in data]

    # -- notes ---------------------------------------------------------------

    async def list_notes(self, category_id: int | None = None) -> list[NoteResponse]:
        params = {"category_id": category_id} if category_id is not None else None
        response = await self.client.get(self._url("/notes"), params=params)
        return self._notes(self._data(response))

    async def list_pinned(self) -> list[NoteResponse]:
        response = await self.client.get(self._url("/notes/pinned"))
        return self._notes(self._data(response))

    async def list_archived(self) -> list[NoteResponse]:
        response = await self.client.get(self._url("/notes/archived"))
        return self._notes(self._data(response))

    async def get_note(self, note_id: int) -> NoteResponse:
        response = await self.client.get(self._url(f"/notes/{note_id}"))
        return NoteResponse.model_validate(self._data(response))

    async def create_note(self, **fields: Any) -> NoteResponse:
        response = await self.client.post(self._url("/notes"), json=fields)
        return NoteResponse.model_validate(self._data(response))

    async def update_note(self, note_id: int, **fields: Any) -> NoteResponse:
        response = await self.client.patch(self._url(f"/notes/{note_id}"), json=fields)
        return NoteResponse.model_validate(self._data(response))

    async def reorder(self, pairs: Iterable[NoteOrder]) -> None:
        """Send one reorder batch. Success carries no body."""
        body = {"notes": [pair.model_dump() for pair in pairs]}
        response = await self.client.patch(self._url("/notes/reorder"), json=body)
        response.raise_for_status()

    async def archive(self, note_id: int) -> NoteResponse:
        response = await self.client.patch(self._url(f"/notes/{note_id}/archive"))
        return NoteResponse.model_validate(self._data(response))

    async def unarchive(self, note_id: int) -> NoteResponse:
        response = await self.client.patch(self._url(f"/notes/{note_id}/unarchive"))
        return NoteResponse.model_validate(self._data(response))

    async def duplicate(self, note_id: int) -> NoteResponse:
        response = await self.client.post(self._url(f"/notes/{note_id}/duplicate"))
        return NoteResponse.model_validate(self._data(response))

    async def delete(self, note_id: int) -> None:
        response = await self.client.delete(self._url(f"/notes/{note_id}"))
        response.raise_for_status()

    async def bulk_delete(self, ids: list[int]) -> None:
        response = await self.client.request(
            "DELETE", self._url("/notes/bulk"), json={"ids": ids}
        )
        response.raise_for_status()

    async def bulk_archive(self, ids: list[int]) -> None:
        response = await self.client.patch(self._url("/notes/bulk/archive"), json={"ids": ids})
        response.raise_for_status()

    # -- categories ----------------------------------------------------------

    async def list_categories(self) -> list[CategoryResponse]:
        response = await self.client.get(self._url("/categories"))
        return [CategoryResponse.model_validate(item) for item in self._data(response)]

    async def create_category(self, name: str, **fields: Any) -> CategoryResponse:
        response = await self.client.post(
            self._url("/categories"), json={"name": name, **fields}
        )
        return CategoryResponse.model_validate(self._data(response))

    async def seed_categories(self) -> None:
        response = await self.client.post(self._url("/categories/seed"))
        response.raise_for_status()

    async def delete_category(self, category_id: int) -> None:
        response = await self.client.delete(self._url(f"/categories/{category_id}"))
        response.raise_for_status()
