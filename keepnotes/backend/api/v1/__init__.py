"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from keepnotes.backend.api.v1.endpoints import categories, notes

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
