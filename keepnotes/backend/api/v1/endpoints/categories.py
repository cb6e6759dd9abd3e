"""
Categories API Endpoints.
"""

from fastapi import APIRouter

from keepnotes.backend.core.dependencies import DbSession, RequestId
from keepnotes.backend.schemas.base import ApiResponse
from keepnotes.backend.schemas.category import CategoryCreate, CategoryResponse
from keepnotes.backend.services.category import CategoryService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="List categories",
)
async def list_categories(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[CategoryResponse]]:
    """List all categories by name."""
    service = CategoryService(db)
    categories = await service.list_categories()
    return ApiResponse(
        data=[CategoryResponse.model_validate(c) for c in categories]
    )


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=201,
    summary="Create a category",
)
async def create_category(
    data: CategoryCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    """Create a category. Names are unique."""
    service = CategoryService(db)
    category = await service.create_category(data)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.post(
    "/seed",
    status_code=204,
    summary="Seed default categories",
)
async def seed_categories(
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Create the default categories that are missing."""
    service = CategoryService(db)
    await service.seed()


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Get a category",
)
async def get_category(
    category_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    """Get a category by ID."""
    service = CategoryService(db)
    category = await service.get_category(category_id)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.delete(
    "/{category_id}",
    status_code=204,
    summary="Delete a category",
)
async def delete_category(
    category_id: int,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete a category. Its notes become uncategorized."""
    service = CategoryService(db)
    await service.delete_category(category_id)
