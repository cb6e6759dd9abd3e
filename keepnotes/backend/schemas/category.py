"""
Category Schemas.
"""

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Work"])
    icon: str | None = Field(default=None, max_length=50)
    color: str | None = Field(default=None, max_length=32)


class CategoryResponse(BaseModel):
    """Schema for category in API responses."""

    id: int
    name: str
    icon: str
    color: str

    model_config = ConfigDict(from_attributes=True)
