"""
Note Model.

A note belongs to one display section, selected by is_pinned, and is
ranked inside that section by its real-valued order key.
"""

from typing import Any

from sqlalchemy import JSON, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from keepnotes.backend.models.base import Base, IntIdMixin, TimestampMixin
from keepnotes.backend.models.category import Category


class Note(IntIdMixin, TimestampMixin, Base):
    """
    Note database model.

    `order` is only compared between notes of the same section. It may be
    fractional between a drag and the following reorder commit, which
    rewrites the whole section to 0..n-1.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    type: Mapped[str] = mapped_column(
        String(16),
        default="text",
        nullable=False,
    )
    list_items: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSON,
        nullable=True,
    )
    color: Mapped[str] = mapped_column(
        String(32),
        default="transparent",
        nullable=False,
    )
    is_pinned: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    is_archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    order: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Loaded with every note so responses can show the category
    category: Mapped[Category | None] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, order={self.order})>"
