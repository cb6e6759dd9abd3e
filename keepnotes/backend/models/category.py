"""
Category Model.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from keepnotes.backend.models.base import Base, IntIdMixin


class Category(IntIdMixin, Base):
    """Named grouping a note may optionally belong to."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
    icon: Mapped[str] = mapped_column(
        String(50),
        default="folder",
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(32),
        default="#6366f1",
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
