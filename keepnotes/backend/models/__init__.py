# Importing the models registers their tables on Base.metadata
from keepnotes.backend.models.base import Base
from keepnotes.backend.models.category import Category
from keepnotes.backend.models.note import Note

__all__ = ["Base", "Category", "Note"]
