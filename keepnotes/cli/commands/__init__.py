"""
CLI Commands.

Organized by domain/feature area.
"""

from keepnotes.cli.commands.categories import app as categories_app
from keepnotes.cli.commands.health import app as health_app
from keepnotes.cli.commands.notes import app as notes_app
from keepnotes.cli.commands.server import app as server_app

__all__ = [
    "categories_app",
    "health_app",
    "notes_app",
    "server_app",
]
