#!/usr/bin/env python3
"""
KeepNotes CLI.

Command-line client for the notes backend.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                      # Show help

    # Server
    python cli.py server start                # Start FastAPI server
    python cli.py server start --reload       # Start with auto-reload

    # Notes (requires server)
    python cli.py notes list                  # Pinned section, then others
    python cli.py notes add "Groceries"       # New note after all others
    python cli.py notes move 7 2              # Drop note 7 onto note 2
    python cli.py notes pin 7                 # Pin / unpin / archive

    # Categories (requires server)
    python cli.py categories list
    python cli.py categories seed

    # Health checks
    python cli.py health status               # Readiness (database)
    python cli.py health ping                 # Liveness

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from keepnotes.cli.commands import categories_app, health_app, notes_app, server_app

app = typer.Typer(
    name="cli",
    help="KeepNotes CLI - server, notes, categories and health checks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(server_app, name="server")
app.add_typer(notes_app, name="notes")
app.add_typer(categories_app, name="categories")
app.add_typer(health_app, name="health")


def _validate_project_root() -> None:
    """Validate that we're running from the project root."""
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    KeepNotes CLI.

    Server management, note ordering and health checks.
    """
    _validate_project_root()

    from keepnotes.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console", enable_file_logging=False)


if __name__ == "__main__":
    app()
