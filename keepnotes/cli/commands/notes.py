"""
Notes Commands.

Commands for listing, creating and manually ordering notes over the API.
Every command drives the same NoteBoard the web client uses, with the
X-Frontend-ID header set to `cli`.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from keepnotes.backend.schemas.note import NoteResponse
from keepnotes.cli.client import APIClient
from keepnotes.frontend.api import NotesAPI
from keepnotes.frontend.board import NoteBoard
from keepnotes.frontend.ordering import Section, section_of
from keepnotes.frontend.reorder import ReorderPhase

app = typer.Typer(help="Note commands")
console = Console()

T = TypeVar("T")


def _notify(message: str) -> None:
    console.print(f"[red]{message}[/red]")


def _run(action: Callable[[NoteBoard], Awaitable[T]]) -> T:
    """Run an async action against a freshly loaded board, then close the client."""

    async def runner() -> T:
        client = APIClient(frontend="cli")
        board = NoteBoard(NotesAPI(client), notify=_notify, source="cli")
        try:
            if await board.load() is None:
                raise typer.Exit(1)
            return await action(board)
        finally:
            await client.close()

    return asyncio.run(runner())


def _notes_table(title: str, notes: list[NoteResponse]) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title")
    table.add_column("Order", justify="right")
    table.add_column("Color", style="dim")
    table.add_column("Category", style="magenta")

    for note in notes:
        table.add_row(
            str(note.id),
            note.title or "[dim](untitled)[/dim]",
            f"{note.order:g}",
            note.color,
            note.category.name if note.category else "",
        )
    return table


@app.command("list")
def list_notes(
    query: str = typer.Option(None, "--query", "-q", help="Filter by text"),
    pinned_only: bool = typer.Option(False, "--pinned", help="Only pinned notes"),
) -> None:
    """
    List active notes, pinned section first.

    Examples:
        cli.py notes list
        cli.py notes list -q groceries
    """

    async def action(board: NoteBoard) -> None:
        visible = board.visible_notes(query=query, pinned_only=pinned_only)
        for section in Section:
            notes = [note for note in visible if section_of(note) is section]
            if notes:
                console.print(_notes_table(section.value.title(), notes))
        if not visible:
            console.print("[dim]No notes[/dim]")

    _run(action)


@app.command()
def add(
    title: str = typer.Argument(..., help="Note title"),
    content: str = typer.Option(None, "--content", "-c", help="Note body"),
    color: str = typer.Option(None, "--color", help="Note color"),
) -> None:
    """
    Create a text note. It is placed after every existing note.

    Examples:
        cli.py notes add "Groceries" -c "milk, eggs"
    """
    fields: dict[str, Any] = {"title": title}
    if content is not None:
        fields["content"] = content
    if color is not None:
        fields["color"] = color

    async def action(board: NoteBoard) -> NoteResponse | None:
        return await board.add_note(**fields)

    note = _run(action)
    if note is None:
        raise typer.Exit(1)
    console.print(f"[green]Created note {note.id} (order {note.order:g})[/green]")


@app.command()
def move(
    active_id: int = typer.Argument(..., help="Note being moved"),
    over_id: int = typer.Argument(..., help="Note it is dropped on"),
) -> None:
    """
    Move a note to the position of another note in the same section.

    Examples:
        cli.py notes move 7 2
    """

    async def action(board: NoteBoard) -> Any:
        note = board.store.state.get(active_id)
        if note is None:
            console.print(f"[red]Note {active_id} not found[/red]")
            raise typer.Exit(1)
        return await board.move(section_of(note), active_id, over_id)

    outcome = _run(action)
    if outcome is None:
        console.print("[dim]Nothing to move[/dim]")
        return
    if outcome.phase is not ReorderPhase.COMMITTED:
        raise typer.Exit(1)

    order = ", ".join(f"{pair.id}:{pair.order:g}" for pair in outcome.pairs)
    console.print(f"[green]Saved {outcome.section.value} order[/green] [dim]{order}[/dim]")


def _set_pinned(note_id: int, is_pinned: bool) -> None:
    async def action(board: NoteBoard) -> NoteResponse | None:
        return await board.pin(note_id, is_pinned)

    if _run(action) is None:
        raise typer.Exit(1)
    console.print(f"[green]Note {note_id} {'pinned' if is_pinned else 'unpinned'}[/green]")


@app.command()
def pin(note_id: int = typer.Argument(..., help="Note ID")) -> None:
    """Pin a note."""
    _set_pinned(note_id, True)


@app.command()
def unpin(note_id: int = typer.Argument(..., help="Note ID")) -> None:
    """Unpin a note."""
    _set_pinned(note_id, False)


@app.command()
def archive(note_id: int = typer.Argument(..., help="Note ID")) -> None:
    """Archive a note."""

    async def action(board: NoteBoard) -> NoteResponse | None:
        return await board.archive(note_id)

    if _run(action) is None:
        raise typer.Exit(1)
    console.print(f"[green]Note {note_id} archived[/green]")
