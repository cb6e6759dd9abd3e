"""
Category Commands.
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from keepnotes.cli.client import APIClient
from keepnotes.frontend.api import NotesAPI

app = typer.Typer(help="Category commands")
console = Console()


@app.command("list")
def list_categories() -> None:
    """
    List categories by name.

    Examples:
        cli.py categories list
    """
    asyncio.run(_list())


async def _list() -> None:
    client = APIClient(frontend="cli")
    try:
        categories = await NotesAPI(client).list_categories()
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await client.close()

    table = Table(title="Categories", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Icon", style="dim")
    table.add_column("Color", style="dim")
    for category in categories:
        table.add_row(str(category.id), category.name, category.icon, category.color)
    console.print(table)


@app.command()
def seed() -> None:
    """
    Create the default categories that do not exist yet.

    Examples:
        cli.py categories seed
    """
    asyncio.run(_seed())


async def _seed() -> None:
    client = APIClient(frontend="cli")
    try:
        await NotesAPI(client).seed_categories()
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await client.close()
    console.print("[green]Default categories seeded[/green]")
