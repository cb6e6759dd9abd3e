"""
Health Check Commands.

Commands for checking backend health and status.
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from keepnotes.cli.client import close_api_client, get_api_client

app = typer.Typer(help="Health check commands")
console = Console()


@app.command()
def status() -> None:
    """
    Check backend readiness (requires running server).

    Examples:
        cli.py health status
    """
    asyncio.run(_status())


async def _status() -> None:
    client = get_api_client()

    try:
        response = await client.get("/health/ready")
    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: cli.py server start[/dim]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await close_api_client()

    if response.status_code not in (200, 503):
        console.print(f"[red]Unexpected response: {response.status_code}[/red]")
        raise typer.Exit(1)

    _display_health(response.json())
    if response.status_code == 503:
        raise typer.Exit(1)


def _display_health(data: dict) -> None:
    """Display readiness results."""
    status = data.get("status", "unknown")
    status_color = "green" if status == "healthy" else "red"

    table = Table(title="Health Status", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for component, check_data in data.get("checks", {}).items():
        check_status = check_data.get("status", "unknown")
        color = "green" if check_status == "healthy" else "red"
        detail = check_data.get("error") or (
            f"latency: {check_data['latency_ms']}ms" if "latency_ms" in check_data else "-"
        )
        table.add_row(component, f"[{color}]{check_status}[/{color}]", detail)

    console.print(Panel(f"[{status_color}]{status.upper()}[/{status_color}]", title="Backend Status"))
    console.print(table)


@app.command()
def ping() -> None:
    """
    Simple ping to check if backend is reachable.

    Examples:
        cli.py health ping
    """
    asyncio.run(_ping())


async def _ping() -> None:
    client = get_api_client()

    try:
        response = await client.get("/health")
    except httpx.HTTPError:
        console.print("[red]✗ Backend is not reachable[/red]")
        raise typer.Exit(1)
    finally:
        await close_api_client()

    if response.status_code == 200:
        console.print("[green]✓ Backend is reachable[/green]")
    else:
        console.print(f"[yellow]Backend responded with status {response.status_code}[/yellow]")
