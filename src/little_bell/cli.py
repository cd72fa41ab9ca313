"""Typer CLI for Little Bell."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(name="little-bell", help="Little Bell: multi-tenant email tracking server")
console = Console()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host (defaults to LITTLE_BELL_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (defaults to LITTLE_BELL_PORT)"),
):
    """Start the Little Bell tracking server."""
    import uvicorn
    from little_bell.app import create_app
    from little_bell.common.config import get_settings

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting Little Bell on {host}:{port}[/bold green]")
    console.print(f"  Base URL: {settings.public_base_url}")
    console.print(f"  Database: {settings.db_url}")
    uvicorn.run(create_app(), host=host, port=port)


@app.command("init-db")
def init_db():
    """Create the tracking schema if it does not exist."""
    from little_bell.common.config import get_settings
    from little_bell.common.database import DatabaseManager
    from little_bell.common.exceptions import StorageFault

    async def _run():
        db = DatabaseManager(get_settings())
        try:
            await db.initialize()
        finally:
            await db.close()

    try:
        asyncio.run(_run())
    except StorageFault as e:
        console.print(f"[bold red]{e.code}[/bold red]: {e.message}")
        raise typer.Exit(1)
    console.print("[bold green]Schema ready[/bold green]")


@app.command()
def stats(
    tenant_id: str = typer.Argument(..., help="Tenant to report on"),
):
    """Print a tenant's engagement statistics straight from the database."""
    from little_bell.common.config import get_settings
    from little_bell.common.database import DatabaseManager
    from little_bell.common.exceptions import StorageFault
    from little_bell.stats.service import StatsService

    settings = get_settings()

    async def _run():
        db = DatabaseManager(settings)
        try:
            await db.initialize()
            async with db.get_session() as session:
                return await StatsService(settings.recent_events_limit).get_tenant_stats(
                    session, tenant_id,
                )
        finally:
            await db.close()

    try:
        result = asyncio.run(_run())
    except StorageFault as e:
        console.print(f"[bold red]{e.code}[/bold red]: {e.message}")
        raise typer.Exit(1)

    console.print(
        f"[bold]{tenant_id}[/bold]  opens {result.total_opens} ({result.unique_opens} unique)"
        f"  clicks {result.total_clicks} ({result.unique_clicks} unique)"
    )
    if not result.recent_events:
        console.print("No events recorded yet.")
        return

    table = Table("Time (UTC)", "Type", "Email", "IP", "User agent")
    for event in result.recent_events:
        table.add_row(
            event.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            event.event_type,
            str(event.email_id),
            event.ip_address or "",
            event.user_agent or "",
        )
    console.print(table)


@app.command()
def health(
    url: str = typer.Option("http://localhost:3000", help="Server URL"),
):
    """Check Little Bell server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] v{data['version']}")
    except (httpx.HTTPError, ValueError, KeyError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
