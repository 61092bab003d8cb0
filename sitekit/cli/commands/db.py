"""
Database Commands.

Schema creation and demo data for the embedded SQLite store.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from sitekit.backend.core.config import get_app_config, get_database_url
from sitekit.backend.core.database import dispose_engine, init_db
from sitekit.backend.services.demo import DemoDataService, DemoSeedResult
from sitekit.cli.runner import run_in_session

app = typer.Typer(help="Database commands")
console = Console()


async def _init() -> None:
    try:
        await init_db()
    finally:
        await dispose_engine()


@app.command()
def init() -> None:
    """
    Create all tables that do not exist yet.

    Existing tables and rows are left untouched.
    """
    console.print(f"[bold]Database:[/bold] {get_database_url()}")
    asyncio.run(_init())
    console.print("[green]Schema ready[/green]")


@app.command("seed-demo")
def seed_demo(
    site: Optional[str] = typer.Option(None, "--site", "-s", help="Site key (default from application.yaml)"),
) -> None:
    """
    Seed demo categories, contacts, hexagons and products for a site.

    Parts the site already has are skipped.
    """
    site_key = site or get_app_config().application.default_site
    asyncio.run(_init())
    result: DemoSeedResult = run_in_session(lambda session: DemoDataService(session).seed(site_key))

    table = Table(title=f"Demo data for '{site_key}'")
    table.add_column("Part", style="cyan")
    table.add_column("Created", justify="right")
    table.add_row("categories", str(result.categories))
    table.add_row("contacts", str(result.contacts))
    table.add_row("hexagons", str(result.hexagons))
    table.add_row("products", str(result.products))
    console.print(table)
