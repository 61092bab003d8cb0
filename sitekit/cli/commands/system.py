"""
`cli.py system ...`: application identity, loaded YAML and secret presence.
"""

from typing import Any, Optional

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from sitekit.backend.core.config import SETTINGS_FILES, get_app_config, get_settings

app = typer.Typer(help="System information commands")
console = Console()

SECRET_NAMES = (
    "jwt_secret",
    "admin_default_password",
    "telegram_bot_token",
    "telegram_chat_id",
    "telegram_personal_chat_id",
    "website_api_key",
)


def _sections() -> dict[str, BaseModel]:
    app_config = get_app_config()
    return {name: getattr(app_config, name) for name in SETTINGS_FILES}


def _branch(parent: Tree, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, dict):
            _branch(parent.add(f"[cyan]{key}[/cyan]"), value)
        else:
            parent.add(f"[cyan]{key}[/cyan]: {value}")


def _print_section(name: str, section: BaseModel) -> None:
    tree = Tree(f"[bold cyan]{name}[/bold cyan]")
    _branch(tree, section.model_dump())
    console.print(tree)


@app.command()
def info() -> None:
    """Show name, version and environment."""
    application = get_app_config().application
    body = "\n".join([
        f"[bold]{application.name}[/bold]",
        f"Version: {application.version}",
        f"Environment: {application.environment}",
        f"Description: {application.description}",
    ])
    console.print(Panel(body, title="Application Info"))


@app.command()
def config(
    section: Optional[str] = typer.Argument(None, help="One settings file by name; all when omitted"),
) -> None:
    """Show the validated YAML configuration."""
    sections = _sections()
    if section is None:
        for name, data in sections.items():
            _print_section(name, data)
            console.print()
        return

    if section not in sections:
        console.print(f"[red]Unknown section: {section}[/red]")
        console.print(f"Available sections: {', '.join(sections)}")
        raise typer.Exit(1)
    _print_section(section, sections[section])


@app.command()
def secrets() -> None:
    """Report which secrets are set. Values are never printed."""
    settings = get_settings()
    table = Table(title="Secrets")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    for name in SECRET_NAMES:
        table.add_row(name.upper(), "[green]set[/green]" if getattr(settings, name) else "[yellow]empty[/yellow]")
    console.print(table)
