#!/usr/bin/env python3
"""
Operator CLI for the Sitekit backend (Typer + Rich).

Works straight on the SQLite file, so it also serves while the server
is down, e.g. to reset a forgotten admin password.

    python cli.py db init
    python cli.py db seed-demo --site default
    python cli.py users list
    python cli.py users create alice --role accountant
    python cli.py users set-password admin
    python cli.py system info | config [section] | secrets

The server itself is started with run.py.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sitekit.cli.commands import db_app, system_app, users_app

app = typer.Typer(
    name="cli",
    help="Sitekit admin panel CLI - database, accounts and configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")
app.add_typer(system_app, name="system")

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="INFO level logging"),
    debug: bool = typer.Option(False, "--debug", "-d", help="DEBUG level logging"),
) -> None:
    """
    Sitekit admin panel CLI.
    """
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)

    from sitekit.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console", enable_file_logging=False)


if __name__ == "__main__":
    app()
