"""
User Commands.

Offline account management, including the password reset for a locked
out admin.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import NotFoundError
from sitekit.backend.core.logging import get_logger, log_with_source
from sitekit.backend.models.user import User
from sitekit.backend.repositories.user import UserRepository
from sitekit.backend.schemas.user import UserCreate
from sitekit.backend.services.user import UserService
from sitekit.cli.runner import run_in_session

app = typer.Typer(help="Admin panel accounts")
console = Console()
logger = get_logger(__name__)


@app.command("list")
def list_users() -> None:
    """List all accounts."""
    users: list[User] = run_in_session(lambda session: UserService(session).list_users())

    table = Table(title="Users")
    table.add_column("ID", justify="right")
    table.add_column("Username", style="cyan")
    table.add_column("Role")
    table.add_column("Created")
    for user in users:
        table.add_row(str(user.id), user.username, user.role, user.created_at.strftime("%Y-%m-%d %H:%M"))
    console.print(table)


@app.command()
def create(
    username: str = typer.Argument(..., help="Login name"),
    role: str = typer.Option("accountant", "--role", "-r", help="admin or accountant"),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        "-p",
        help="Password (prompted when omitted)",
    ),
) -> None:
    """Create an account."""
    if password is None:
        password = typer.prompt("Password", hide_input=True, confirmation_prompt=True)

    data = UserCreate(username=username, password=password, role=role)
    user: User = run_in_session(lambda session: UserService(session).create_user(data))
    log_with_source(logger, "cli", "info", "User created", username=user.username, role=user.role)
    console.print(f"[green]Created[/green] {user.username} ({user.role}), id {user.id}")


async def _set_password(session: AsyncSession, username: str, password: str) -> None:
    user = await UserRepository(session).get_by_username(username)
    if user is None:
        raise NotFoundError("User not found")
    await UserService(session).set_password(user.id, password)


@app.command("set-password")
def set_password(
    username: str = typer.Argument(..., help="Login name"),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        "-p",
        help="New password (prompted when omitted)",
    ),
) -> None:
    """Reset an account password without logging in."""
    if password is None:
        password = typer.prompt("New password", hide_input=True, confirmation_prompt=True)

    run_in_session(lambda session: _set_password(session, username, password))
    log_with_source(logger, "cli", "info", "Password reset", username=username)
    console.print(f"[green]Password updated[/green] for {username}")
