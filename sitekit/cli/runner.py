"""
Async helpers for CLI commands.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.database import dispose_engine, get_session_factory
from sitekit.backend.core.exceptions import ApplicationError

T = TypeVar("T")

console = Console()


async def _in_session(operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
    try:
        async with get_session_factory()() as session:
            result = await operation(session)
            await session.commit()
            return result
    finally:
        await dispose_engine()


def run_in_session(operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """
    Run `operation` with a committed session and print application errors.

    Raises:
        typer.Exit: With code 1 when the operation raises an ApplicationError
    """
    try:
        return asyncio.run(_in_session(operation))
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1) from e
