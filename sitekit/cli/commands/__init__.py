"""
CLI Commands.

Organized by domain/feature area.
"""

from sitekit.cli.commands.db import app as db_app
from sitekit.cli.commands.system import app as system_app
from sitekit.cli.commands.users import app as users_app

__all__ = [
    "db_app",
    "system_app",
    "users_app",
]
