"""
Operator CLI.

Offline maintenance commands that work directly against the configured
database: schema creation, demo data and account management. Built with
Typer for commands and Rich for output.

Usage:
    python cli.py --help
    python cli.py db init
    python cli.py users set-password admin
"""
