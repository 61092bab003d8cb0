"""
Application Modules.

- backend/: API, services, repositories, database and configuration
- cli/: Operator CLI commands (Typer + Rich)
"""
