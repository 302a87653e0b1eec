"""
FastAPI dependencies.

Tests override get_console with a session bound to an in-memory
storage client.
"""
from app.services.console import ConsoleSession, get_console as _get_console


def get_console() -> ConsoleSession:
    """FastAPI dependency returning the process-wide console session."""
    return _get_console()
