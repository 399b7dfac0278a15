"""FastAPI dependencies shared by every context's routers."""

from fastapi import Request

from shared.database import Database


def get_database(request: Request) -> Database:
    """Return the application's database handle."""
    return request.app.state.database
