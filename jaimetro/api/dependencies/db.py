"""FastAPI dependencies exposing the app-scoped settings and database."""

from __future__ import annotations

from fastapi import Request

from jaimetro.config.settings import Settings
from jaimetro.db.session import Database


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Return the Database created at startup.

    The handle may still be unconnected; using it then raises
    StorageNotConnectedError, which read paths treat like any storage failure.
    """
    return request.app.state.database
