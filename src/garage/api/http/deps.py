"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Request
from sqlmodel import Session

from src.garage.api.http.app_data import ApplicationDependencies
from src.garage.core.services import DbSessionService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database session service instance."""
    return get_app_dependencies(request).database_service


def get_session(request: Request) -> Iterator[Session]:
    """Yield a database session that is closed after the request."""
    session = get_database_service(request).get_session()
    try:
        yield session
    finally:
        session.close()
