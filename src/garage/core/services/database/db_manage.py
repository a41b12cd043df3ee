"""Schema management for the tables of every discovered module."""

from loguru import logger
from sqlmodel import SQLModel

from src.garage.core.module_registry import load_module_tables
from src.garage.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, session_service: DbSessionService | None = None):
        self._session_service = session_service or DbSessionService()

    def create_all(self) -> list[str]:
        """Create all module tables. Existing tables are left untouched."""
        tables = load_module_tables()
        SQLModel.metadata.create_all(self._session_service.engine)
        names = [table.__tablename__ for table in tables]
        logger.info("Database initialized with tables: {}", names)
        return names

    def drop_all(self) -> None:
        load_module_tables()
        SQLModel.metadata.drop_all(self._session_service.engine)
        logger.warning("Dropped all module tables")
