"""Database seeders."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from loguru import logger
from sqlalchemy import func
from sqlmodel import Session, select

from src.garage.core.module_registry import (
    ModuleInfo,
    discover_modules,
    find_module,
    load_module_seeder,
    load_module_tables,
)
from src.garage.core.services.database.db_session import DbSessionService


class Seeder(ABC):
    """Base class for database seeders."""

    @abstractmethod
    def run(self, session: Session) -> None:
        """Run the database seeds."""

    def call(self, session: Session, *seeders: type[Seeder] | Seeder) -> None:
        """Run other seeders in order."""
        for seeder in seeders:
            instance = seeder() if isinstance(seeder, type) else seeder
            name = type(instance).__name__
            logger.info("Seeding: {}", name)
            start = time.perf_counter()
            instance.run(session)
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info("Seeded: {} ({} ms)", name, round(duration_ms, 1))


def _row_count(session: Session, table: type) -> int:
    return session.exec(select(func.count()).select_from(table)).one()


class DatabaseSeeder(Seeder):
    """Run the seeder of every discovered module.

    After ``run()``, ``results`` maps each seeded module name to the number of
    rows its seeder inserted.
    """

    def __init__(
        self, modules: list[ModuleInfo] | None = None, only: str | None = None
    ) -> None:
        if modules is None:
            modules = discover_modules()
        if only is not None:
            modules = [find_module(only, modules)]
        self._modules = [info for info in modules if info.has_seeder]
        self.results: dict[str, int] = {}

    def run(self, session: Session) -> None:
        for info in self._modules:
            seeder = load_module_seeder(info)
            tables = load_module_tables([info])
            before = _row_count(session, tables[0]) if tables else 0

            self.call(session, seeder)

            session.flush()
            after = _row_count(session, tables[0]) if tables else 0
            self.results[info.name] = after - before


def seed_database(
    session_service: DbSessionService, module: str | None = None
) -> dict[str, int]:
    """Seed every module (or one module) in a single transaction."""
    seeder = DatabaseSeeder(only=module)
    with session_service.session_scope() as session:
        seeder.run(session)
    logger.info("Database seeding completed", results=seeder.results)
    return seeder.results
