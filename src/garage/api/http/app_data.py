from dataclasses import dataclass

from src.garage.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    loaded_modules: list[str]
