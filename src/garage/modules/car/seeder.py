"""Seeder: Car."""

from sqlmodel import Session

from src.garage.core.seeders import Seeder
from src.garage.runtime.context import get_config

from .entity import Car


class CarSeeder(Seeder):
    def run(self, session: Session) -> None:
        """Run the database seeds."""
        Car.factory().count(get_config().modules.seed_count).create(session)
