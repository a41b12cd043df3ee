"""Factory: Car."""

from typing import Any

from src.garage.core.factories import Factory

from .entity import Car
from .table import CarTable


class CarFactory(Factory[Car]):
    model = Car
    table = CarTable

    def definition(self) -> dict[str, Any]:
        """Define the model's default state."""
        return {"name": self.faker.name()}
