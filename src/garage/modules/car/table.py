"""Car database table model."""

from src.garage.core.entity import EntityTable


class CarTable(EntityTable, table=True):
    """Database persistence model for cars."""

    name: str
