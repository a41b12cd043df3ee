"""Entity: Car."""

from pydantic import BaseModel, Field, field_validator

from src.garage.core.entity import Entity
from src.garage.core.factories import HasFactory


class CarFields(BaseModel):
    """Client-writable car attributes."""

    name: str = Field(min_length=1, description="Name")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class CarCreate(CarFields):
    """Request body for ``POST /cars``."""


class CarUpdate(CarFields):
    """Request body for ``PUT /cars/{car_id}``."""


class Car(HasFactory, Entity, CarFields):
    """Car entity.

    The factory is resolved by convention as
    ``src.garage.modules.car.factory.CarFactory``.
    """
