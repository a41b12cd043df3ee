"""Unit tests for the car module entity and table."""

from uuid import UUID

import pytest
from pydantic import ValidationError

from src.garage.modules.car import Car, CarCreate, CarTable, CarUpdate


class TestCar:
    def test_car_creation_with_defaults(self):
        car = Car(name="Herbie")

        UUID(car.id)
        assert car.name == "Herbie"
        assert car.created_at is not None
        assert car.updated_at is not None

    def test_car_creation_with_explicit_id(self):
        car = Car(id="car-1", name="Herbie")

        assert car.id == "car-1"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_name_must_not_be_empty(self, name: str):
        with pytest.raises(ValidationError):
            Car(name=name)

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            Car()

    def test_equality_ignores_timestamps(self):
        first = Car(id="1", name="Herbie")
        second = Car(id="1", name="Herbie")

        assert first == second
        assert hash(first) == hash(second)

    def test_inequality(self):
        assert Car(id="1", name="Herbie") != Car(id="1", name="Christine")
        assert Car(id="1", name="Herbie") != Car(id="2", name="Herbie")
        assert Car(id="1", name="Herbie") != "Herbie"


class TestCarRequestBodies:
    def test_create_body_only_carries_name(self):
        body = CarCreate.model_validate(
            {"name": "Herbie", "id": "car-1", "created_at": "1999-01-01T00:00:00Z"}
        )

        assert body.model_dump() == {"name": "Herbie"}

    @pytest.mark.parametrize("body_class", [CarCreate, CarUpdate])
    @pytest.mark.parametrize("name", ["", "   "])
    def test_body_rejects_blank_name(self, body_class, name: str):
        with pytest.raises(ValidationError):
            body_class(name=name)


class TestCarTable:
    def test_table_from_entity(self):
        car = Car(name="Herbie")

        row = CarTable.model_validate(car.model_dump())

        assert row.id == car.id
        assert row.name == "Herbie"

    def test_table_name(self):
        assert CarTable.__tablename__ == "cartable"
