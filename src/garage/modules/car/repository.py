"""Car repository."""

from sqlalchemy import func
from sqlmodel import Session, select

from .entity import Car
from .table import CarTable


class CarRepository:
    """Data-access layer for cars.

    The repository flushes but never commits; callers own the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: CarTable) -> Car:
        return Car.model_validate(row, from_attributes=True)

    def create(self, car: Car) -> Car:
        row = CarTable.model_validate(car.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def get(self, car_id: str) -> Car | None:
        row = self._session.get(CarTable, car_id)
        if row is None:
            return None
        return self._to_entity(row)

    def list_all(self) -> list[Car]:
        statement = select(CarTable).order_by(CarTable.created_at, CarTable.id)
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def update(self, car: Car) -> Car:
        row = self._session.get(CarTable, car.id)
        if row is None:
            raise ValueError(f"Car with id {car.id} not found")

        row.name = car.name
        row.touch()
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, car_id: str) -> bool:
        row = self._session.get(CarTable, car_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(CarTable)).one()
