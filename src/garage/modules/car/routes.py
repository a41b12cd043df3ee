"""Car API routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from src.garage.api.http.deps import get_session

from .entity import Car, CarCreate, CarUpdate
from .repository import CarRepository

router = APIRouter(prefix="/cars", tags=["cars"])


@router.get("", response_model=list[Car])
def list_cars(
    session: Session = Depends(get_session),
) -> list[Car]:
    """List all cars."""
    return CarRepository(session).list_all()


@router.post("", response_model=Car, status_code=status.HTTP_201_CREATED)
def create_car(
    payload: CarCreate,
    session: Session = Depends(get_session),
) -> Car:
    """Create a new car."""
    created_car = CarRepository(session).create(Car(name=payload.name))
    session.commit()
    return created_car


@router.get("/{car_id}", response_model=Car)
def get_car(
    car_id: str,
    session: Session = Depends(get_session),
) -> Car:
    """Get a car by ID."""
    car = CarRepository(session).get(car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


@router.put("/{car_id}", response_model=Car)
def update_car(
    car_id: str,
    payload: CarUpdate,
    session: Session = Depends(get_session),
) -> Car:
    """Update a car."""
    try:
        updated_car = CarRepository(session).update(Car(id=car_id, name=payload.name))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    session.commit()
    return updated_car


@router.delete("/{car_id}")
def delete_car(
    car_id: str,
    session: Session = Depends(get_session),
) -> dict[str, str]:
    """Delete a car."""
    if not CarRepository(session).delete(car_id):
        raise HTTPException(status_code=404, detail="Car not found")
    session.commit()
    return {"message": "Car deleted successfully"}
