"""Module package: Car."""

from .entity import Car, CarCreate, CarUpdate
from .repository import CarRepository
from .table import CarTable

__all__ = ["Car", "CarCreate", "CarRepository", "CarTable", "CarUpdate"]
