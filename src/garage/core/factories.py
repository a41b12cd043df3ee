"""Model factories for fabricating fake entities in tests and seeders."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Self, TypeVar

from faker import Faker
from loguru import logger
from sqlmodel import Session, SQLModel

from src.garage.core.entity import Entity
from src.garage.core.module_registry import resolve_factory

EntityT = TypeVar("EntityT", bound=Entity)


class Factory(Generic[EntityT]):
    """Base class for model factories.

    Subclasses set ``model`` and ``table`` and implement ``definition()``.
    Builder methods (``count``, ``state``) return new factories, so a
    configured factory can be reused safely.

    Example:
        cars = CarFactory().count(3).state(name="Herbie").make()
    """

    model: ClassVar[type[Entity]]
    table: ClassVar[type[SQLModel]]

    faker: ClassVar[Faker] = Faker()

    def __init__(
        self, count: int | None = None, states: tuple[dict[str, Any], ...] = ()
    ) -> None:
        if count is not None and count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        self._count = count
        self._states = states

    @classmethod
    def new(cls, **attributes: Any) -> Self:
        return cls(states=(attributes,) if attributes else ())

    @staticmethod
    def seed(value: int) -> None:
        """Seed the shared Faker generator so output is reproducible."""
        Faker.seed(value)

    def definition(self) -> dict[str, Any]:
        """Define the model's default state."""
        raise NotImplementedError

    def count(self, count: int) -> Self:
        return type(self)(count=count, states=self._states)

    def state(self, **attributes: Any) -> Self:
        return type(self)(count=self._count, states=(*self._states, attributes))

    def raw(self, **attributes: Any) -> dict[str, Any]:
        """Return the attributes of one entity without building it."""
        data = self.definition()
        for state in self._states:
            data.update(state)
        data.update(attributes)
        return data

    def make(self, **attributes: Any) -> EntityT | list[EntityT]:
        """Build unsaved entities.

        Returns a single entity unless ``count()`` was called, in which case a
        list is returned (empty for a count of zero).
        """
        if self._count is None:
            return self.model(**self.raw(**attributes))
        return [self.model(**self.raw(**attributes)) for _ in range(self._count)]

    def create(self, session: Session, **attributes: Any) -> EntityT | list[EntityT]:
        """Build entities and persist them through the table model.

        The session is flushed, not committed.
        """
        made = self.make(**attributes)
        entities = made if isinstance(made, list) else [made]
        rows = [self.table.model_validate(entity.model_dump()) for entity in entities]
        session.add_all(rows)
        session.flush()
        logger.debug("Created {} {} row(s)", len(rows), self.model.__name__)
        return made


class HasFactory:
    """Mixin giving an entity a ``factory()`` constructor resolved by convention."""

    @classmethod
    def factory(cls, count: int | None = None, **attributes: Any) -> Factory:
        factory_class = resolve_factory(cls)
        factory = factory_class.new(**attributes)
        return factory if count is None else factory.count(count)
