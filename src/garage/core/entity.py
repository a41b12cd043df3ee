"""Base classes shared by every module's entity and table.

A module's domain entity subclasses :class:`Entity` and its persisted row
subclasses :class:`EntityTable`. Both carry a string UUID ``id`` and UTC
``created_at``/``updated_at`` timestamps, so a row converts to an entity with
``model_validate(row, from_attributes=True)`` and back with ``model_dump()``.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

TIMESTAMP_FIELDS = frozenset({"created_at", "updated_at"})


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """Domain entity identified by ``id``.

    Two entities of the same class are equal when ``id`` and every field the
    subclass declares match. Timestamps are bookkeeping and never take part.
    """

    id: str = PydanticField(default_factory=new_id, description="Entity identifier")
    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime = PydanticField(default_factory=utc_now)

    def business_key(self) -> tuple[Any, ...]:
        return tuple(
            getattr(self, name)
            for name in type(self).model_fields
            if name not in TIMESTAMP_FIELDS
        )

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        return self.business_key() == other.business_key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.business_key()))


class EntityTable(SQLModel, table=False):
    """Persisted row with a UUID primary key and database-maintained ``updated_at``."""

    id: str = Field(primary_key=True, default_factory=new_id)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(
        default_factory=utc_now,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now(), "onupdate": sa.func.now()},
    )

    def touch(self) -> None:
        """Stamp ``updated_at`` with the current time."""
        self.updated_at = utc_now()
