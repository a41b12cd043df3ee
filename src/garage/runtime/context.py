"""Application context held in a ContextVar.

The configuration is loaded once at import time. Each thread or asyncio task
sees the context that was current when it started, and ``with_context``
overrides it only for the enclosed block.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import TypeVar

from pydantic import BaseModel

from src.garage.runtime.config.config_data import ConfigData
from src.garage.runtime.config.config_template import load_config

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class AppContext:
    """App-wide state visible to request handlers, CLI commands and seeders."""

    config: ConfigData


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def overlay(base: ModelT, override: ModelT) -> ModelT:
    """Return ``base`` with the fields explicitly set on ``override`` applied.

    Nested models are overlaid field by field, so a nested value set on a
    fresh ``ConfigData()`` replaces only that value. ``base`` itself is
    returned when nothing was set.
    """
    updates = {}
    for name in type(override).model_fields:
        value = getattr(override, name)
        current = getattr(base, name)
        if isinstance(value, BaseModel) and isinstance(current, BaseModel):
            merged = overlay(current, value)
            if merged is not current:
                updates[name] = merged
        elif name in override.model_fields_set:
            updates[name] = value
    return base.model_copy(update=updates) if updates else base


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily overlay ``config_override`` on the current configuration.

    Example:
        override = ConfigData()
        override.modules.seed_count = 2
        with with_context(override):
            assert get_config().modules.seed_count == 2
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    context = get_context()
    token = set_context(replace(context, config=overlay(context.config, config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the current configuration outright."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    return get_context().config
