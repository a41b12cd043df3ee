"""Convention-based discovery of application modules.

A module is a sub-package of the configured modules package (``src.garage.modules``
by default). Everything about a module is found by naming convention:

- ``<module>/entity.py`` defines the domain model ``<Model>``.
- ``<module>/routes.py`` exposes ``router`` (an ``APIRouter``) and is mounted
  on the application when present.
- ``<module>/table.py`` exposes ``<Model>Table`` and is imported before the
  tables are created.
- ``<module>/factory.py`` exposes ``<Model>Factory``.
- ``<module>/seeder.py`` exposes ``<Model>Seeder``.

``<Model>`` is the PascalCase form of the module directory name.
"""

from __future__ import annotations

import importlib
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, FastAPI
from loguru import logger

from src.garage.core.errors import FactoryNotFoundError, ModuleLoadError
from src.garage.runtime.context import get_config

if TYPE_CHECKING:
    from src.garage.core.factories import Factory
    from src.garage.core.seeders import Seeder


def studly(name: str) -> str:
    """Convert a module directory name to a class name (``fuel_card`` -> ``FuelCard``)."""
    words = re.findall(r"[a-zA-Z0-9]+", name)
    return "".join(word[:1].upper() + word[1:] for word in words)


def snake(name: str) -> str:
    """Convert a class name to a module directory name (``FuelCard`` -> ``fuel_card``)."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass(frozen=True)
class ModuleInfo:
    """A discovered module directory."""

    name: str
    package: str
    path: Path

    @property
    def model_name(self) -> str:
        return studly(self.name)

    @property
    def model_path(self) -> str:
        """Dotted path of the module's domain model."""
        return f"{self.package}.entity.{self.model_name}"

    @property
    def routes_file(self) -> Path | None:
        path = self.path / "routes.py"
        return path if path.is_file() else None

    @property
    def has_table(self) -> bool:
        return (self.path / "table.py").is_file()

    @property
    def has_factory(self) -> bool:
        return (self.path / "factory.py").is_file()

    @property
    def has_seeder(self) -> bool:
        return (self.path / "seeder.py").is_file()


def modules_path(package: str | None = None) -> Path:
    """Return the directory of the modules package."""
    package = package or get_config().modules.package
    try:
        pkg = importlib.import_module(package)
    except ModuleNotFoundError as e:
        raise ModuleLoadError(f"Modules package '{package}' cannot be imported") from e
    return Path(list(pkg.__path__)[0])


def discover_modules(
    base_path: Path | None = None, package: str | None = None
) -> list[ModuleInfo]:
    """Glob the modules directory and return every module found, sorted by name.

    Directories whose name starts with ``_`` or ``.`` and directories without
    an ``__init__.py`` are skipped.
    """
    package = package or get_config().modules.package
    base = base_path or modules_path(package)
    if not base.is_dir():
        logger.warning("Modules directory {} does not exist", base)
        return []

    modules = []
    for directory in sorted(p for p in base.glob("*") if p.is_dir()):
        if directory.name.startswith(("_", ".")):
            continue
        if not (directory / "__init__.py").is_file():
            logger.debug("Skipping {}: not a Python package", directory)
            continue
        modules.append(
            ModuleInfo(
                name=directory.name,
                package=f"{package}.{directory.name}",
                path=directory,
            )
        )
    return modules


def find_module(name: str, modules: list[ModuleInfo] | None = None) -> ModuleInfo:
    """Return the discovered module called ``name``."""
    for info in modules if modules is not None else discover_modules():
        if info.name == name:
            return info
    raise ModuleLoadError(f"Module '{name}' not found")


def _import_submodule(info: ModuleInfo, submodule: str) -> ModuleType:
    dotted = f"{info.package}.{submodule}"
    try:
        return importlib.import_module(dotted)
    except ModuleNotFoundError as e:
        if e.name and dotted.startswith(e.name):
            raise ModuleLoadError(f"Module '{info.name}' has no {submodule}.py") from e
        raise


def load_module_attribute(info: ModuleInfo, submodule: str, attribute: str) -> Any:
    """Import ``<module>.<submodule>`` and return ``attribute`` from it."""
    mod = _import_submodule(info, submodule)
    try:
        return getattr(mod, attribute)
    except AttributeError as e:
        raise ModuleLoadError(
            f"{info.package}.{submodule} does not define '{attribute}'"
        ) from e


def load_module_routes(
    app: FastAPI, modules: list[ModuleInfo] | None = None
) -> list[str]:
    """Mount the router of every module that ships a route file.

    Returns the names of the modules whose routes were loaded.
    """
    loaded = []
    for info in modules if modules is not None else discover_modules():
        if info.routes_file is None:
            logger.debug("Module {} has no route file", info.name)
            continue

        router = load_module_attribute(info, "routes", "router")
        if not isinstance(router, APIRouter):
            raise ModuleLoadError(
                f"{info.package}.routes.router is not an APIRouter"
            )
        app.include_router(router)
        loaded.append(info.name)
        logger.info("Loaded routes for module {}", info.name)
    return loaded


def load_module_tables(modules: list[ModuleInfo] | None = None) -> list[type]:
    """Import every module's table model so it registers with SQLModel metadata."""
    tables = []
    for info in modules if modules is not None else discover_modules():
        if not info.has_table:
            continue
        tables.append(
            load_module_attribute(info, "table", f"{info.model_name}Table")
        )
    return tables


def load_module_seeder(info: ModuleInfo) -> type[Seeder]:
    return load_module_attribute(info, "seeder", f"{info.model_name}Seeder")


# --- Factory name resolution ---

FactoryNameResolver = Callable[[str], str]

_factory_name_resolver: FactoryNameResolver | None = None


def _model_path(model: type | str) -> str:
    if isinstance(model, str):
        return model
    return f"{model.__module__}.{model.__qualname__}"


def default_factory_name(model_name: str) -> str:
    """Guess the dotted factory path for a dotted model path.

    ``src.garage.modules.car.entity.Car`` -> ``src.garage.modules.car.factory.CarFactory``

    The module is the package segment right after the namespace: the segment
    following the configured modules package, or the package holding
    ``entity.py``. Other paths fall back to the modules package and the
    snake-cased class name.
    """
    *parents, model_class_name = model_name.split(".")
    package = get_config().modules.package
    depth = package.count(".") + 1

    if parents[:depth] == package.split(".") and len(parents) > depth:
        namespace, module_name = package, parents[depth]
    elif len(parents) >= 3 and parents[-1] == "entity":
        namespace, module_name = ".".join(parents[:-2]), parents[-2]
    else:
        namespace, module_name = package, snake(model_class_name)
    return f"{namespace}.{module_name}.factory.{model_class_name}Factory"


def guess_factory_names_using(resolver: FactoryNameResolver) -> None:
    """Replace the process-wide factory name resolver."""
    global _factory_name_resolver
    _factory_name_resolver = resolver


def reset_factory_name_resolver() -> None:
    global _factory_name_resolver
    _factory_name_resolver = None


def guess_factory_name(model: type | str) -> str:
    model_name = _model_path(model)
    resolver = _factory_name_resolver or default_factory_name
    return resolver(model_name)


def resolve_factory(model: type | str) -> type[Factory]:
    """Import and return the factory class for ``model``."""
    factory_path = guess_factory_name(model)
    module_path, _, class_name = factory_path.rpartition(".")
    model_name = _model_path(model)
    try:
        mod = importlib.import_module(module_path)
    except ModuleNotFoundError as e:
        if e.name and module_path.startswith(e.name):
            raise FactoryNotFoundError(model_name, factory_path) from e
        raise
    factory = getattr(mod, class_name, None)
    if factory is None:
        raise FactoryNotFoundError(model_name, factory_path)
    return factory
