"""Tests for convention-based module discovery and factory resolution."""

from pathlib import Path

import pytest
from fastapi import FastAPI

from src.garage.core.errors import FactoryNotFoundError, ModuleLoadError
from src.garage.core.module_registry import (
    ModuleInfo,
    default_factory_name,
    discover_modules,
    find_module,
    guess_factory_name,
    guess_factory_names_using,
    load_module_routes,
    load_module_seeder,
    load_module_tables,
    resolve_factory,
    snake,
    studly,
)
from src.garage.modules.car import Car, CarTable
from src.garage.modules.car.factory import CarFactory
from src.garage.modules.car.seeder import CarSeeder


def _make_package(root: Path, name: str, files: dict[str, str] | None = None) -> Path:
    path = root / name
    path.mkdir(parents=True)
    (path / "__init__.py").write_text("")
    for filename, content in (files or {}).items():
        (path / filename).write_text(content)
    return path


class TestNaming:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("car", "Car"), ("fuel_card", "FuelCard"), ("fuel-card", "FuelCard")],
    )
    def test_studly(self, name: str, expected: str):
        assert studly(name) == expected

    @pytest.mark.parametrize(
        ("name", "expected"), [("Car", "car"), ("FuelCard", "fuel_card")]
    )
    def test_snake(self, name: str, expected: str):
        assert snake(name) == expected


class TestDiscoverModules:
    def test_discovers_car_module(self):
        modules = discover_modules()

        car = find_module("car", modules)
        assert car.model_name == "Car"
        assert car.package == "src.garage.modules.car"
        assert car.model_path == "src.garage.modules.car.entity.Car"
        assert car.routes_file is not None
        assert car.routes_file.name == "routes.py"
        assert car.has_table
        assert car.has_factory
        assert car.has_seeder

    def test_skips_private_hidden_and_non_package_directories(self, tmp_path: Path):
        _make_package(tmp_path, "beta")
        _make_package(tmp_path, "alpha")
        _make_package(tmp_path, "_private")
        _make_package(tmp_path, ".hidden")
        (tmp_path / "not_a_package").mkdir()
        (tmp_path / "stray_file.py").write_text("")

        modules = discover_modules(base_path=tmp_path, package="fleet")

        assert [m.name for m in modules] == ["alpha", "beta"]
        assert modules[0].package == "fleet.alpha"
        assert modules[0].routes_file is None
        assert not modules[0].has_factory

    def test_factory_guess_for_discovered_numbered_module(self, tmp_path: Path):
        _make_package(tmp_path, "car_2")

        (info,) = discover_modules(base_path=tmp_path, package="src.garage.modules")

        assert info.model_name == "Car2"
        assert (
            guess_factory_name(info.model_path)
            == "src.garage.modules.car_2.factory.Car2Factory"
        )

    def test_missing_directory_yields_no_modules(self, tmp_path: Path):
        assert discover_modules(base_path=tmp_path / "missing", package="x") == []

    def test_find_unknown_module_raises(self):
        with pytest.raises(ModuleLoadError, match="nope"):
            find_module("nope")


class TestLoadModuleRoutes:
    def test_mounts_car_routes(self):
        app = FastAPI()

        loaded = load_module_routes(app)

        assert loaded == ["car"]
        paths = {route.path for route in app.routes}
        assert "/cars" in paths
        assert "/cars/{car_id}" in paths

    def test_module_without_route_file_is_skipped(self, tmp_path: Path):
        _make_package(tmp_path, "alpha")
        modules = [ModuleInfo(name="alpha", package="unimportable.alpha", path=tmp_path / "alpha")]
        app = FastAPI()

        assert load_module_routes(app, modules) == []

    def test_route_file_without_router_raises(self, tmp_path: Path, monkeypatch):
        root = _make_package(tmp_path, "routerless_mods")
        _make_package(root, "bike", {"routes.py": "routes = None\n"})
        monkeypatch.syspath_prepend(str(tmp_path))

        modules = discover_modules(base_path=root, package="routerless_mods")

        with pytest.raises(ModuleLoadError, match="router"):
            load_module_routes(FastAPI(), modules)

    def test_router_of_wrong_type_raises(self, tmp_path: Path, monkeypatch):
        root = _make_package(tmp_path, "badrouter_mods")
        _make_package(root, "bike", {"routes.py": "router = object()\n"})
        monkeypatch.syspath_prepend(str(tmp_path))

        modules = discover_modules(base_path=root, package="badrouter_mods")

        with pytest.raises(ModuleLoadError, match="APIRouter"):
            load_module_routes(FastAPI(), modules)


class TestLoadModuleFiles:
    def test_load_tables(self):
        assert load_module_tables() == [CarTable]

    def test_load_seeder(self):
        assert load_module_seeder(find_module("car")) is CarSeeder


class TestFactoryNames:
    def test_guess_for_model_class(self):
        assert guess_factory_name(Car) == "src.garage.modules.car.factory.CarFactory"

    def test_guess_for_multi_word_model(self):
        assert (
            default_factory_name("src.garage.modules.fuel_card.entity.FuelCard")
            == "src.garage.modules.fuel_card.factory.FuelCardFactory"
        )

    def test_guess_keeps_module_directory_name(self):
        assert (
            default_factory_name("src.garage.modules.car_2.entity.Car2")
            == "src.garage.modules.car_2.factory.Car2Factory"
        )

    def test_guess_outside_modules_package_uses_entity_parent(self):
        assert (
            default_factory_name("plugins.fleet.car_2.entity.Car2")
            == "plugins.fleet.car_2.factory.Car2Factory"
        )

    def test_guess_falls_back_to_modules_package(self):
        assert (
            default_factory_name("legacy.models.Truck")
            == "src.garage.modules.truck.factory.TruckFactory"
        )

    def test_custom_resolver(self, factory_name_resolver):
        guess_factory_names_using(lambda model_name: f"custom.{model_name}Factory")

        assert guess_factory_name("Car") == "custom.CarFactory"

    def test_resolve_factory(self):
        assert resolve_factory(Car) is CarFactory

    def test_resolve_factory_for_unknown_module(self):
        with pytest.raises(FactoryNotFoundError) as exc_info:
            resolve_factory("src.garage.modules.boat.entity.Boat")

        assert exc_info.value.factory_path == "src.garage.modules.boat.factory.BoatFactory"

    def test_resolve_factory_for_missing_class(self, factory_name_resolver):
        guess_factory_names_using(
            lambda model_name: "src.garage.modules.car.factory.MissingFactory"
        )

        with pytest.raises(FactoryNotFoundError, match="MissingFactory"):
            resolve_factory(Car)
