"""Exceptions raised by the module loader, factories and seeders."""


class GarageError(Exception):
    """Base class for application errors."""


class ModuleLoadError(GarageError):
    """A module could not be discovered or one of its files failed to load."""


class FactoryNotFoundError(ModuleLoadError):
    """No factory class exists at the path guessed for a model."""

    def __init__(self, model_name: str, factory_path: str):
        self.model_name = model_name
        self.factory_path = factory_path
        super().__init__(
            f"Unable to locate factory for {model_name} at {factory_path}"
        )
