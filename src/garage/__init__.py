"""Garage API.

A modular FastAPI application. Each domain concept lives in its own package
under ``src.garage.modules`` and is wired into the application by naming
convention: route files, table models, factories and seeders are discovered
from the module directory at startup.
"""

__version__ = "0.1.0"
