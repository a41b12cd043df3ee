"""Shared pytest configuration.

The environment is pinned before any application module is imported so the
config loaded at import time points at an in-memory database and no log file.
"""

import os

os.environ["APP_ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""

from tests.fixtures import *  # noqa: E402,F401,F403
