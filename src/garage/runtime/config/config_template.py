"""Loading ``config.yaml`` with environment variable placeholders.

Placeholders use shell syntax:

- ``${VAR}`` must be set.
- ``${VAR:-default}`` falls back to ``default``.
- ``${VAR:?message}`` must be set and fails with ``message`` otherwise.

Before substitution, variables prefixed with the upper-cased
``APP_ENVIRONMENT`` (``TEST_DATABASE_URL`` in the test environment) are copied
over their unprefixed names.
"""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.garage.runtime.config.config_data import ConfigData

PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}")


def _resolve_placeholder(match: re.Match[str]) -> str:
    name, op, arg = match.group("name", "op", "arg")
    value = os.getenv(name)
    if value is not None:
        return value
    if op == ":-":
        return arg
    if op == ":?":
        raise ValueError(f"Required environment variable {name}: {arg}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder in ``text`` with its environment value."""
    return PLACEHOLDER.sub(_resolve_placeholder, text)


def apply_environment_overrides(env_mode: str) -> list[str]:
    """Promote ``<ENV>_``-prefixed variables to their unprefixed names.

    Returns the names of the variables that were set.
    """
    prefix = f"{env_mode.upper()}_"
    overrides = {
        name.removeprefix(prefix): value
        for name, value in os.environ.items()
        if name.startswith(prefix)
    }
    os.environ.update(overrides)
    return list(overrides)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path``, substitute placeholders and validate the ``config`` key.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: a required variable is missing, the YAML is malformed or
            empty, or the values do not validate.
    """
    text = Path(file_path).read_text()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    applied = apply_environment_overrides(env_mode)
    logger.debug("Loading {} for environment {} (overrides: {})", file_path, env_mode, applied)

    try:
        document = yaml.safe_load(substitute_env_vars(text))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not document:
        raise ValueError(f"Failed to parse YAML: {file_path} is empty")

    try:
        return ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {file_path}: {e}") from e


def load_config(file_path: Path | None = None) -> ConfigData:
    """Load configuration from ``file_path`` or ``GARAGE_CONFIG_FILE``.

    Falls back to the built-in defaults when the file does not exist.
    """
    path = file_path or Path(os.getenv("GARAGE_CONFIG_FILE", "config.yaml"))
    if not path.exists():
        logger.warning("Configuration file {} not found; using defaults", path)
        return ConfigData()
    return load_templated_yaml(path)
