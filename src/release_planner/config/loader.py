"""Configuration loading.

Sources, lowest precedence first:

1. model defaults
2. ``[tool.release-planner]`` in the nearest pyproject.toml
3. environment variables (``RELEASE_ENVIRONMENT``, ``JIRA_BASE_URL``)
4. explicit overrides, usually command-line options
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_planner.config.models import ReleasePlannerConfig
from release_planner.exceptions import ConfigError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_SECTION = "release-planner"

ENV_ENVIRONMENT = "RELEASE_ENVIRONMENT"
ENV_TICKET_BASE_URL = "JIRA_BASE_URL"


def find_pyproject_toml(start: Path | None = None) -> Path | None:
    """Find the nearest pyproject.toml walking up from ``start``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigError: If the file is missing or not valid TOML
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_planner_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-planner]`` table, or an empty dict."""
    return dict(pyproject.get("tool", {}).get(TOOL_SECTION, {}))


def _env_settings(environ: dict[str, str]) -> dict[str, Any]:
    settings: dict[str, Any] = {}
    if environ.get(ENV_ENVIRONMENT):
        settings["environment"] = environ[ENV_ENVIRONMENT]
    if environ.get(ENV_TICKET_BASE_URL):
        settings["changelog"] = {"ticket_base_url": environ[ENV_TICKET_BASE_URL]}
    return settings


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    environ: dict[str, str] | None = None,
) -> ReleasePlannerConfig:
    """Load the configuration for the project at ``path``.

    Args:
        path: Project directory to search from (default: cwd)
        overrides: Highest-precedence values; ``None`` entries are ignored
        environ: Environment mapping (default: ``os.environ``)

    Returns:
        Validated configuration

    Raises:
        ConfigValidationError: If the merged values are invalid
    """
    data: dict[str, Any] = {}

    pyproject_path = find_pyproject_toml(path)
    if pyproject_path is not None:
        logger.debug("Reading configuration from %s", pyproject_path)
        data = extract_release_planner_config(load_pyproject_toml(pyproject_path))

    data = _merge(data, _env_settings(dict(os.environ if environ is None else environ)))
    if overrides:
        data = _merge(data, _drop_none(overrides))

    try:
        return ReleasePlannerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, dict):
            nested = _drop_none(value)
            if nested:
                cleaned[key] = nested
        elif value is not None:
            cleaned[key] = value
    return cleaned
