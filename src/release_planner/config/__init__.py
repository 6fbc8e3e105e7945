"""Configuration management for release-planner."""

from __future__ import annotations

from release_planner.config.loader import load_config
from release_planner.config.models import (
    NAMESPACES,
    ChangelogConfig,
    Environment,
    ReleasePlannerConfig,
    TagNamespace,
)

__all__ = [
    "NAMESPACES",
    "ChangelogConfig",
    "Environment",
    "ReleasePlannerConfig",
    "TagNamespace",
    "load_config",
]
