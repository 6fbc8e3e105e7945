"""Configuration models.

Values come from ``[tool.release-planner]`` in pyproject.toml, environment
variables and command-line options, merged by ``config.loader``.
"""

from __future__ import annotations

import re
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from release_planner.core.commits import Grammar


class Environment(StrEnum):
    """Release environment; each one owns an independent tag namespace."""

    TEST = "test"
    PRODUCTION = "production"


class TagNamespace(BaseModel):
    """A family of tags sharing one prefix."""

    model_config = ConfigDict(frozen=True)

    prefix: str
    tag_pattern: str
    message_template: str

    def tag_message(self, version: str) -> str:
        return self.message_template.format(version=version)


NAMESPACES: dict[Environment, TagNamespace] = {
    Environment.TEST: TagNamespace(
        prefix="test-v",
        tag_pattern="test-v*",
        message_template="Release {version} (test)",
    ),
    Environment.PRODUCTION: TagNamespace(
        prefix="v",
        tag_pattern="v*",
        message_template="Release {version}",
    ),
}


class ChangelogConfig(BaseModel):
    """Release notes settings."""

    model_config = ConfigDict(extra="forbid")

    directory: Path = Field(
        default=Path("releases"),
        description="Directory receiving <version>.md files",
    )
    ticket_base_url: str | None = Field(
        default=None,
        description="Prefix for ticket tracker links, e.g. https://acme.atlassian.net/browse/",
    )
    ticket_label: str = "JIRA"
    include_empty_sections: bool = Field(
        default=False,
        description="Render sections without commits with a placeholder line",
    )


class ReleasePlannerConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    environment: Environment = Environment.PRODUCTION
    grammar: Grammar = Grammar.LOOSE
    remote: str = "origin"
    default_version: str = Field(
        default="1.0.0",
        description="Version assumed when the namespace has no tag yet",
    )
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    @field_validator("default_version")
    @classmethod
    def _check_default_version(cls, value: str) -> str:
        if not re.fullmatch(r"\d+\.\d+\.\d+", value):
            raise ValueError(f"default_version must be X.Y.Z, got '{value}'")
        return value

    @property
    def namespace(self) -> TagNamespace:
        return NAMESPACES[self.environment]
