"""Exception hierarchy for release-planner.

Every error raised on purpose by the package derives from
``ReleasePlannerError`` so the CLI can report it at a single boundary.
"""

from __future__ import annotations


class ReleasePlannerError(Exception):
    """Base class for all release-planner errors."""


class GitError(ReleasePlannerError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class ConfigError(ReleasePlannerError):
    """Configuration could not be loaded."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


class VersionError(ReleasePlannerError):
    """Version handling failed."""


class VersionParseError(VersionError):
    """A tag or version string is not of the form ``<prefix>X.Y.Z``."""


class ReleaseNotesError(ReleasePlannerError):
    """Release notes could not be written."""
