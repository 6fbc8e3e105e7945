"""Version tags and the bump policy.

Tags have the form ``<prefix><major>.<minor>.<patch>``, e.g. ``v2.4.0`` or
``test-v1.3.0``. The bump policy is deliberately narrow:

- any hotfix commit → patch bump
- anything else → minor bump, patch reset to 0
- major is never bumped automatically

After bumping, the patch number is advanced until the tag does not exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from release_planner.exceptions import VersionParseError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

DEFAULT_VERSION = "1.0.0"

_NUMBERS = r"(\d+)\.(\d+)\.(\d+)"


@dataclass(frozen=True, order=True)
class VersionTag:
    """A three-part version with a literal tag prefix."""

    prefix: str
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise VersionParseError(f"Version components must be non-negative: {self}")

    def __str__(self) -> str:
        return f"{self.prefix}{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, tag: str, prefix: str = "v") -> VersionTag:
        """Parse a tag string carrying ``prefix``.

        Args:
            tag: Full tag, e.g. ``"v1.2.3"``
            prefix: Literal prefix the tag must start with

        Returns:
            Parsed version tag

        Raises:
            VersionParseError: If the tag is not ``<prefix>X.Y.Z``
        """
        match = re.fullmatch(re.escape(prefix) + _NUMBERS, tag.strip())
        if not match:
            raise VersionParseError(f"Tag '{tag}' is not of the form '{prefix}X.Y.Z'")
        major, minor, patch = (int(part) for part in match.groups())
        return cls(prefix, major, minor, patch)

    @property
    def version(self) -> str:
        """The version without its prefix."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump(self, hotfix: bool) -> VersionTag:
        """Return the next version according to the bump policy."""
        if hotfix:
            return replace(self, patch=self.patch + 1)
        return replace(self, minor=self.minor + 1, patch=0)

    def with_patch(self, patch: int) -> VersionTag:
        return replace(self, patch=patch)


def latest_tag_in_namespace(tags: Iterable[str], prefix: str) -> str | None:
    """Pick the first tag that parses with ``prefix``.

    ``tags`` is expected highest-version first, as ``git tag --sort`` lists
    them. Tags of other namespaces or of other shapes are skipped.
    """
    for tag in tags:
        try:
            VersionTag.parse(tag, prefix)
        except VersionParseError:
            continue
        return tag
    return None


def next_available_version(
    candidate: VersionTag,
    tag_exists: Callable[[str], bool],
) -> VersionTag:
    """Advance the patch number from ``candidate`` until the tag is free.

    Args:
        candidate: First tag to try
        tag_exists: Predicate telling whether a tag already exists

    Returns:
        The first non-existing tag at or after ``candidate``
    """
    patch = candidate.patch
    while tag_exists(str(candidate.with_patch(patch))):
        patch += 1
    return candidate.with_patch(patch)


def compute_next_version(
    previous_tag: str | None,
    prefix: str,
    hotfix: bool,
    tag_exists: Callable[[str], bool],
    default_version: str = DEFAULT_VERSION,
) -> tuple[VersionTag, VersionTag]:
    """Compute the bumped candidate and the final free tag.

    Args:
        previous_tag: Latest tag of the namespace, or None for a first release
        prefix: Namespace prefix (e.g. ``"v"``)
        hotfix: Whether the release contains a hotfix commit
        tag_exists: Predicate telling whether a tag already exists
        default_version: Version assumed when there is no previous tag

    Returns:
        Tuple of (bumped candidate, first free tag)

    Raises:
        VersionParseError: If the previous tag or default version is malformed
    """
    if previous_tag is None:
        current = VersionTag.parse(f"{prefix}{default_version}", prefix)
    else:
        current = VersionTag.parse(previous_tag, prefix)

    candidate = current.bump(hotfix)
    return candidate, next_available_version(candidate, tag_exists)
