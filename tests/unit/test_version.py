"""Tests for version tags and the bump policy."""

from __future__ import annotations

import pytest

from release_planner.core.version import (
    VersionTag,
    compute_next_version,
    latest_tag_in_namespace,
    next_available_version,
)
from release_planner.exceptions import VersionParseError


def existing(*tags: str):
    return set(tags).__contains__


class TestVersionTag:
    """Tests for VersionTag parsing and formatting."""

    def test_parse(self):
        """Parse a production tag."""
        tag = VersionTag.parse("v2.3.5", "v")

        assert (tag.major, tag.minor, tag.patch) == (2, 3, 5)
        assert str(tag) == "v2.3.5"
        assert tag.version == "2.3.5"

    def test_parse_test_namespace(self):
        """Parse a tag with a multi-character prefix."""
        tag = VersionTag.parse("test-v1.10.0", "test-v")

        assert str(tag) == "test-v1.10.0"
        assert tag.minor == 10

    @pytest.mark.parametrize(
        ("tag", "prefix"),
        [
            ("1.2.3", "v"),
            ("v1.2", "v"),
            ("v1.2.3-rc1", "v"),
            ("test-v1.2.3", "v"),
            ("v1.2.3", "test-v"),
            ("vx.y.z", "v"),
        ],
    )
    def test_parse_rejects_other_shapes(self, tag: str, prefix: str):
        """Only exact <prefix>X.Y.Z strings parse."""
        with pytest.raises(VersionParseError):
            VersionTag.parse(tag, prefix)

    def test_negative_components_rejected(self):
        """Negative version components are rejected."""
        with pytest.raises(VersionParseError):
            VersionTag("v", 1, -1, 0)


class TestBump:
    """Tests for VersionTag.bump()."""

    @pytest.mark.parametrize("tag", ["v0.0.0", "v2.3.5", "v9.99.12"])
    def test_minor_bump_without_hotfix(self, tag: str):
        """Without a hotfix, minor increments and patch resets."""
        current = VersionTag.parse(tag, "v")
        bumped = current.bump(hotfix=False)

        assert bumped == VersionTag("v", current.major, current.minor + 1, 0)

    @pytest.mark.parametrize("tag", ["v0.0.0", "v2.3.5", "v9.99.12"])
    def test_patch_bump_with_hotfix(self, tag: str):
        """With a hotfix, only patch increments."""
        current = VersionTag.parse(tag, "v")
        bumped = current.bump(hotfix=True)

        assert bumped == VersionTag("v", current.major, current.minor, current.patch + 1)

    def test_major_never_changes(self):
        """Major is never bumped automatically."""
        current = VersionTag("v", 3, 999, 999)

        assert current.bump(hotfix=False).major == 3
        assert current.bump(hotfix=True).major == 3


class TestNextAvailableVersion:
    """Tests for collision probing."""

    def test_free_candidate_returned(self):
        """A free candidate is returned unchanged."""
        candidate = VersionTag("v", 2, 4, 0)
        assert next_available_version(candidate, existing()) == candidate

    @pytest.mark.parametrize("taken", [1, 2, 5])
    def test_skips_exactly_taken_tags(self, taken: int):
        """With K consecutive taken tags, the (K+1)-th candidate is returned."""
        candidate = VersionTag("v", 2, 4, 0)
        tags = existing(*(f"v2.4.{patch}" for patch in range(taken)))

        assert str(next_available_version(candidate, tags)) == f"v2.4.{taken}"

    def test_gap_after_candidate_not_used(self):
        """Probing stops at the first free tag even if later ones exist."""
        candidate = VersionTag("v", 1, 0, 1)
        result = next_available_version(candidate, existing("v1.0.1", "v1.0.3"))

        assert str(result) == "v1.0.2"

    def test_only_exact_strings_collide(self):
        """Tags of another namespace do not collide."""
        candidate = VersionTag("v", 1, 1, 0)
        result = next_available_version(candidate, existing("test-v1.1.0"))

        assert str(result) == "v1.1.0"


class TestComputeNextVersion:
    """Tests for compute_next_version()."""

    def test_minor_release_with_collision(self):
        """v2.3.5 plus a feat becomes v2.4.0, or v2.4.1 if v2.4.0 is taken."""
        candidate, final = compute_next_version("v2.3.5", "v", False, existing("v2.4.0"))

        assert str(candidate) == "v2.4.0"
        assert str(final) == "v2.4.1"

    def test_hotfix_release(self):
        """v1.0.0 plus a hotfix becomes v1.0.1."""
        candidate, final = compute_next_version("v1.0.0", "v", True, existing())

        assert str(candidate) == str(final) == "v1.0.1"

    def test_first_release_uses_default(self):
        """Without a previous tag, the default version is bumped."""
        _, final = compute_next_version(None, "v", False, existing())
        assert str(final) == "v1.1.0"

        _, final = compute_next_version(None, "test-v", True, existing())
        assert str(final) == "test-v1.0.1"

    def test_custom_default_version(self):
        """A configured default version replaces 1.0.0."""
        _, final = compute_next_version(None, "v", False, existing(), default_version="0.0.0")
        assert str(final) == "v0.1.0"

    def test_namespaces_are_independent(self):
        """Test tags never shift production arithmetic and vice versa."""
        tags = existing("v1.1.0", "test-v1.4.0", "test-v1.5.0")

        _, production = compute_next_version("v1.0.0", "v", False, tags)
        _, test = compute_next_version("test-v1.4.0", "test-v", False, tags)

        assert str(production) == "v1.1.1"
        assert str(test) == "test-v1.5.1"

    def test_previous_tag_from_other_namespace_rejected(self):
        """A previous tag with another prefix does not parse."""
        with pytest.raises(VersionParseError):
            compute_next_version("test-v1.0.0", "v", False, existing())


class TestLatestTagInNamespace:
    """Tests for latest_tag_in_namespace()."""

    def test_first_parseable_tag(self):
        """Tags of other shapes are skipped."""
        tags = ["v3.0.0-rc1", "v2.1.0", "v2.0.0"]
        assert latest_tag_in_namespace(tags, "v") == "v2.1.0"

    def test_other_namespace_skipped(self):
        """Tags of the other namespace are skipped."""
        assert latest_tag_in_namespace(["test-v4.0.0", "v1.0.0"], "v") == "v1.0.0"

    def test_none_when_empty(self):
        """None is returned when no tag parses."""
        assert latest_tag_in_namespace([], "v") is None
        assert latest_tag_in_namespace(["release-1"], "v") is None
