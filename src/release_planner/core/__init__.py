"""Core business logic for release-planner.

This module contains the fundamental building blocks:
- Conventional commit classification
- Version tag bumping and collision probing
- Release notes rendering
- Release orchestration
"""

from __future__ import annotations

from release_planner.core.changelog import (
    CHANGELOG_SECTIONS,
    render_release_notes,
    write_release_notes,
)
from release_planner.core.commits import (
    COMMIT_TYPE_ALIASES,
    ClassifiedCommit,
    CommitType,
    Grammar,
    classify_commit,
    classify_commits,
    group_commits_by_type,
    has_hotfix,
)
from release_planner.core.release import ReleasePlan, apply_release_plan, plan_release
from release_planner.core.version import VersionTag, compute_next_version, next_available_version

__all__ = [
    # Changelog
    "CHANGELOG_SECTIONS",
    # Commits
    "COMMIT_TYPE_ALIASES",
    "ClassifiedCommit",
    "CommitType",
    "Grammar",
    # Release
    "ReleasePlan",
    # Version
    "VersionTag",
    "apply_release_plan",
    "classify_commit",
    "classify_commits",
    "compute_next_version",
    "group_commits_by_type",
    "has_hotfix",
    "next_available_version",
    "plan_release",
    "render_release_notes",
    "write_release_notes",
]
