"""Version control access for release-planner."""

from __future__ import annotations

from release_planner.vcs.git import Commit, GitRepository, VersionControl, normalize_remote_url

__all__ = ["Commit", "GitRepository", "VersionControl", "normalize_remote_url"]
