"""Release orchestration.

``plan_release`` reads from version control and computes everything
without side effects. ``apply_release_plan`` writes the notes file and
creates the tag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_planner.core.changelog import render_release_notes, write_release_notes
from release_planner.core.commits import classify_commits, group_commits_by_type, has_hotfix
from release_planner.core.version import compute_next_version, latest_tag_in_namespace
from release_planner.exceptions import GitError

if TYPE_CHECKING:
    from datetime import date
    from pathlib import Path

    from release_planner.config.models import Environment, ReleasePlannerConfig
    from release_planner.core.commits import ClassifiedCommit
    from release_planner.core.version import VersionTag
    from release_planner.vcs.git import VersionControl

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleasePlan:
    """Everything needed to cut a release."""

    environment: Environment
    previous_tag: str | None
    candidate: VersionTag
    version: VersionTag
    commits: list[ClassifiedCommit]
    notes: str
    notes_path: Path
    tag_message: str

    @property
    def tag(self) -> str:
        return str(self.version)


def find_previous_tag(repo: VersionControl, config: ReleasePlannerConfig) -> str | None:
    """Latest tag of the configured namespace reachable from HEAD, or None.

    A failing tag query counts as "no previous tag".
    """
    namespace = config.namespace
    try:
        tags = repo.list_tags(namespace.tag_pattern, merged=True)
    except GitError as e:
        logger.debug("Could not list tags: %s", e.stderr or e)
        return None
    return latest_tag_in_namespace(tags, namespace.prefix)


def plan_release(
    repo: VersionControl,
    config: ReleasePlannerConfig,
    base_dir: Path,
    today: date | None = None,
) -> ReleasePlan | None:
    """Compute the next release.

    Args:
        repo: Version control collaborator
        config: Release configuration
        base_dir: Directory the notes directory is relative to
        today: Release date for the notes title (default: today, UTC)

    Returns:
        The plan, or None when no commit since the last tag is classifiable

    Raises:
        GitError: If reading from version control fails
        VersionParseError: If the default version is malformed
    """
    namespace = config.namespace
    previous_tag = find_previous_tag(repo, config)
    logger.debug("Previous %s tag: %s", config.environment, previous_tag)

    repo_url = repo.remote_url(config.remote)
    commits = classify_commits(repo.commits_since(previous_tag), config.grammar, repo_url)
    if not commits:
        return None

    candidate, version = compute_next_version(
        previous_tag,
        namespace.prefix,
        has_hotfix(commits),
        repo.tag_exists,
        default_version=config.default_version,
    )
    if version != candidate:
        logger.info("Tag %s exists, using %s", candidate, version)

    changelog = config.changelog
    notes = render_release_notes(
        str(version),
        group_commits_by_type(commits),
        ticket_base_url=changelog.ticket_base_url,
        ticket_label=changelog.ticket_label,
        include_empty_sections=changelog.include_empty_sections,
        today=today,
    )

    return ReleasePlan(
        environment=config.environment,
        previous_tag=previous_tag,
        candidate=candidate,
        version=version,
        commits=commits,
        notes=notes,
        notes_path=base_dir / changelog.directory / f"{version}.md",
        tag_message=namespace.tag_message(str(version)),
    )


def apply_release_plan(repo: VersionControl, plan: ReleasePlan) -> Path:
    """Write the release notes and create the annotated tag.

    Returns:
        Path of the written notes file

    Raises:
        ReleaseNotesError: If the notes cannot be written
        GitError: If the tag cannot be created
    """
    path = write_release_notes(plan.notes_path.parent, plan.tag, plan.notes)
    repo.create_annotated_tag(plan.tag, plan.tag_message)
    return path
