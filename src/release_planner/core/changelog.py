"""Release notes rendering.

Notes are a markdown document with one section per commit type, in the
fixed order of ``CHANGELOG_SECTIONS``. Rendering is pure; writing the
result to disk is a separate step.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from release_planner.core.commits import CommitType
from release_planner.exceptions import ReleaseNotesError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from release_planner.core.commits import ClassifiedCommit

CHANGELOG_SECTIONS: tuple[tuple[CommitType, str], ...] = (
    (CommitType.FEAT, "✨ Features"),
    (CommitType.FIX, "🐛 Bug Fixes"),
    (CommitType.HOTFIX, "🔥 Hotfixes"),
    (CommitType.DOCS, "📚 Documentation"),
    (CommitType.STYLE, "💎 Styles"),
    (CommitType.REFACTOR, "📦 Code Refactoring"),
    (CommitType.PERF, "🚀 Performance Improvements"),
    (CommitType.TEST, "🚨 Tests"),
    (CommitType.BUILD, "🛠 Builds"),
    (CommitType.CI, "⚙️ Continuous Integrations"),
    (CommitType.CHORE, "♻️ Chores"),
    (CommitType.REVERT, "🗑 Reverts"),
)

EMPTY_SECTION_PLACEHOLDER = "- (none)"


def format_commit_line(
    commit: ClassifiedCommit,
    ticket_base_url: str | None = None,
    ticket_label: str = "JIRA",
) -> str:
    """Format one commit as a markdown list item.

    A ticket link is only added when both a base URL is configured and the
    commit carries a ticket.
    """
    line = f"- [{commit.raw}]({commit.url})"
    if ticket_base_url and commit.ticket:
        line += f" - [{ticket_label}]({ticket_base_url}{commit.ticket})"
    return line


def format_section(
    title: str,
    commits: Sequence[ClassifiedCommit],
    *,
    ticket_base_url: str | None = None,
    ticket_label: str = "JIRA",
    include_empty: bool = False,
) -> str:
    """Format a section, or return ``""`` for an omitted empty section."""
    if not commits:
        if include_empty:
            return f"## {title}\n{EMPTY_SECTION_PLACEHOLDER}\n"
        return ""

    lines = [format_commit_line(c, ticket_base_url, ticket_label) for c in commits]
    return f"## {title}\n" + "\n".join(lines) + "\n"


def render_release_notes(
    version: str,
    grouped: Mapping[CommitType, Sequence[ClassifiedCommit]],
    *,
    ticket_base_url: str | None = None,
    ticket_label: str = "JIRA",
    include_empty_sections: bool = False,
    today: date | None = None,
) -> str:
    """Render the release notes document.

    Args:
        version: Final version tag, used in the title
        grouped: Commits grouped by canonical type
        ticket_base_url: Prefix for ticket links; no links when unset
        ticket_label: Link text for ticket links
        include_empty_sections: Render empty sections with a placeholder
        today: Release date; defaults to the current UTC date

    Returns:
        Markdown content
    """
    release_date = today or datetime.now(UTC).date()

    sections = [
        format_section(
            title,
            grouped.get(commit_type, []),
            ticket_base_url=ticket_base_url,
            ticket_label=ticket_label,
            include_empty=include_empty_sections,
        )
        for commit_type, title in CHANGELOG_SECTIONS
    ]

    return "\n".join(
        [
            f"# {version} – {release_date.isoformat()}",
            "",
            *(section for section in sections if section),
        ]
    )


def write_release_notes(directory: Path, version: str, content: str) -> Path:
    """Write notes to ``<directory>/<version>.md``, creating the directory.

    Raises:
        ReleaseNotesError: If the file cannot be written
    """
    path = directory / f"{version}.md"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReleaseNotesError(f"Could not write release notes to {path}: {e}") from e
    return path
