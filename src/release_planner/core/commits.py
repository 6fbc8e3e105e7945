"""Conventional commit classification.

Commit subjects are matched against one of two grammars:

- ``loose``: ``type(scope): summary`` with an optional free-form scope
- ``strict``: ``type(ABC-123): summary`` where the scope must be a ticket

Subjects that do not match are dropped; merge commits and fixups are
expected noise, not errors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from release_planner.vcs.git import Commit


class CommitType(StrEnum):
    """Canonical conventional commit types."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"
    HOTFIX = "hotfix"


class Grammar(StrEnum):
    """Subject grammar used to recognize commits."""

    LOOSE = "loose"
    STRICT = "strict"


# devDependencies intentionally maps to chore while the other dependency
# aliases map to fix.
COMMIT_TYPE_ALIASES: dict[str, CommitType] = {
    "initial": CommitType.FEAT,
    "dependencies": CommitType.FIX,
    "peerDependencies": CommitType.FIX,
    "devDependencies": CommitType.CHORE,
    "metadata": CommitType.FIX,
}

TICKET_PATTERN = re.compile(r"[A-Za-z]+-\d+")

_TYPE_TOKENS = "|".join(
    re.escape(token) for token in [*(t.value for t in CommitType), *COMMIT_TYPE_ALIASES]
)

_GRAMMAR_PATTERNS: dict[Grammar, re.Pattern[str]] = {
    Grammar.LOOSE: re.compile(
        rf"(?P<type>{_TYPE_TOKENS})(?:\((?P<scope>[^)]*)\))?: (?P<summary>.+)"
    ),
    Grammar.STRICT: re.compile(
        rf"(?P<type>{_TYPE_TOKENS})\((?P<scope>{TICKET_PATTERN.pattern})\): (?P<summary>.+)"
    ),
}


def resolve_commit_type(token: str) -> CommitType:
    """Map a type token or alias to its canonical ``CommitType``.

    Raises:
        ValueError: If the token is neither a type nor an alias
    """
    if token in COMMIT_TYPE_ALIASES:
        return COMMIT_TYPE_ALIASES[token]
    return CommitType(token)


def extract_ticket(scope: str | None) -> str | None:
    """Return ``scope`` if it looks like a ticket id (``ABC-123``), else None."""
    if scope and TICKET_PATTERN.fullmatch(scope):
        return scope
    return None


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit whose subject matched the active grammar."""

    type: CommitType
    scope: str | None
    ticket: str | None
    summary: str
    raw: str
    sha: str
    url: str

    @property
    def is_hotfix(self) -> bool:
        return self.type is CommitType.HOTFIX


def classify_commit(
    commit: Commit,
    grammar: Grammar,
    repo_url: str,
) -> ClassifiedCommit | None:
    """Classify a single commit.

    Args:
        commit: Commit with its subject line
        grammar: Grammar the subject must follow
        repo_url: Browsable repository URL used to build the commit link

    Returns:
        The classified commit, or None if the subject does not match
    """
    match = _GRAMMAR_PATTERNS[grammar].fullmatch(commit.subject)
    if not match:
        return None

    token = match.group("type")
    scope = match.group("scope") or None
    summary = match.group("summary")
    raw = f"{token}({scope}): {summary}" if scope else f"{token}: {summary}"

    return ClassifiedCommit(
        type=resolve_commit_type(token),
        scope=scope,
        ticket=extract_ticket(scope),
        summary=summary,
        raw=raw,
        sha=commit.sha,
        url=f"{repo_url}/commit/{commit.sha}",
    )


def classify_commits(
    commits: Iterable[Commit],
    grammar: Grammar,
    repo_url: str,
) -> list[ClassifiedCommit]:
    """Classify commits, keeping their order and dropping non-matching ones."""
    classified = []
    for commit in commits:
        result = classify_commit(commit, grammar, repo_url)
        if result is not None:
            classified.append(result)
    return classified


def group_commits_by_type(
    commits: Iterable[ClassifiedCommit],
) -> dict[CommitType, list[ClassifiedCommit]]:
    """Group commits by canonical type, keeping their order within each group.

    Only types with at least one commit appear as keys.
    """
    grouped: dict[CommitType, list[ClassifiedCommit]] = {}
    for commit in commits:
        grouped.setdefault(commit.type, []).append(commit)
    return grouped


def has_hotfix(commits: Iterable[ClassifiedCommit]) -> bool:
    return any(commit.is_hotfix for commit in commits)
