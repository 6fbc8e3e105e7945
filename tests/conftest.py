"""Shared fixtures for release-planner tests."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from release_planner.exceptions import GitError
from release_planner.vcs.git import Commit

REPO_URL = "https://github.com/acme/widgets"


@dataclass
class FakeRepository:
    """In-memory stand-in for GitRepository."""

    tags: list[str] = field(default_factory=list)
    unmerged: set[str] = field(default_factory=set)
    commits: list[Commit] = field(default_factory=list)
    url: str | None = REPO_URL
    created: list[tuple[str, str]] = field(default_factory=list)
    since_calls: list[str | None] = field(default_factory=list)

    def list_tags(self, pattern: str | None = None, merged: bool = False) -> list[str]:
        """Tags are kept oldest first; listing returns them newest first."""
        prefix = pattern.rstrip("*") if pattern else ""
        return [
            t
            for t in reversed(self.tags)
            if t.startswith(prefix) and not (merged and t in self.unmerged)
        ]

    def tag_exists(self, name: str) -> bool:
        return name in self.tags

    def commits_since(self, tag: str | None) -> list[Commit]:
        self.since_calls.append(tag)
        return list(self.commits)

    def remote_url(self, remote: str = "origin") -> str:
        if self.url is None:
            raise GitError(f"No URL configured for remote '{remote}'")
        return self.url

    def create_annotated_tag(self, name: str, message: str) -> None:
        if name in self.tags:
            raise GitError(f"tag '{name}' already exists")
        self.tags.append(name)
        self.created.append((name, message))


@pytest.fixture
def fake_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def feat_commit() -> Commit:
    return Commit("feat123", "feat: add widget")


@pytest.fixture
def fix_commit() -> Commit:
    return Commit("fix456", "fix(ABC-12): null check")


@pytest.fixture
def hotfix_commit() -> Commit:
    return Commit("hot789", "hotfix: patch crash")


@pytest.fixture
def sample_commits() -> list[Commit]:
    """Commits as git log returns them, most recent first."""
    return [
        Commit("a1", "feat(PROJ-1): add login"),
        Commit("a2", "Merge branch 'main' into feature"),
        Commit("a3", "fix: handle empty input"),
        Commit("a4", "docs: update readme"),
        Commit("a5", "devDependencies: bump pytest"),
        Commit("a6", "feat: add logout"),
        Commit("a7", "fixup! feat: add logout"),
    ]


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git(monkeypatch: pytest.MonkeyPatch):
    """Run git commands with a fixed identity."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    for key, value in {
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@example.com",
        "GIT_CONFIG_NOSYSTEM": "1",
    }.items():
        monkeypatch.setenv(key, value)
    return _git


@pytest.fixture
def temp_git_repo(tmp_path: Path, git) -> Path:
    """An empty git repository with an origin remote."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "tag.gpgSign", "false")
    git(repo, "config", "commit.gpgSign", "false")
    git(repo, "remote", "add", "origin", "git@github.com:acme/widgets.git")
    return repo


@pytest.fixture
def commit(git):
    """Create an empty commit with the given subject and return its sha."""

    def _commit(repo: Path, subject: str) -> str:
        git(repo, "commit", "-q", "--allow-empty", "-m", subject)
        return git(repo, "rev-parse", "HEAD")

    return _commit
