"""Git access through the ``git`` command line.

All subprocess calls go through ``GitRepository._run`` so that tests can
patch a single seam. Failures surface as ``GitError`` except where an
absent value is the expected outcome (no tags yet, unknown tag).
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit, urlunsplit

from release_planner.exceptions import GitError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%H %s"

# [user@]host:path, but not scheme://...
_SCP_REMOTE = re.compile(r"^(?:[^@/]+@)?([^:/]+):(?!//)(.+)$")
_WEB_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class Commit:
    """A commit as returned by ``git log``: object id and subject line."""

    sha: str
    subject: str


class VersionControl(Protocol):
    """The operations the release pipeline needs from version control."""

    def list_tags(self, pattern: str | None = None, merged: bool = False) -> list[str]: ...

    def tag_exists(self, name: str) -> bool: ...

    def commits_since(self, tag: str | None) -> list[Commit]: ...

    def remote_url(self, remote: str = "origin") -> str: ...

    def create_annotated_tag(self, name: str, message: str) -> None: ...


def normalize_remote_url(remote: str) -> str:
    """Turn a git remote address into a browsable web URL.

    ``git@host:owner/repo.git``, ``host:owner/repo.git`` and ``ssh://``,
    ``git://`` or ``git+ssh://`` remotes become ``https://host/owner/repo``.
    Credentials are dropped from every form; an http(s) port is kept.

    Args:
        remote: Remote URL as configured in git

    Returns:
        Web address of the repository
    """
    remote = remote.strip()
    scp = _SCP_REMOTE.match(remote)
    if scp:
        host, path = scp.groups()
        remote = f"https://{host}/{path.lstrip('/')}"

    parts = urlsplit(remote)
    if parts.scheme and parts.hostname:
        scheme = parts.scheme if parts.scheme in _WEB_SCHEMES else "https"
        netloc = parts.hostname
        if scheme == parts.scheme and parts.port:
            netloc += f":{parts.port}"
        remote = urlunsplit((scheme, netloc, parts.path, "", ""))

    remote = remote.rstrip("/")
    if remote.endswith(".git"):
        remote = remote[: -len(".git")]
    return remote


class GitRepository:
    """A git working tree driven through subprocess calls."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = (path or Path.cwd()).resolve()

    def __repr__(self) -> str:
        return f"GitRepository({self.path!s})"

    def _run(self, args: list[str]) -> str:
        """Run a git command and return its stripped standard output.

        Raises:
            GitError: If git is missing or exits with a non-zero status
        """
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.path)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=(e.stderr or "").strip(),
            ) from e
        return result.stdout.strip()

    def list_tags(self, pattern: str | None = None, merged: bool = False) -> list[str]:
        """List tags, highest version first.

        Args:
            pattern: Optional glob restricting the tags (e.g. ``"v*"``)
            merged: Only list tags reachable from HEAD

        Returns:
            Tag names sorted by descending version
        """
        args = ["tag", "--list", "--sort=-version:refname"]
        if merged:
            args.extend(["--merged", "HEAD"])
        if pattern:
            args.append(pattern)
        output = self._run(args)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def tag_exists(self, name: str) -> bool:
        try:
            self._run(["rev-parse", "-q", "--verify", f"refs/tags/{name}"])
        except GitError:
            return False
        return True

    def _has_head(self) -> bool:
        try:
            self._run(["rev-parse", "-q", "--verify", "HEAD"])
        except GitError:
            return False
        return True

    def commits_since(self, tag: str | None) -> list[Commit]:
        """Get commits after ``tag`` up to HEAD, most recent first.

        Args:
            tag: Tag to start after, or None for the whole history

        Returns:
            Commits with their subject lines
        """
        if tag is None and not self._has_head():
            return []
        rev_range = f"{tag}..HEAD" if tag else "HEAD"
        output = self._run(["log", rev_range, f"--pretty=format:{LOG_FORMAT}"])
        commits = []
        for line in output.splitlines():
            if not line.strip():
                continue
            sha, _, subject = line.partition(" ")
            commits.append(Commit(sha=sha, subject=subject))
        return commits

    def remote_url(self, remote: str = "origin") -> str:
        """Get the browsable URL of ``remote``.

        Raises:
            GitError: If the remote is not configured
        """
        try:
            url = self._run(["config", "--get", f"remote.{remote}.url"])
        except GitError as e:
            raise GitError(f"No URL configured for remote '{remote}'", stderr=e.stderr) from e
        if not url:
            raise GitError(f"No URL configured for remote '{remote}'")
        return normalize_remote_url(url)

    def create_annotated_tag(self, name: str, message: str) -> None:
        logger.info("Creating tag %s", name)
        self._run(["tag", "-a", name, "-m", message])
