"""Implementation of the 'release' and 'next-version' commands.

The release command classifies commits since the last tag of the selected
environment, writes release notes and creates the next annotated tag.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.markdown import Markdown
from rich.panel import Panel

from release_planner.config import load_config
from release_planner.core.release import apply_release_plan, plan_release
from release_planner.exceptions import ReleasePlannerError
from release_planner.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from release_planner.config.models import ReleasePlannerConfig
    from release_planner.core.release import ReleasePlan

NOTHING_TO_RELEASE = "No commits found since last tag. Aborting."


def _load(
    project_path: Path,
    overrides: dict[str, Any],
    err_console: Console,
) -> ReleasePlannerConfig:
    try:
        return load_config(project_path, overrides)
    except ReleasePlannerError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e


def _plan(
    project_path: Path,
    config: ReleasePlannerConfig,
    console: Console,
    err_console: Console,
) -> tuple[GitRepository, ReleasePlan]:
    repo = GitRepository(project_path)
    try:
        plan = plan_release(repo, config, project_path)
    except ReleasePlannerError as e:
        err_console.print(f"[red]Error:[/] {e}")
        if getattr(e, "stderr", None):
            err_console.print(f"[dim]{e.stderr}[/]")
        raise SystemExit(1) from e

    if plan is None:
        console.print(f"[yellow]{NOTHING_TO_RELEASE}[/]")
        raise SystemExit(1)
    return repo, plan


def run_release(
    path: str | None,
    overrides: dict[str, Any],
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to the repository
        overrides: Configuration values given on the command line
        dry_run: Show the plan without writing notes or creating the tag
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()
    config = _load(project_path, overrides, err_console)
    repo, plan = _plan(project_path, config, console, err_console)

    console.print(f"Release environment: [cyan]{plan.environment}[/]")
    console.print(f"Last tag: [cyan]{plan.previous_tag or 'none'}[/]")
    if plan.version != plan.candidate:
        console.print(f"[dim]{plan.candidate} already exists, skipping to {plan.version}[/]")

    if dry_run:
        console.print(
            Panel(
                Markdown(plan.notes),
                title=f"[yellow]Dry Run Preview: {plan.notes_path}[/]",
                border_style="yellow",
            )
        )
        console.print(f"Would tag new version: [green]{plan.tag}[/]")
        return

    try:
        notes_path = apply_release_plan(repo, plan)
    except ReleasePlannerError as e:
        err_console.print(f"[red]Error creating release:[/] {e}")
        if getattr(e, "stderr", None):
            err_console.print(f"[dim]{e.stderr}[/]")
        raise SystemExit(1) from e

    console.print(
        f"Created release notes: [cyan]{notes_path}[/]", soft_wrap=True, highlight=False
    )
    console.print(f"Tagged new version: [green]{plan.tag}[/]", soft_wrap=True, highlight=False)


def run_next_version(
    path: str | None,
    overrides: dict[str, Any],
    console: Console,
    err_console: Console,
) -> None:
    """Print the tag the next release would get, without side effects."""
    project_path = Path(path) if path else Path.cwd()
    config = _load(project_path, overrides, err_console)
    _, plan = _plan(project_path, config, console, err_console)
    console.print(plan.tag, highlight=False)
