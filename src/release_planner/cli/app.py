"""Command-line interface for release-planner."""

from __future__ import annotations

import logging
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from release_planner import __version__
from release_planner.cli.commands.release import run_next_version, run_release
from release_planner.config.models import Environment
from release_planner.core.commits import Grammar

app = typer.Typer(
    name="release-planner",
    help="Tag releases and write release notes from conventional commits.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Repository path (default: current directory)"),
]
EnvOption = Annotated[
    Environment | None,
    typer.Option("--env", "-e", help="Tag namespace to release into"),
]
GrammarOption = Annotated[
    Grammar | None,
    typer.Option("--grammar", "-g", help="Commit subject grammar"),
]
TicketUrlOption = Annotated[
    str | None,
    typer.Option("--ticket-base-url", help="Prefix for ticket links (overrides JIRA_BASE_URL)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log git commands and decisions"),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _overrides(
    env: Environment | None,
    grammar: Grammar | None,
    ticket_base_url: str | None = None,
    include_empty: bool | None = None,
) -> dict[str, Any]:
    return {
        "environment": env,
        "grammar": grammar,
        "changelog": {
            "ticket_base_url": ticket_base_url,
            "include_empty_sections": include_empty,
        },
    }


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"release-planner {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """release-planner command group."""


@app.command()
def release(
    path: PathOption = None,
    env: EnvOption = None,
    grammar: GrammarOption = None,
    ticket_base_url: TicketUrlOption = None,
    include_empty: Annotated[
        bool,
        typer.Option("--include-empty", help="Render sections without commits as '(none)'"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Preview without writing notes or tagging"),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Write release notes and tag the next version."""
    _configure_logging(verbose)
    run_release(
        path,
        _overrides(env, grammar, ticket_base_url, include_empty or None),
        dry_run,
        console,
        err_console,
    )


@app.command("next-version")
def next_version(
    path: PathOption = None,
    env: EnvOption = None,
    grammar: GrammarOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the next version tag without changing anything."""
    _configure_logging(verbose)
    run_next_version(path, _overrides(env, grammar), console, err_console)


def main() -> None:
    app()
