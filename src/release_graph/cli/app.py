"""Command line interface for release-graph."""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from release_graph import __version__
from release_graph.cli.commands.last_release import run_last_release
from release_graph.cli.commands.verify import run_verify
from release_graph.logging import setup_logging

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="release-graph",
    help="Validate release branches and find the last release on each of them.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress messages."),
    debug: bool = typer.Option(False, "--debug", help="Show debug messages."),
) -> None:
    if debug:
        level: int | None = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = None
    setup_logging(level, console=err_console)


@app.command()
def verify(
    path: str | None = typer.Argument(None, help="Project directory (defaults to current)."),
) -> None:
    """Validate the branch configuration and show the release graph."""
    run_verify(path, console, err_console)


@app.command("last-release")
def last_release(
    branch: str = typer.Argument(..., help="Configured branch to inspect."),
    path: str | None = typer.Argument(None, help="Project directory (defaults to current)."),
    before: str | None = typer.Option(
        None,
        "--before",
        help="Only consider versions lower than this one.",
    ),
) -> None:
    """Show the last version released on a branch."""
    run_last_release(branch, path, before, console, err_console)


def main() -> None:
    app()
