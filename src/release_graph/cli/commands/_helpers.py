"""Shared steps of the CLI commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_graph.config import load_config
from release_graph.core.verify import verify_config
from release_graph.exceptions import AggregateBranchError, ConfigError, GitError
from release_graph.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from release_graph.config.models import ReleaseGraphConfig
    from release_graph.core.models import NormalizedBranch


def print_validation_errors(error: AggregateBranchError, err_console: Console) -> None:
    """Print every aggregated error with its code and details."""
    err_console.print(f"[red]Found {len(error)} configuration error(s):[/]\n")
    for item in error:
        err_console.print(f"[red bold]{item.code}[/] {escape(item.message)}", highlight=False)
        if item.details:
            err_console.print(f"  [dim]{escape(item.details)}[/]", highlight=False)
        err_console.print()


def load_branches(
    path: str | None,
    err_console: Console,
) -> tuple[ReleaseGraphConfig, GitRepository, list[NormalizedBranch]]:
    """Load the configuration and build the validated branch graph.

    Exits with status 1 after printing the problem if any step fails.
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    try:
        repo = GitRepository(project_path)
        branches = asyncio.run(
            verify_config(
                config,
                is_valid_branch_name=repo.verify_branch_name,
                is_valid_tag_name=repo.verify_tag_name,
            )
        )
    except GitError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e
    except AggregateBranchError as e:
        print_validation_errors(e, err_console)
        raise SystemExit(1) from e

    return config, repo, branches
