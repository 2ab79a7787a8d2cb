"""Implementation of the 'last-release' command.

Shows the last version released on a configured branch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from release_graph.cli.commands._helpers import load_branches
from release_graph.core.last_release import get_last_release
from release_graph.exceptions import GitError, InvalidVersionError
from release_graph.vcs import get_branch_tags

if TYPE_CHECKING:
    from rich.console import Console


def run_last_release(
    branch_name: str,
    path: str | None,
    before: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the last-release command.

    Args:
        branch_name: Configured branch to inspect
        path: Optional path to project directory
        before: Only consider versions lower than this one
        console: Console for standard output
        err_console: Console for error output
    """
    config, repo, branches = load_branches(path, err_console)

    branch = next((b for b in branches if b.name == branch_name), None)
    if branch is None:
        names = escape(", ".join(b.name for b in branches))
        err_console.print(
            f"[red]Error:[/] Branch [cyan]{escape(branch_name)}[/] is not configured. "
            f"Configured branches: {names}"
        )
        raise SystemExit(1)

    try:
        branch = branch.with_tags(get_branch_tags(repo, branch.name, config.tag_format))
    except GitError as e:
        err_console.print(f"[red]Error reading tags:[/] {e}")
        raise SystemExit(1) from e

    try:
        last_release = get_last_release(branch, before=before)
    except InvalidVersionError as e:
        err_console.print(f"[red]Invalid version format:[/] {e}")
        raise SystemExit(1) from e

    if not last_release:
        console.print(f"[yellow]No release found on branch [cyan]{escape(branch.name)}[/].[/]")
        return

    console.print(
        Panel(
            f"Version: [green]{last_release.version}[/]\n"
            f"Tag:     [cyan]{last_release.git_tag}[/]\n"
            f"Commit:  {last_release.git_head}\n"
            f"Channel: {last_release.channel or 'default'}",
            title=f"Last release on [cyan]{escape(branch.name)}[/] ({branch.type})",
            border_style="green",
        )
    )
