"""Implementation of the 'verify' command.

The verify command validates the branch configuration and shows the
resulting release graph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from release_graph.cli.commands._helpers import load_branches

if TYPE_CHECKING:
    from rich.console import Console


def run_verify(path: str | None, console: Console, err_console: Console) -> None:
    """Run the verify command.

    Args:
        path: Optional path to project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config, _, branches = load_branches(path, err_console)

    table = Table(title="Release branches")
    table.add_column("Branch", style="cyan")
    table.add_column("Type")
    table.add_column("Range")
    table.add_column("Prerelease")
    table.add_column("Channel")

    for branch in branches:
        table.add_row(
            branch.name,
            str(branch.type),
            branch.range or "",
            branch.prerelease or "",
            branch.channel or "",
        )

    console.print(table)
    console.print(
        f"\n[green]✓[/] {len(branches)} branch(es) validated, "
        f"tags formatted as [cyan]{config.tag_format}[/]"
    )
