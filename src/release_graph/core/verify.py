"""Whole-configuration verification.

Checks the tag format and the branch graph in one pass and reports every
problem together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_graph.core.branches import RefNameCheck, get_branches
from release_graph.core.tags import verify_tag_format
from release_graph.exceptions import AggregateBranchError

if TYPE_CHECKING:
    from release_graph.config.models import ReleaseGraphConfig
    from release_graph.core.models import NormalizedBranch


async def verify_config(
    config: ReleaseGraphConfig,
    *,
    is_valid_branch_name: RefNameCheck,
    is_valid_tag_name: RefNameCheck,
) -> list[NormalizedBranch]:
    """Verify a configuration and build its branch graph.

    Args:
        config: Loaded configuration
        is_valid_branch_name: Legal git branch name check
        is_valid_tag_name: Legal git tag name check

    Returns:
        The validated branches

    Raises:
        AggregateBranchError: With tag format errors first, then branch errors
    """
    errors = await verify_tag_format(config.tag_format, is_valid_tag_name)

    try:
        branches = await get_branches(config.branches, is_valid_branch_name)
    except AggregateBranchError as e:
        raise AggregateBranchError([*errors, *e.errors]) from None

    if errors:
        raise AggregateBranchError(errors)
    return branches
