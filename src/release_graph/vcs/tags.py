"""Attach the releases found in git history to validated branches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_graph.core.models import ReleaseTag
from release_graph.core.tags import parse_tag
from release_graph.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from release_graph.core.models import NormalizedBranch
    from release_graph.vcs.git import GitRepository

logger = get_logger(__name__)


def get_branch_tags(repo: GitRepository, branch: str, tag_format: str) -> list[ReleaseTag]:
    """Release tags reachable from a branch.

    Tags that do not follow ``tag_format`` or do not hold a valid semantic
    version are skipped.

    Args:
        repo: Git repository
        branch: Branch name
        tag_format: Tag format template

    Returns:
        One ``ReleaseTag`` per release, in the order git lists them
    """
    tags = []
    for name in repo.get_tags(branch):
        parsed = parse_tag(tag_format, name)
        if parsed is None:
            logger.debug("Skipping tag %s: does not match %s", name, tag_format)
            continue

        version, channel = parsed
        tags.append(
            ReleaseTag(
                version=version,
                git_tag=name,
                git_head=repo.get_tag_head(name),
                channel=channel,
            )
        )

    logger.debug("Found %d release tag(s) on branch %s", len(tags), branch)
    return tags


def attach_tags(
    repo: GitRepository,
    branches: Sequence[NormalizedBranch],
    tag_format: str,
) -> list[NormalizedBranch]:
    """Return copies of ``branches`` carrying their release tags."""
    return [branch.with_tags(get_branch_tags(repo, branch.name, tag_format)) for branch in branches]
