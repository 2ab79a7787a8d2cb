"""Last release resolution.

Finds the highest version already released on a branch from the tags
attached to it. Maintenance and release branches only consider stable
versions; prerelease branches consider every version.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_graph.core.models import BranchCategory, LastRelease
from release_graph.core.version import Version, parse_version
from release_graph.logging import get_logger

if TYPE_CHECKING:
    from release_graph.core.models import NormalizedBranch, ReleaseTag

logger = get_logger(__name__)


def get_last_release(
    branch: NormalizedBranch,
    *,
    before: str | Version | None = None,
) -> LastRelease:
    """Determine the last release made on a branch.

    - Ignore tags whose version is not a valid semantic version
    - Ignore prerelease versions unless the branch is a prerelease branch
    - Ignore versions greater than or equal to ``before``
    - Keep the highest remaining version

    Args:
        branch: Branch carrying its tags
        before: Only consider versions strictly lower than this one

    Returns:
        The last release, or an empty (falsy) ``LastRelease`` if none is found

    Raises:
        InvalidVersionError: If ``before`` is not a valid version
    """
    upper = Version.parse(before) if isinstance(before, str) else before

    candidates: list[tuple[Version, ReleaseTag]] = []
    for tag in branch.tags:
        version = parse_version(tag.version)
        if version is None:
            continue
        if version.is_prerelease and branch.type is not BranchCategory.PRERELEASE:
            continue
        if upper is not None and version >= upper:
            continue
        candidates.append((version, tag))

    if not candidates:
        logger.info("No git tag version found on branch %s", branch.name)
        return LastRelease()

    # max() keeps the first of equal versions
    _, tag = max(candidates, key=lambda candidate: candidate[0])
    logger.info(
        "Found git tag %s associated with version %s on branch %s",
        tag.git_tag,
        tag.version,
        branch.name,
    )
    return LastRelease.from_tag(tag)
