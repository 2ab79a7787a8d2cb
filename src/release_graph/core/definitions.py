"""Branch categories and the rules attached to each of them.

Every category carries three pure functions:

- ``classify`` decides whether a raw configuration entry belongs to it
- ``normalize`` turns the matching entries into ``NormalizedBranch`` values
- ``validate`` checks the category-wide invariant on the normalized list

``DEFINITIONS`` lists the categories in the order the branch graph is
built and reported: maintenance, release, prerelease.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from release_graph.core.models import BranchCategory, NormalizedBranch
from release_graph.core.ranges import VersionRange, is_maintenance_range, valid_range
from release_graph.core.version import Version

MAX_RELEASE_BRANCHES = 3


def _named(branch: Any) -> bool:
    return isinstance(branch, Mapping) and isinstance(branch.get("name"), str)


def is_maintenance_branch(branch: Any) -> bool:
    """Whether an entry is a maintenance branch.

    Its ``range`` (or its name when it has none) is like ``1.x`` or ``1.2.x``,
    and it has no ``prerelease``.
    """
    if not _named(branch):
        return False
    target = branch.get("range") or branch["name"]
    return is_maintenance_range(target) and branch.get("prerelease") is None


def is_release_branch(branch: Any) -> bool:
    """Whether an entry is a release branch.

    It has neither ``range`` nor ``prerelease`` and its name is not a range.
    """
    if not _named(branch):
        return False
    return (
        branch.get("range") is None
        and branch.get("prerelease") is None
        and valid_range(branch["name"]) is None
    )


def is_prerelease_branch(branch: Any) -> bool:
    """Whether an entry is a prerelease branch.

    ``prerelease`` is ``true`` or a non-empty identifier, there is no
    ``range`` and the name is not a range.
    """
    if not _named(branch):
        return False
    prerelease = branch.get("prerelease")
    return (
        (prerelease is True or (isinstance(prerelease, str) and prerelease != ""))
        and branch.get("range") is None
        and valid_range(branch["name"]) is None
    )


def _range_order(branch: NormalizedBranch) -> tuple[Version, bool, Version]:
    version_range = VersionRange.parse(branch.range or "")
    lower = version_range.min_version() or Version(0, 0, 0)
    upper = version_range.upper_bound()
    return (lower, upper is None, upper or lower)


def normalize_maintenance(branches: Sequence[Mapping[str, Any]]) -> list[NormalizedBranch]:
    normalized = [
        NormalizedBranch(
            name=branch["name"],
            type=BranchCategory.MAINTENANCE,
            range=branch.get("range") or branch["name"],
            channel=branch.get("channel"),
        )
        for branch in branches
    ]
    return sorted(normalized, key=_range_order)


def normalize_release(branches: Sequence[Mapping[str, Any]]) -> list[NormalizedBranch]:
    return [
        NormalizedBranch(
            name=branch["name"],
            type=BranchCategory.RELEASE,
            channel=branch.get("channel"),
        )
        for branch in branches
    ]


def normalize_prerelease(branches: Sequence[Mapping[str, Any]]) -> list[NormalizedBranch]:
    return [
        NormalizedBranch(
            name=branch["name"],
            type=BranchCategory.PRERELEASE,
            prerelease=branch["name"] if branch["prerelease"] is True else branch["prerelease"],
            channel=branch.get("channel"),
        )
        for branch in branches
    ]


def validate_maintenance(branches: Sequence[NormalizedBranch]) -> bool:
    """Maintenance ranges must be distinct once parsed (``1.x`` equals ``1.x.x``)."""
    return len({valid_range(branch.range) for branch in branches}) == len(branches)


def validate_release(branches: Sequence[NormalizedBranch]) -> bool:
    return 0 < len(branches) <= MAX_RELEASE_BRANCHES


def validate_prerelease(branches: Sequence[NormalizedBranch]) -> bool:
    return len({branch.prerelease for branch in branches}) == len(branches)


@dataclass(frozen=True)
class CategoryDefinition:
    """The rules of one branch category."""

    category: BranchCategory
    classify: Callable[[Any], bool]
    normalize: Callable[[Sequence[Mapping[str, Any]]], list[NormalizedBranch]]
    validate: Callable[[Sequence[NormalizedBranch]], bool]
    error_code: str


DEFINITIONS: tuple[CategoryDefinition, ...] = (
    CategoryDefinition(
        category=BranchCategory.MAINTENANCE,
        classify=is_maintenance_branch,
        normalize=normalize_maintenance,
        validate=validate_maintenance,
        error_code="ELTSBRANCHES",
    ),
    CategoryDefinition(
        category=BranchCategory.RELEASE,
        classify=is_release_branch,
        normalize=normalize_release,
        validate=validate_release,
        error_code="ERELEASEBRANCHES",
    ),
    CategoryDefinition(
        category=BranchCategory.PRERELEASE,
        classify=is_prerelease_branch,
        normalize=normalize_prerelease,
        validate=validate_prerelease,
        error_code="EPRERELEASEBRANCHES",
    ),
)
