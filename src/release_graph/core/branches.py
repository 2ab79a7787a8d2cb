"""Branch graph construction and validation.

Turns the raw ``branches`` configuration into a validated, ordered list of
``NormalizedBranch`` values:

1. Structural checks: every entry is a table with a non-blank ``name``,
   names are unique and are legal git reference names.
2. Classification of every entry into exactly one category.
3. Per-category normalization and invariant checks.
4. Detection of entries that match no category.

Nothing fails fast. Every problem found is collected and raised once, as an
``AggregateBranchError``, so the whole configuration can be fixed in one go.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from release_graph.core.definitions import DEFINITIONS
from release_graph.core.models import NormalizedBranch
from release_graph.exceptions import AggregateBranchError, BranchValidationError, get_error
from release_graph.logging import get_logger

logger = get_logger(__name__)

RefNameCheck = Callable[[str], bool | Awaitable[bool]]


def is_well_formed(branch: Any) -> bool:
    """Whether an entry is a table with a non-blank string ``name``."""
    if not isinstance(branch, Mapping):
        return False
    name = branch.get("name")
    return isinstance(name, str) and bool(name.strip())


def find_duplicates(names: Sequence[str]) -> list[str]:
    """Names occurring more than once, each listed once, sorted."""
    ordered = sorted(names)
    return [
        name
        for index, name in enumerate(ordered)
        if index + 1 < len(ordered)
        and ordered[index + 1] == name
        and (index == 0 or ordered[index - 1] != name)
    ]


async def check_ref_name(is_valid_ref_name: RefNameCheck, name: str) -> bool:
    result = is_valid_ref_name(name)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


def _structural_errors(branches: Sequence[Any]) -> list[BranchValidationError]:
    errors = [
        get_error("EINVALIDBRANCH", branch=branch)
        for branch in branches
        if not is_well_formed(branch)
    ]

    names = [branch["name"].strip() for branch in branches if is_well_formed(branch)]
    duplicates = find_duplicates(names)
    if duplicates:
        errors.append(get_error("EDUPLICATEBRANCHES", duplicates=duplicates))

    return errors


async def _verify(
    branches: Sequence[Any],
    is_valid_ref_name: RefNameCheck,
) -> tuple[list[BranchValidationError], list[Mapping[str, Any]]]:
    errors = _structural_errors(branches)

    well_formed = [branch for branch in branches if is_well_formed(branch)]
    results = await asyncio.gather(
        *(check_ref_name(is_valid_ref_name, branch["name"]) for branch in well_formed)
    )
    invalid = [branch for branch, valid in zip(well_formed, results, strict=True) if not valid]
    errors.extend(get_error("EINVALIDBRANCHNAME", name=branch["name"]) for branch in invalid)

    return errors, invalid


def _candidates(
    branches: Sequence[Any],
    rejected: Sequence[Mapping[str, Any]] = (),
) -> list[Mapping[str, Any]]:
    seen: set[str] = set()
    candidates = []
    for branch in branches:
        if not is_well_formed(branch) or any(branch is other for other in rejected):
            continue
        name = branch["name"].strip()
        if name in seen:
            continue
        seen.add(name)
        candidates.append(branch)
    return candidates


async def verify_branches(
    branches: Sequence[Any],
    is_valid_ref_name: RefNameCheck,
) -> list[BranchValidationError]:
    """Run the structural checks on the raw branch configuration.

    The ref-name check runs for every well-formed entry, concurrently, and
    all of its results are collected.

    Args:
        branches: Raw branch configuration entries
        is_valid_ref_name: Returns (or resolves to) whether a name is a legal
            git branch name

    Returns:
        ``EINVALIDBRANCH`` errors in input order, then at most one
        ``EDUPLICATEBRANCHES``, then ``EINVALIDBRANCHNAME`` errors in input order
    """
    errors, _ = await _verify(branches, is_valid_ref_name)
    return errors


def _classify(
    candidates: Sequence[Mapping[str, Any]],
) -> tuple[list[NormalizedBranch], list[BranchValidationError]]:
    errors: list[BranchValidationError] = []
    result: list[NormalizedBranch] = []

    for definition in DEFINITIONS:
        matched = [branch for branch in candidates if definition.classify(branch)]
        normalized = definition.normalize(matched)
        logger.debug(
            "%d %s branch(es): %s",
            len(normalized),
            definition.category,
            ", ".join(branch.name for branch in normalized),
        )
        if not definition.validate(normalized):
            errors.append(get_error(definition.error_code, branches=normalized))
        result.extend(normalized)

    known = {branch.name for branch in result}
    unknowns = [branch["name"] for branch in candidates if branch["name"] not in known]
    if unknowns:
        errors.append(get_error("EUNKNOWNBRANCH", unknowns=unknowns))

    return result, errors


def build_branch_graph(branches: Sequence[Any]) -> list[NormalizedBranch]:
    """Classify and validate branches whose names are already known to be legal.

    Same as ``get_branches`` without the ref-name check.

    Raises:
        AggregateBranchError: If any invariant is violated
    """
    errors = _structural_errors(branches)
    result, category_errors = _classify(_candidates(branches))
    errors.extend(category_errors)

    if errors:
        raise AggregateBranchError(errors)
    return result


async def get_branches(
    branches: Sequence[Any],
    is_valid_ref_name: RefNameCheck,
) -> list[NormalizedBranch]:
    """Build the validated branch graph.

    Entries failing a structural check are left out of classification; of
    duplicated names only the first entry is classified, so one mistake is
    reported once.

    Args:
        branches: Raw branch configuration entries
        is_valid_ref_name: Returns (or resolves to) whether a name is a legal
            git branch name

    Returns:
        Maintenance branches (by ascending range), then release and
        prerelease branches in declaration order

    Raises:
        AggregateBranchError: With every structural, category and
            unknown-branch error, in that order
    """
    errors, invalid = await _verify(branches, is_valid_ref_name)

    result, category_errors = _classify(_candidates(branches, invalid))
    errors.extend(category_errors)

    if errors:
        raise AggregateBranchError(errors)

    logger.info("Validated %d branch(es)", len(result))
    return result
