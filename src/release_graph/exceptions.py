"""Exception hierarchy for release-graph.

All exceptions raised by the package derive from ``ReleaseGraphError``.
Branch and configuration validation never fails fast: each violated
invariant becomes a ``BranchValidationError`` carrying a stable code, and
all of them are raised together in one ``AggregateBranchError``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any


class ReleaseGraphError(Exception):
    """Base exception for release-graph."""


class ConfigError(ReleaseGraphError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """The [tool.release-graph] table is invalid."""


class GitError(ReleaseGraphError):
    """A git command failed."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message


class InvalidVersionError(ReleaseGraphError, ValueError):
    """A string is not a valid semantic version."""


class InvalidRangeError(ReleaseGraphError, ValueError):
    """A string is not a valid version range expression."""


class BranchValidationError(ReleaseGraphError):
    """A single violated branch or configuration invariant.

    Attributes:
        code: Stable error code (e.g. ``EDUPLICATEBRANCHES``)
        message: Short, human readable summary
        details: Longer explanation with a hint on how to fix it
        context: The values the error was built from
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: str = "",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.context = dict(context or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class AggregateBranchError(ReleaseGraphError):
    """Every validation failure found in one pass, in discovery order."""

    def __init__(self, errors: Sequence[BranchValidationError]) -> None:
        self.errors = tuple(errors)
        summary = "\n".join(f"{error.code}: {error.message}" for error in self.errors)
        super().__init__(summary)

    def __iter__(self) -> Iterator[BranchValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def codes(self) -> list[str]:
        """Codes of the aggregated errors, in order."""
        return [error.code for error in self.errors]


def _names(branches: Sequence[Any]) -> str:
    return ", ".join(f"`{getattr(branch, 'name', branch)}`" for branch in branches)


def _invalid_branch(branch: Any = None) -> tuple[str, str]:
    return (
        "A branch is invalid in the `branches` configuration.",
        "Each branch in the `branches` configuration must be a table with a "
        "non-empty `name` string.\n\n"
        f"Your configuration for the problematic branch is `{branch!r}`.",
    )


def _duplicate_branches(duplicates: Sequence[str] = ()) -> tuple[str, str]:
    listed = ", ".join(f"`{name}`" for name in duplicates)
    return (
        "The `branches` configuration has duplicate branches.",
        f"Each branch in the `branches` configuration must be unique. Duplicates: {listed}.",
    )


def _invalid_branch_name(name: str = "") -> tuple[str, str]:
    return (
        "A branch name is invalid in the `branches` configuration.",
        "Each branch in the `branches` configuration must have a valid git reference "
        f"name (see `git check-ref-format`).\n\nThe invalid name is `{name}`.",
    )


def _maintenance_branches(branches: Sequence[Any] = ()) -> tuple[str, str]:
    ranges = ", ".join(f"`{branch.name}` ({branch.range})" for branch in branches)
    return (
        "The maintenance branches are invalid in the `branches` configuration.",
        "Each maintenance branch must have a unique `range` property. If the `range` "
        "property is not set, the branch name is used as the range.\n\n"
        f"Your maintenance branches are: {ranges}.",
    )


def _release_branches(branches: Sequence[Any] = ()) -> tuple[str, str]:
    return (
        "The release branches are invalid in the `branches` configuration.",
        "A minimum of 1 and a maximum of 3 release branches are required. "
        "A release branch has no `range` and no `prerelease` property and its name "
        f"is not a version range.\n\nYour release branches are: {_names(branches) or 'none'}.",
    )


def _prerelease_branches(branches: Sequence[Any] = ()) -> tuple[str, str]:
    identifiers = ", ".join(f"`{branch.name}` ({branch.prerelease})" for branch in branches)
    return (
        "The prerelease branches are invalid in the `branches` configuration.",
        "Each prerelease branch must have a unique `prerelease` identifier. If "
        "`prerelease` is `true`, the branch name is used as the identifier.\n\n"
        f"Your prerelease branches are: {identifiers}.",
    )


def _unknown_branch(unknowns: Sequence[Any] = ()) -> tuple[str, str]:
    return (
        "Some branches match no release type in the `branches` configuration.",
        "Each branch must be a maintenance branch (name or `range` like `1.x` or "
        "`1.2.x`), a release branch or a prerelease branch (`prerelease` set and no "
        f"`range`).\n\nThe unknown branches are: {_names(unknowns)}.",
    )


def _tag_no_version(tag_format: Any = None) -> tuple[str, str]:
    return (
        "The `tag_format` option must contain the variable `${version}` exactly once.",
        f"Your configuration for `tag_format` is `{tag_format}`.",
    )


def _invalid_tag_format(tag_format: Any = None) -> tuple[str, str]:
    return (
        "The `tag_format` option must compute a valid git reference.",
        "The `tag_format`, once rendered with a version, must be a valid git tag name "
        f"(see `git check-ref-format`).\n\nYour configuration for `tag_format` is `{tag_format}`.",
    )


ERROR_DEFINITIONS: dict[str, Callable[..., tuple[str, str]]] = {
    "EINVALIDBRANCH": _invalid_branch,
    "EDUPLICATEBRANCHES": _duplicate_branches,
    "EINVALIDBRANCHNAME": _invalid_branch_name,
    "ELTSBRANCHES": _maintenance_branches,
    "ERELEASEBRANCHES": _release_branches,
    "EPRERELEASEBRANCHES": _prerelease_branches,
    "EUNKNOWNBRANCH": _unknown_branch,
    "ETAGNOVERSION": _tag_no_version,
    "EINVALIDTAGFORMAT": _invalid_tag_format,
}


def get_error(code: str, **context: Any) -> BranchValidationError:
    """Build the validation error for a code.

    Args:
        code: One of the codes in ``ERROR_DEFINITIONS``
        **context: Values describing the failure, passed to the message builder

    Returns:
        The error, ready to be aggregated

    Raises:
        KeyError: If the code is unknown
    """
    message, details = ERROR_DEFINITIONS[code](**context)
    return BranchValidationError(code, message, details, context)
