"""Semantic version parsing and precedence.

Implements the SemVer 2.0.0 grammar (https://semver.org/) used for release
tags. Build metadata is kept but ignored for precedence and equality.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any

from release_graph.exceptions import InvalidVersionError

_NUMERIC = r"0|[1-9]\d*"
_PRERELEASE_ID = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_ID = r"[0-9a-zA-Z-]+"

VERSION_PATTERN = re.compile(
    rf"^[v=]?\s*(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?$",
    re.ASCII,
)

PrereleaseId = int | str


def _parse_identifiers(text: str | None) -> tuple[PrereleaseId, ...]:
    if not text:
        return ()
    return tuple(int(part) if part.isdigit() else part for part in text.split("."))


def _compare_identifiers(left: PrereleaseId, right: PrereleaseId) -> int:
    # Numeric identifiers always have lower precedence than alphanumeric ones
    if isinstance(left, int) and isinstance(right, int):
        return (left > right) - (left < right)
    if isinstance(left, int):
        return -1
    if isinstance(right, int):
        return 1
    return (left > right) - (left < right)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Dot-separated prerelease identifiers
        build: Dot-separated build metadata identifiers
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[PrereleaseId, ...] = field(default_factory=tuple)
    build: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string.

        A leading ``v`` or ``=`` and surrounding whitespace are accepted.

        Args:
            text: Version string such as ``1.2.3`` or ``v2.0.0-beta.1``

        Returns:
            The parsed version

        Raises:
            InvalidVersionError: If the string is not a valid semantic version
        """
        if not isinstance(text, str):
            raise InvalidVersionError(f"Invalid version: {text!r}")

        match = VERSION_PATTERN.match(text.strip())
        if not match:
            raise InvalidVersionError(f"Invalid version: {text!r}")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=_parse_identifiers(match.group("prerelease")),
            build=tuple(match.group("build").split(".")) if match.group("build") else (),
        )

    @property
    def is_prerelease(self) -> bool:
        """Whether the version carries prerelease identifiers."""
        return bool(self.prerelease)

    @property
    def core(self) -> tuple[int, int, int]:
        """The ``(major, minor, patch)`` triple."""
        return (self.major, self.minor, self.patch)

    def compare(self, other: Version) -> int:
        """Compare by SemVer precedence.

        Returns:
            -1, 0 or 1 as ``self`` is lower, equal or higher than ``other``
        """
        if self.core != other.core:
            return -1 if self.core < other.core else 1

        # A version without prerelease has higher precedence
        if not self.prerelease or not other.prerelease:
            return (not self.prerelease) - (not other.prerelease)

        for left, right in zip(self.prerelease, other.prerelease, strict=False):
            result = _compare_identifiers(left, right)
            if result:
                return result

        return (len(self.prerelease) > len(other.prerelease)) - (
            len(self.prerelease) < len(other.prerelease)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.core, self.prerelease))

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += "-" + ".".join(str(part) for part in self.prerelease)
        if self.build:
            version += "+" + ".".join(self.build)
        return version


def parse_version(value: Any) -> Version | None:
    """Parse a version, returning None instead of raising.

    Args:
        value: Anything; only strings can parse

    Returns:
        The version, or None if ``value`` is not a valid semantic version
    """
    try:
        return Version.parse(value)
    except InvalidVersionError:
        return None
