"""Version range expressions.

Branch configuration uses npm-style ranges (``1.x``, ``1.2.x``, ``^1.2.3``,
``>=1.0.0 <2.0.0``, ``1.0.0 - 1.4.0``, ``1.x || 3.x``). A range is parsed
into sets of primitive comparators; its canonical string is what makes two
spellings of the same range (``1.x`` and ``1.x.x``) compare equal.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from release_graph.core.version import Version
from release_graph.exceptions import InvalidRangeError, InvalidVersionError

MAINTENANCE_RANGE_PATTERN = re.compile(r"\d\.[\dx](?:\.x)?", re.IGNORECASE | re.ASCII)

_XR = r"[xX*]|0|[1-9]\d*"
_IDENTIFIER = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_PRERELEASE = rf"{_IDENTIFIER}(?:\.{_IDENTIFIER})*"
_BUILD = r"[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*"
_PARTIAL = (
    rf"[v=\s]*(?:{_XR})(?:\.(?:{_XR})(?:\.(?:{_XR})(?:-{_PRERELEASE})?(?:\+{_BUILD})?)?)?"
)

_PARTIAL_PATTERN = re.compile(
    rf"^[v=\s]*(?P<major>{_XR})(?:\.(?P<minor>{_XR})(?:\.(?P<patch>{_XR})"
    rf"(?:-{_PRERELEASE})?(?:\+{_BUILD})?)?)?$",
    re.ASCII,
)
_COMPARATOR_PATTERN = re.compile(
    rf"^(?P<op><=|>=|<|>|=|~>?|\^)?(?P<partial>{_PARTIAL})$", re.ASCII
)
_HYPHEN_PATTERN = re.compile(rf"^\s*({_PARTIAL})\s+-\s+({_PARTIAL})\s*$", re.ASCII)
_OPERATOR_TRIM = re.compile(r"(<=|>=|<|>|=|~>?|\^)\s+")

_OPERATORS: dict[str, Callable[[int, int], bool]] = {
    "": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def is_maintenance_range(value: Any) -> bool:
    """Whether a value looks like a maintenance range (``1.x``, ``1.2.x``, ``1.x.x``)."""
    return isinstance(value, str) and MAINTENANCE_RANGE_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True)
class Comparator:
    """A primitive comparison against one version.

    ``operator`` is one of ``""`` (equal), ``<``, ``<=``, ``>``, ``>=``.
    """

    operator: str
    version: Version

    def test(self, version: Version) -> bool:
        return _OPERATORS[self.operator](version.compare(self.version), 0)

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"


# Matches nothing: every version is >= 0.0.0-0
_NOTHING = Comparator("<", Version(0, 0, 0, (0,)))


@dataclass(frozen=True)
class _Partial:
    major: int | None
    minor: int | None
    patch: int | None
    version: Version | None

    @classmethod
    def parse(cls, text: str) -> _Partial:
        match = _PARTIAL_PATTERN.match(text)
        if not match:
            raise InvalidRangeError(f"Invalid version in range: {text!r}")

        major, minor, patch = (_xr(match.group(name)) for name in ("major", "minor", "patch"))
        version = None
        if major is not None and minor is not None and patch is not None:
            try:
                parsed = Version.parse(text.lstrip("v= \t"))
            except InvalidVersionError as e:
                raise InvalidRangeError(f"Invalid version in range: {text!r}") from e
            # Build metadata never takes part in comparisons
            version = Version(parsed.major, parsed.minor, parsed.patch, parsed.prerelease)
        return cls(major, minor, patch, version)

    @property
    def prerelease(self) -> tuple[int | str, ...]:
        return self.version.prerelease if self.version else ()


def _xr(text: str | None) -> int | None:
    if text is None or text.lower() in ("x", "*"):
        return None
    return int(text)


def _major_line(major: int) -> list[Comparator]:
    return [Comparator(">=", Version(major, 0, 0)), Comparator("<", Version(major + 1, 0, 0, (0,)))]


def _minor_line(major: int, minor: int) -> list[Comparator]:
    upper = Version(major, minor + 1, 0, (0,))
    return [Comparator(">=", Version(major, minor, 0)), Comparator("<", upper)]


def _x_range(op: str, partial: _Partial) -> list[Comparator]:
    major, minor, patch = partial.major, partial.minor, partial.patch
    if op == "=":
        op = ""

    if major is None:
        return [_NOTHING] if op in ("<", ">") else []

    if partial.version is not None:
        return [Comparator(op, partial.version)]

    minor_is_x = minor is None
    if op:
        minor = minor or 0
        patch = 0
        if op == ">":
            op = ">="
            if minor_is_x:
                major, minor = major + 1, 0
            else:
                minor += 1
        elif op == "<=":
            op = "<"
            if minor_is_x:
                major += 1
            else:
                minor += 1
        prerelease: tuple[int | str, ...] = (0,) if op == "<" else ()
        return [Comparator(op, Version(major, minor, patch, prerelease))]

    if minor is None:
        return _major_line(major)
    return _minor_line(major, minor)


def _tilde(partial: _Partial) -> list[Comparator]:
    major, minor = partial.major, partial.minor
    if major is None:
        return []
    if minor is None:
        return _major_line(major)
    lower = partial.version or Version(major, minor, 0)
    return [Comparator(">=", lower), Comparator("<", Version(major, minor + 1, 0, (0,)))]


def _caret(partial: _Partial) -> list[Comparator]:
    major, minor, patch = partial.major, partial.minor, partial.patch
    if major is None:
        return []
    if minor is None:
        return _major_line(major)
    if patch is None:
        upper = Version(major, minor + 1, 0, (0,)) if major == 0 else Version(major + 1, 0, 0, (0,))
        return [Comparator(">=", Version(major, minor, 0)), Comparator("<", upper)]

    lower = partial.version or Version(major, minor, patch)
    if major == 0 and minor == 0:
        upper = Version(0, 0, patch + 1, (0,))
    elif major == 0:
        upper = Version(0, minor + 1, 0, (0,))
    else:
        upper = Version(major + 1, 0, 0, (0,))
    return [Comparator(">=", lower), Comparator("<", upper)]


def _hyphen(start: _Partial, end: _Partial) -> list[Comparator]:
    comparators: list[Comparator] = []

    if start.major is not None:
        lower = start.version or Version(start.major, start.minor or 0, 0)
        comparators.append(Comparator(">=", lower))

    if end.major is not None:
        if end.minor is None:
            comparators.append(Comparator("<", Version(end.major + 1, 0, 0, (0,))))
        elif end.patch is None:
            comparators.append(Comparator("<", Version(end.major, end.minor + 1, 0, (0,))))
        else:
            upper = end.version or Version(end.major, end.minor, end.patch)
            comparators.append(Comparator("<=", upper))

    return comparators


def _parse_comparator(token: str) -> list[Comparator]:
    match = _COMPARATOR_PATTERN.match(token)
    if not match:
        raise InvalidRangeError(f"Invalid comparator in range: {token!r}")

    op = match.group("op") or ""
    partial = _Partial.parse(match.group("partial"))
    if op.startswith("~"):
        return _tilde(partial)
    if op == "^":
        return _caret(partial)
    return _x_range(op, partial)


def _parse_set(text: str) -> tuple[Comparator, ...]:
    hyphen = _HYPHEN_PATTERN.match(text)
    if hyphen:
        return tuple(_hyphen(_Partial.parse(hyphen.group(1)), _Partial.parse(hyphen.group(2))))

    comparators: list[Comparator] = []
    for token in _OPERATOR_TRIM.sub(r"\1", text.strip()).split():
        comparators.extend(_parse_comparator(token))
    return tuple(comparators)


@dataclass(frozen=True)
class VersionRange:
    """A parsed version range.

    A version satisfies the range when it satisfies every comparator of at
    least one set. An empty set admits any (non-prerelease) version.
    """

    comparator_sets: tuple[tuple[Comparator, ...], ...]

    @classmethod
    def parse(cls, text: str) -> VersionRange:
        """Parse a range expression.

        Args:
            text: Range such as ``1.x``, ``~1.2.3`` or ``>=1.0.0 <2.0.0 || 3.x``

        Returns:
            The parsed range

        Raises:
            InvalidRangeError: If the expression is not a valid range
        """
        if not isinstance(text, str):
            raise InvalidRangeError(f"Invalid range: {text!r}")

        sets = [_parse_set(part) for part in re.split(r"\s*\|\|\s*", text.strip())]

        if any(not comparators for comparators in sets):
            return cls(((),))

        possible = [comparators for comparators in sets if comparators != (_NOTHING,)]
        return cls(tuple(possible or sets[:1]))

    def satisfies(self, version: Version) -> bool:
        """Whether a version is within the range.

        A prerelease version only matches a set that names a prerelease of the
        same ``major.minor.patch``.
        """
        return any(self._test_set(comparators, version) for comparators in self.comparator_sets)

    @staticmethod
    def _test_set(comparators: tuple[Comparator, ...], version: Version) -> bool:
        if not all(comparator.test(version) for comparator in comparators):
            return False
        if not version.is_prerelease:
            return True
        return any(
            comparator.version.is_prerelease and comparator.version.core == version.core
            for comparator in comparators
        )

    def min_version(self) -> Version | None:
        """Lowest version admitted by the range, or None if it admits nothing."""
        for candidate in (Version(0, 0, 0), Version(0, 0, 0, (0,))):
            if self.satisfies(candidate):
                return candidate

        lowest: Version | None = None
        for comparators in self.comparator_sets:
            set_lowest: Version | None = None
            for comparator in comparators:
                if comparator.operator not in ("", ">", ">="):
                    continue
                bound = comparator.version
                if comparator.operator == ">":
                    if bound.is_prerelease:
                        bound = Version(*bound.core, (*bound.prerelease, 0))
                    else:
                        bound = Version(bound.major, bound.minor, bound.patch + 1)
                if set_lowest is None or bound > set_lowest:
                    set_lowest = bound
            if set_lowest is not None and (lowest is None or set_lowest < lowest):
                lowest = set_lowest

        if lowest is not None and self.satisfies(lowest):
            return lowest
        return None

    def upper_bound(self) -> Version | None:
        """Highest upper bound over all sets, or None if some set is unbounded."""
        highest: Version | None = None
        for comparators in self.comparator_sets:
            uppers = [c.version for c in comparators if c.operator in ("", "<", "<=")]
            if not uppers:
                return None
            tightest = min(uppers)
            if highest is None or tightest > highest:
                highest = tightest
        return highest

    def __str__(self) -> str:
        return "||".join(
            " ".join(str(comparator) for comparator in comparators) or "*"
            for comparators in self.comparator_sets
        )


def valid_range(value: Any) -> str | None:
    """Canonical form of a range expression, or None if it is not one.

    Args:
        value: Anything; only strings can be ranges

    Returns:
        The canonical range string (``1.x`` gives ``>=1.0.0 <2.0.0-0``)
    """
    try:
        return str(VersionRange.parse(value))
    except InvalidRangeError:
        return None
