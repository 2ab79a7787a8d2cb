"""Tests for version range expressions."""

from __future__ import annotations

import pytest

from release_graph.core.ranges import VersionRange, is_maintenance_range, valid_range
from release_graph.core.version import Version
from release_graph.exceptions import InvalidRangeError


class TestValidRange:
    """Tests for valid_range()."""

    @pytest.mark.parametrize(
        ("expression", "canonical"),
        [
            ("1.x", ">=1.0.0 <2.0.0-0"),
            ("1.x.x", ">=1.0.0 <2.0.0-0"),
            ("1.X", ">=1.0.0 <2.0.0-0"),
            ("1", ">=1.0.0 <2.0.0-0"),
            ("1.2.x", ">=1.2.0 <1.3.0-0"),
            ("1.0.0", "1.0.0"),
            ("=1.0.0", "1.0.0"),
            ("v1.0.0", "1.0.0"),
            ("", "*"),
            ("*", "*"),
            ("x", "*"),
            ("^1.2.3", ">=1.2.3 <2.0.0-0"),
            ("^0.2.3", ">=0.2.3 <0.3.0-0"),
            ("^0.0.3", ">=0.0.3 <0.0.4-0"),
            ("~1.2.3", ">=1.2.3 <1.3.0-0"),
            ("~1.2", ">=1.2.0 <1.3.0-0"),
            (">=1.0.0 <2.0.0", ">=1.0.0 <2.0.0"),
            (">= 1.0.0", ">=1.0.0"),
            (">1.2", ">=1.3.0"),
            ("<=1.2", "<1.3.0-0"),
            ("1.2.3 - 2.3.4", ">=1.2.3 <=2.3.4"),
            ("1.2 - 2", ">=1.2.0 <3.0.0-0"),
            ("1.x || 3.x", ">=1.0.0 <2.0.0-0||>=3.0.0 <4.0.0-0"),
        ],
    )
    def test_canonical_form(self, expression: str, canonical: str):
        """Range expressions are desugared to primitive comparators."""
        assert valid_range(expression) == canonical

    @pytest.mark.parametrize(
        "name", ["master", "main", "next", "beta", "test:", "feature/1.x", "1.2.3.4"]
    )
    def test_branch_names_are_not_ranges(self, name: str):
        """Ordinary branch names are not ranges."""
        assert valid_range(name) is None

    @pytest.mark.parametrize("expression", ["١.x", "1١.0.0", ">=1.0.٢", "^١"])
    def test_non_ascii_digits(self, expression: str):
        """Only ASCII digits are version numbers."""
        assert valid_range(expression) is None

    def test_non_string(self):
        """Non-string input is not a range."""
        assert valid_range(None) is None
        assert valid_range(1) is None

    def test_parse_invalid_raises(self):
        """VersionRange.parse() raises on invalid input."""
        with pytest.raises(InvalidRangeError):
            VersionRange.parse("wrong-range")

    def test_equivalent_spellings_are_equal(self):
        """Parsed ranges compare by meaning, not spelling."""
        assert VersionRange.parse("1.x") == VersionRange.parse("1.x.x")
        assert VersionRange.parse("1.x") != VersionRange.parse("1.0.x")


class TestSatisfies:
    """Tests for VersionRange.satisfies()."""

    def test_x_range(self):
        """An x-range admits its major line only."""
        version_range = VersionRange.parse("1.x")

        assert version_range.satisfies(Version.parse("1.0.0"))
        assert version_range.satisfies(Version.parse("1.99.3"))
        assert not version_range.satisfies(Version.parse("2.0.0"))
        assert not version_range.satisfies(Version.parse("0.9.0"))

    def test_prerelease_excluded_by_default(self):
        """Prereleases only match a set naming a prerelease of the same version."""
        assert not VersionRange.parse("1.x").satisfies(Version.parse("1.5.0-beta.1"))

        version_range = VersionRange.parse(">=1.5.0-beta.0 <2.0.0")
        assert version_range.satisfies(Version.parse("1.5.0-beta.1"))
        assert not version_range.satisfies(Version.parse("1.6.0-beta.1"))

    def test_any(self):
        """'*' admits every stable version."""
        assert VersionRange.parse("*").satisfies(Version.parse("42.0.0"))

    def test_alternatives(self):
        """Any alternative of a || range may match."""
        version_range = VersionRange.parse("1.x || 3.x")

        assert version_range.satisfies(Version.parse("3.1.0"))
        assert not version_range.satisfies(Version.parse("2.1.0"))


class TestBounds:
    """Tests for min_version() and upper_bound()."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("1.x", "1.0.0"),
            ("1.2.x", "1.2.0"),
            (">1.2.3", "1.2.4"),
            ("*", "0.0.0"),
            ("1.x || 3.x", "1.0.0"),
        ],
    )
    def test_min_version(self, expression: str, expected: str):
        """min_version() returns the lowest admitted version."""
        assert VersionRange.parse(expression).min_version() == Version.parse(expected)

    def test_upper_bound(self):
        """upper_bound() returns the exclusive limit of a bounded range."""
        assert VersionRange.parse("1.2.x").upper_bound() == Version(1, 3, 0, (0,))
        assert VersionRange.parse(">=1.0.0").upper_bound() is None


class TestIsMaintenanceRange:
    """Tests for is_maintenance_range()."""

    @pytest.mark.parametrize("value", ["1.x", "1.X", "1.x.x", "1.0.x", "2.5.x"])
    def test_matches(self, value: str):
        """N.x, N.N.x and N.x.x are maintenance ranges."""
        assert is_maintenance_range(value)

    @pytest.mark.parametrize(
        "value", ["1.0.0", "x.x.x", "10.x", "1.x.0", "1.x\n", "master", "", None, 1]
    )
    def test_does_not_match(self, value: object):
        """Anything else is not."""
        assert not is_maintenance_range(value)
