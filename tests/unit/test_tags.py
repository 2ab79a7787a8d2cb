"""Tests for tag names and whole-configuration verification."""

from __future__ import annotations

import asyncio

import pytest

from release_graph.config.models import ReleaseGraphConfig
from release_graph.core.tags import make_tag, parse_tag, tag_pattern, verify_tag_format
from release_graph.core.verify import verify_config
from release_graph.exceptions import AggregateBranchError


class TestMakeTag:
    """Tests for make_tag()."""

    def test_default_format(self):
        """The version replaces the placeholder."""
        assert make_tag("v${version}", "1.2.3") == "v1.2.3"

    def test_channel(self):
        """A channel is appended after ``@``."""
        assert make_tag("v${version}", "1.2.3", "next") == "v1.2.3@next"

    def test_custom_format(self):
        """Prefix and suffix are kept."""
        assert make_tag("release-${version}-final", "2.0.0") == "release-2.0.0-final"


class TestParseTag:
    """Tests for tag_pattern() and parse_tag()."""

    def test_plain(self):
        """The version is extracted from a tag."""
        assert parse_tag("v${version}", "v1.0.0") == ("1.0.0", None)

    def test_with_channel(self):
        """The channel is split off the version."""
        assert parse_tag("v${version}", "v2.0.0-beta.1@beta") == ("2.0.0-beta.1", "beta")

    @pytest.mark.parametrize("name", ["1.0.0", "vfoo", "v1.0", "release-1.0.0", "v"])
    def test_not_matching(self, name: str):
        """Tags of another format or without a valid version are ignored."""
        assert parse_tag("v${version}", name) is None

    def test_special_characters_escaped(self):
        """Regex metacharacters in the format are literal."""
        pattern = tag_pattern("pkg.v${version}")

        assert pattern.match("pkg.v1.0.0")
        assert not pattern.match("pkgxv1.0.0")


class TestVerifyTagFormat:
    """Tests for verify_tag_format()."""

    def test_valid(self, ref_check):
        """The default format is valid."""
        assert asyncio.run(verify_tag_format("v${version}", ref_check)) == []

    def test_invalid_reference(self, ref_check):
        """A format rendering an illegal tag name fails."""
        errors = asyncio.run(verify_tag_format("?${version}", ref_check))

        assert [error.code for error in errors] == ["EINVALIDTAGFORMAT"]

    @pytest.mark.parametrize("tag_format", ["test", "${version}v${version}"])
    def test_placeholder_count(self, ref_check, tag_format: str):
        """The placeholder must appear exactly once."""
        errors = asyncio.run(verify_tag_format(tag_format, ref_check))

        assert [error.code for error in errors] == ["ETAGNOVERSION"]

    def test_both_errors(self, ref_check):
        """Both errors are reported, reference check first."""
        errors = asyncio.run(verify_tag_format("?version", ref_check))

        assert [error.code for error in errors] == ["EINVALIDTAGFORMAT", "ETAGNOVERSION"]

    def test_not_a_string(self, ref_check):
        """A missing format cannot contain the placeholder."""
        errors = asyncio.run(verify_tag_format(None, ref_check))

        assert [error.code for error in errors] == ["ETAGNOVERSION"]


class TestVerifyConfig:
    """Tests for verify_config()."""

    def test_valid(self, ref_check):
        """A valid configuration returns its branches."""
        config = ReleaseGraphConfig(branches=[{"name": "main"}], tag_format="v${version}")

        branches = asyncio.run(
            verify_config(config, is_valid_branch_name=ref_check, is_valid_tag_name=ref_check)
        )

        assert [branch.name for branch in branches] == ["main"]

    def test_default_configuration(self, ref_check):
        """The default branches and tag format are valid."""
        branches = asyncio.run(
            verify_config(
                ReleaseGraphConfig(), is_valid_branch_name=ref_check, is_valid_tag_name=ref_check
            )
        )

        assert [branch.name for branch in branches] == ["main", "next", "beta", "alpha"]

    def test_tag_errors_before_branch_errors(self, ref_check):
        """Tag format errors come first, then every branch error."""
        config = ReleaseGraphConfig(
            branches=[{"name": "master"}, {"name": ""}, {"name": "master"}, {"name": "~invalid"}],
            tag_format="?version",
        )

        with pytest.raises(AggregateBranchError) as exc_info:
            asyncio.run(
                verify_config(config, is_valid_branch_name=ref_check, is_valid_tag_name=ref_check)
            )

        assert exc_info.value.codes == [
            "EINVALIDTAGFORMAT",
            "ETAGNOVERSION",
            "EINVALIDBRANCH",
            "EDUPLICATEBRANCHES",
            "EINVALIDBRANCHNAME",
        ]

    def test_tag_errors_only(self, ref_check):
        """Tag format errors are raised even when branches are valid."""
        config = ReleaseGraphConfig(branches=[{"name": "main"}], tag_format="test")

        with pytest.raises(AggregateBranchError) as exc_info:
            asyncio.run(
                verify_config(config, is_valid_branch_name=ref_check, is_valid_tag_name=ref_check)
            )

        assert exc_info.value.codes == ["ETAGNOVERSION"]
