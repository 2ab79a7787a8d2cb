"""Git tag names for releases.

Tags are rendered from a ``tag_format`` template holding exactly one
``${version}`` placeholder, e.g. ``v${version}``. A release made on a
channel is tagged ``<version>@<channel>``, so ``v1.0.0@next``.
"""

from __future__ import annotations

import re
from typing import Any

from release_graph.core.branches import RefNameCheck, check_ref_name
from release_graph.core.version import parse_version
from release_graph.exceptions import BranchValidationError, get_error

VERSION_PLACEHOLDER = "${version}"
DEFAULT_TAG_FORMAT = "v${version}"


def make_tag(tag_format: str, version: str, channel: str | None = None) -> str:
    """Render the tag name of a version.

    Args:
        tag_format: Template containing ``${version}``
        version: Version being tagged
        channel: Distribution channel, appended to the version after ``@``

    Returns:
        The tag name
    """
    value = f"{version}@{channel}" if channel else version
    return tag_format.replace(VERSION_PLACEHOLDER, value)


def tag_pattern(tag_format: str) -> re.Pattern[str]:
    """Regex matching tags of ``tag_format``; group 1 is the version part."""
    prefix, _, suffix = tag_format.partition(VERSION_PLACEHOLDER)
    return re.compile(rf"^{re.escape(prefix)}(.+){re.escape(suffix)}$")


def parse_tag(tag_format: str, tag: str) -> tuple[str, str | None] | None:
    """Extract the version and channel from a tag name.

    Returns:
        ``(version, channel)``, or None if the tag does not follow the format
        or its version is not a valid semantic version
    """
    match = tag_pattern(tag_format).match(tag)
    if not match:
        return None

    version, _, channel = match.group(1).partition("@")
    if parse_version(version) is None:
        return None
    return version, channel or None


async def verify_tag_format(
    tag_format: Any,
    is_valid_ref_name: RefNameCheck,
) -> list[BranchValidationError]:
    """Check that a tag format renders legal, versioned tag names.

    Args:
        tag_format: Configured tag format
        is_valid_ref_name: Returns (or resolves to) whether a name is a legal
            git tag name

    Returns:
        ``EINVALIDTAGFORMAT`` and/or ``ETAGNOVERSION`` errors
    """
    errors: list[BranchValidationError] = []

    if isinstance(tag_format, str):
        if not await check_ref_name(is_valid_ref_name, make_tag(tag_format, "0.0.0")):
            errors.append(get_error("EINVALIDTAGFORMAT", tag_format=tag_format))

    if not isinstance(tag_format, str) or tag_format.count(VERSION_PLACEHOLDER) != 1:
        errors.append(get_error("ETAGNOVERSION", tag_format=tag_format))

    return errors
