"""Core business logic for release-graph.

This module contains the fundamental building blocks:
- Semantic version and version range parsing
- Branch classification, normalization and validation
- Last release resolution from branch tags
- Tag name formatting
"""

from __future__ import annotations

from release_graph.core.branches import build_branch_graph, get_branches, verify_branches
from release_graph.core.definitions import DEFINITIONS, CategoryDefinition
from release_graph.core.last_release import get_last_release
from release_graph.core.models import BranchCategory, LastRelease, NormalizedBranch, ReleaseTag
from release_graph.core.ranges import VersionRange, is_maintenance_range, valid_range
from release_graph.core.tags import make_tag, parse_tag, verify_tag_format
from release_graph.core.verify import verify_config
from release_graph.core.version import Version, parse_version

__all__ = [
    # Branches
    "DEFINITIONS",
    "BranchCategory",
    "CategoryDefinition",
    # Releases
    "LastRelease",
    "NormalizedBranch",
    "ReleaseTag",
    # Versions
    "Version",
    "VersionRange",
    "build_branch_graph",
    "get_branches",
    "get_last_release",
    "is_maintenance_range",
    # Tags
    "make_tag",
    "parse_tag",
    "parse_version",
    "valid_range",
    "verify_branches",
    "verify_config",
    "verify_tag_format",
]
