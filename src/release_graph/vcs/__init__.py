"""Version control integration."""

from __future__ import annotations

from release_graph.vcs.git import GitRepository
from release_graph.vcs.tags import attach_tags, get_branch_tags

__all__ = [
    "GitRepository",
    "attach_tags",
    "get_branch_tags",
]
