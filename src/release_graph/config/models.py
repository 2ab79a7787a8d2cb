"""Configuration models.

Configuration lives in the ``[tool.release-graph]`` table of
``pyproject.toml``:

    [tool.release-graph]
    tag_format = "v${version}"
    branches = [
        { name = "1.x" },
        { name = "main" },
        { name = "next", channel = "next" },
        { name = "beta", prerelease = true },
    ]

Branch entries are kept as written. They are validated by the branch graph,
which reports every malformed entry at once instead of stopping at the first.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from release_graph.core.tags import DEFAULT_TAG_FORMAT


def _default_branches() -> list[Any]:
    return [
        {"name": "main"},
        {"name": "next"},
        {"name": "beta", "prerelease": True},
        {"name": "alpha", "prerelease": True},
    ]


class ReleaseGraphConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    branches: list[Any] = Field(
        default_factory=_default_branches,
        description="Branches releases are made from",
    )
    tag_format: str = Field(
        default=DEFAULT_TAG_FORMAT,
        description="Git tag template, must contain ${version} once",
    )
