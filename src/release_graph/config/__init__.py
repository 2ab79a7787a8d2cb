"""Configuration management for release-graph."""

from __future__ import annotations

from release_graph.config.loader import load_config
from release_graph.config.models import ReleaseGraphConfig

__all__ = [
    "ReleaseGraphConfig",
    "load_config",
]
