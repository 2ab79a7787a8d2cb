"""release-graph: branch graph validation and last release resolution.

Validates that the configured release branches form a consistent release
graph (maintenance, release and prerelease channels) and finds the last
version released on each branch from its git tags.
"""

from __future__ import annotations

__version__ = "0.1.0"
