"""Command line interface for release-graph."""
