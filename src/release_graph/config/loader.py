"""Loading configuration from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_graph.config.models import ReleaseGraphConfig
from release_graph.exceptions import ConfigNotFoundError, ConfigValidationError
from release_graph.logging import get_logger

TOOL_NAME = "release-graph"

logger = get_logger(__name__)


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or its parents.

    Args:
        start: Directory (or file) to search from; defaults to the current directory

    Returns:
        Path to the closest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Configuration file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_graph_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the [tool.release-graph] table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> ReleaseGraphConfig:
    """Load the configuration of the project containing ``path``.

    Args:
        path: Project directory or pyproject.toml path; defaults to the
            current directory

    Returns:
        The configuration, with defaults when the table is absent

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the configuration is invalid
    """
    pyproject_path = path if path is not None and path.is_file() else find_pyproject_toml(path)
    raw = extract_release_graph_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded [tool.%s] from %s", TOOL_NAME, pyproject_path)

    try:
        return ReleaseGraphConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid [tool.{TOOL_NAME}] configuration in {pyproject_path}:\n{e}"
        ) from e
