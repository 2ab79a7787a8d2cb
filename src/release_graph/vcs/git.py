"""Git repository operations.

Wraps the ``git`` command line. Synchronous queries go through
``subprocess.run``; reference name checks are coroutines so that the
branch graph can check every branch concurrently.
"""

from __future__ import annotations

import asyncio
import subprocess
from pathlib import Path

from release_graph.exceptions import GitError
from release_graph.logging import get_logger

logger = get_logger(__name__)


class GitRepository:
    """A local git working tree.

    Args:
        path: Any directory inside the working tree; defaults to the
            current directory

    Raises:
        GitError: If ``path`` is not a directory inside a git working tree
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = (path or Path.cwd()).resolve()
        if not self.path.is_dir():
            raise GitError(f"Not a directory: {self.path}")
        self.path = Path(self._run("rev-parse", "--show-toplevel"))

    def _run(self, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git not found. Install git and make sure it is on PATH") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    async def is_valid_ref_name(self, ref: str) -> bool:
        """Whether ``ref`` is a legal full reference name (``git check-ref-format``)."""
        try:
            process = await asyncio.create_subprocess_exec(
                "git",
                "check-ref-format",
                ref,
                cwd=self.path,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except FileNotFoundError as e:
            raise GitError("git not found. Install git and make sure it is on PATH") from e

        valid = await process.wait() == 0
        logger.debug("git check-ref-format %s: %s", ref, "valid" if valid else "invalid")
        return valid

    async def verify_branch_name(self, name: str) -> bool:
        """Whether ``name`` is a legal branch name."""
        return await self.is_valid_ref_name(f"refs/heads/{name}")

    async def verify_tag_name(self, name: str) -> bool:
        """Whether ``name`` is a legal tag name."""
        return await self.is_valid_ref_name(f"refs/tags/{name}")

    def get_tags(self, branch: str) -> list[str]:
        """Names of the tags reachable from ``branch``.

        Raises:
            GitError: If the branch does not exist
        """
        output = self._run("tag", "--merged", branch)
        return output.splitlines() if output else []

    def get_tag_head(self, tag: str) -> str:
        """SHA of the commit a tag points at."""
        return self._run("rev-list", "-1", tag)
