"""Shared fixtures for release-graph tests."""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

# Characters and sequences git never accepts in a reference name
_ILLEGAL_REF_PARTS = (" ", "~", "^", ":", "?", "*", "[", "\\", "..", "@{")

_GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@test.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@test.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


async def fake_ref_check(name: str) -> bool:
    """Async stand-in for ``git check-ref-format``."""
    return not any(part in name for part in _ILLEGAL_REF_PARTS)


@pytest.fixture
def ref_check():
    """Async reference name check that needs no git binary."""
    return fake_ref_check


def run_git(path: Path, *args: str) -> str:
    """Run a git command in ``path`` with a fixed identity."""
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=path,
        capture_output=True,
        text=True,
        check=True,
        env={**os.environ, **_GIT_ENV},
    )
    return result.stdout.strip()


def commit(path: Path, message: str) -> str:
    """Create an empty commit and return its SHA."""
    run_git(path, "commit", "--allow-empty", "-q", "-m", message)
    return run_git(path, "rev-parse", "HEAD")


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """Git repository on branch ``main`` with one commit."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    run_git(tmp_path, "init", "-q")
    run_git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    commit(tmp_path, "chore: initial commit")
    return tmp_path


@pytest.fixture
def temp_git_repo_with_pyproject(temp_git_repo: Path) -> Path:
    """Git repository with a pyproject.toml configuring release-graph."""
    (temp_git_repo / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.release-graph]
tag_format = "v${version}"
branches = [
    { name = "1.x" },
    { name = "main" },
    { name = "next", channel = "next" },
    { name = "beta", prerelease = true },
]
"""
    )
    run_git(temp_git_repo, "add", "pyproject.toml")
    commit(temp_git_repo, "chore: add pyproject.toml")
    return temp_git_repo


@pytest.fixture
def git():
    """``run_git`` for tests that shape their own history."""
    return run_git


@pytest.fixture
def git_commit():
    """``commit`` for tests that shape their own history."""
    return commit
