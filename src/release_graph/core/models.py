"""Value types shared by the branch graph and the last-release resolver."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import StrEnum


class BranchCategory(StrEnum):
    """Release channel a configured branch belongs to."""

    MAINTENANCE = "maintenance"
    RELEASE = "release"
    PRERELEASE = "prerelease"


@dataclass(frozen=True)
class ReleaseTag:
    """A version previously released from a branch.

    Attributes:
        version: Semantic version string (e.g. ``1.2.0``)
        git_tag: Tag name (e.g. ``v1.2.0`` or ``v1.2.0@next``)
        git_head: Commit the tag points at
        channel: Distribution channel the version was released on
    """

    version: str
    git_tag: str
    git_head: str | None = None
    channel: str | None = None


@dataclass(frozen=True)
class NormalizedBranch:
    """A validated branch with its derived fields.

    Attributes:
        name: Branch name
        type: Category of the branch
        range: Version range of a maintenance branch
        prerelease: Prerelease identifier of a prerelease branch
        channel: Distribution channel, as configured
        tags: Releases found on the branch
    """

    name: str
    type: BranchCategory
    range: str | None = None
    prerelease: str | None = None
    channel: str | None = None
    tags: tuple[ReleaseTag, ...] = ()

    def with_tags(self, tags: Iterable[ReleaseTag]) -> NormalizedBranch:
        """Return a copy of the branch carrying ``tags``."""
        return replace(self, tags=tuple(tags))


@dataclass(frozen=True)
class LastRelease:
    """The highest release found on a branch.

    Every field is None when the branch has no qualifying release, in which
    case the instance is falsy.
    """

    version: str | None = None
    git_tag: str | None = None
    git_head: str | None = None
    channel: str | None = None

    def __bool__(self) -> bool:
        return self.git_tag is not None

    @classmethod
    def from_tag(cls, tag: ReleaseTag) -> LastRelease:
        return cls(
            version=tag.version,
            git_tag=tag.git_tag,
            git_head=tag.git_head,
            channel=tag.channel,
        )
