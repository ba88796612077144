"""Data types shared by the describe pipeline.

All of these are created fresh for a single describe call and discarded
afterwards; nothing here is cached across calls.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

# Full 40-character hex object name.
CommitId = str


class ReleaseMode(StrEnum):
    """Changes the exact-match formatting rule at depth 0.

    In RELEASE_BRANCH mode a tag ending in ".0" sitting on HEAD is still
    rendered in long form, so that the first release of a branch is
    distinguishable from the branch point it was cut from.
    """

    PLAIN = "plain"
    RELEASE_BRANCH = "release-branch"


@dataclass(frozen=True)
class TagCandidate:
    """A raw entry from refs/tags before any peeling.

    Attributes:
        name: Tag name without the refs/tags/ prefix (e.g. "v1.2.0").
        target: Hexsha the ref points at (a commit or a tag object).
        target_type: Object type of target ("commit", "tag", "tree", "blob").
    """

    name: str
    target: str
    target_type: str


@dataclass(frozen=True)
class TagRef:
    """A tag resolved to the object it ultimately points at.

    Attributes:
        name: Tag name without the refs/tags/ prefix.
        target: Hexsha of the peeled target, normally a commit.
        annotated: True if the ref points at a tag object.
        tagged_date: Tagger timestamp for annotated tags, when it was loaded.
    """

    name: str
    target: CommitId
    annotated: bool
    tagged_date: Optional[int] = None


TagIndex = dict[CommitId, TagRef]


@dataclass(frozen=True)
class Ok:
    """A version string was determined.

    Attributes:
        value: The formatted version string.
        head: Full hexsha of HEAD.
        tag: Name of the tag the description is based on, or None for the
            hash-only fallback.
        depth: First-parent distance from HEAD to the tag, or None for the
            hash-only fallback.
    """

    value: str
    head: CommitId
    tag: Optional[str] = None
    depth: Optional[int] = None

    @property
    def ok(self) -> bool:
        return True

    @property
    def exact(self) -> bool:
        return self.depth == 0

    def value_or_none(self) -> Optional[str]:
        return self.value

    def to_dict(self) -> dict:
        return {
            "version": self.value,
            "head": self.head,
            "tag": self.tag,
            "depth": self.depth,
            "exact": self.exact,
        }


@dataclass(frozen=True)
class Absent:
    """No version could be determined.

    Attributes:
        reason: Human readable description of what went wrong.
    """

    reason: str = ""

    @property
    def ok(self) -> bool:
        return False

    def value_or_none(self) -> Optional[str]:
        return None

    def to_dict(self) -> dict:
        return {
            "version": None,
            "reason": self.reason,
        }


DescribeResult = Ok | Absent
