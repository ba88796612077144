"""Base class for tag tie-break policies."""

from abc import ABC, abstractmethod
from functools import cmp_to_key

from ..models import TagRef


def _by_name_descending(a: TagRef, b: TagRef) -> int:
    if a.name == b.name:
        return 0
    return -1 if a.name > b.name else 1


class TagTieBreak(ABC):
    """Chooses one tag when several tags resolve to the same commit.

    Implementations must define a strict total order over distinct tags:
    compare() may only return 0 for two tags with the same name, since tag
    names are unique within refs/tags. This makes the winner independent of
    the order in which references are enumerated.

    To add a new policy:
    1. Create a new module in this package with a TagTieBreak subclass
    2. Register it in registry.py
    """

    # Set when compare() reads TagRef.tagged_date, so the index builder knows
    # to load tagger dates for annotated tags.
    needs_tagger_date: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the policy name used in configuration."""
        pass

    @abstractmethod
    def compare(self, a: TagRef, b: TagRef) -> int:
        """Compare two tags targeting the same commit.

        Returns:
            A negative number if a should win over b, a positive number if b
            should win, 0 only if both are the same tag.
        """
        pass

    def pick(self, a: TagRef, b: TagRef) -> TagRef:
        """Return the winner of a and b."""
        return a if self.compare(a, b) < 0 else b

    def sort(self, tags: list[TagRef]) -> list[TagRef]:
        """Return tags ordered best first."""
        return sorted(tags, key=cmp_to_key(self.compare))
