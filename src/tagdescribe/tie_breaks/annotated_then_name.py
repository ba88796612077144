"""Default tie-break: annotated tags first, then the greatest name."""

from ..models import TagRef
from .base import TagTieBreak, _by_name_descending


class AnnotatedThenNameTieBreak(TagTieBreak):
    """Annotated tags outrank lightweight ones; within a kind the
    lexicographically greatest name wins (v1.10 beats v1.1, rc2 beats rc1).
    """

    @property
    def name(self) -> str:
        return "annotated-then-name"

    def compare(self, a: TagRef, b: TagRef) -> int:
        if a.annotated != b.annotated:
            return -1 if a.annotated else 1
        return _by_name_descending(a, b)
