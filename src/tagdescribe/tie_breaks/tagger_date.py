"""Tie-break preferring the most recently created annotated tag."""

from ..models import TagRef
from .base import TagTieBreak, _by_name_descending


class TaggerDateTieBreak(TagTieBreak):
    """Annotated tags outrank lightweight ones. Among annotated tags the
    newest tagger date wins; equal dates and lightweight tags fall back to
    the greatest name.
    """

    needs_tagger_date = True

    @property
    def name(self) -> str:
        return "tagger-date"

    def compare(self, a: TagRef, b: TagRef) -> int:
        if a.annotated != b.annotated:
            return -1 if a.annotated else 1
        if a.annotated:
            a_date = a.tagged_date or 0
            b_date = b.tagged_date or 0
            if a_date != b_date:
                return -1 if a_date > b_date else 1
        return _by_name_descending(a, b)
