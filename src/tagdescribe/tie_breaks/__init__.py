"""Pluggable policies for choosing among several tags on one commit.

Example usage:
    from tagdescribe.tie_breaks import create_tie_break

    tie_break = create_tie_break("tagger-date")
    winner = tie_break.pick(tag_a, tag_b)
"""

from .base import TagTieBreak
from .annotated_then_name import AnnotatedThenNameTieBreak
from .tagger_date import TaggerDateTieBreak
from .registry import DEFAULT_TIE_BREAK, TIE_BREAK_REGISTRY, create_tie_break

__all__ = [
    "TagTieBreak",
    "AnnotatedThenNameTieBreak",
    "TaggerDateTieBreak",
    "DEFAULT_TIE_BREAK",
    "TIE_BREAK_REGISTRY",
    "create_tie_break",
]
