"""Tie-break registry and factory.

Maps the names accepted in configuration and on the command line to
TagTieBreak implementations.
"""

from .annotated_then_name import AnnotatedThenNameTieBreak
from .base import TagTieBreak
from .tagger_date import TaggerDateTieBreak

DEFAULT_TIE_BREAK = "annotated-then-name"

TIE_BREAK_REGISTRY: dict[str, type[TagTieBreak]] = {
    "annotated-then-name": AnnotatedThenNameTieBreak,
    "tagger-date": TaggerDateTieBreak,
}


def create_tie_break(name: str = DEFAULT_TIE_BREAK) -> TagTieBreak:
    """Create a tie-break policy by name.

    Args:
        name: Registered policy name (e.g., "annotated-then-name").

    Returns:
        TagTieBreak instance.

    Raises:
        ValueError: If name is not a registered policy.
    """
    if name not in TIE_BREAK_REGISTRY:
        known = ", ".join(sorted(TIE_BREAK_REGISTRY))
        raise ValueError(f"Unknown tie-break '{name}' (expected one of: {known})")
    return TIE_BREAK_REGISTRY[name]()
