"""Index tag references by the commit they ultimately point at.

Mimics `git show-ref --tags -d`: annotated tags are peeled to their target,
and when several tags land on the same commit a tie-break policy decides
which one `git describe --tags --exact-match <commit>` would report.
"""

import logging
from typing import Optional

from .graph import ObjectGraphAccess
from .models import TagCandidate, TagIndex, TagRef
from .tie_breaks import TagTieBreak, create_tie_break

log = logging.getLogger(__name__)


class TagIndexBuilder:
    """Builds a TagIndex from all tag references of a repository.

    Args:
        graph: Object graph to enumerate and peel tags with.
        tie_break: Policy for tags sharing a commit. Defaults to
            annotated-then-name.
    """

    def __init__(self, graph: ObjectGraphAccess, tie_break: Optional[TagTieBreak] = None):
        self.graph = graph
        self.tie_break = tie_break or create_tie_break()

    def resolve(self, candidate: TagCandidate) -> TagRef:
        """Peel a raw tag reference to the object it ultimately targets."""
        if candidate.target_type == "commit":
            return TagRef(name=candidate.name, target=candidate.target, annotated=False)

        peeled = self.graph.peel_annotated_tag(candidate.target)
        if peeled is None:
            # Lightweight tag on a tree or blob; it can never match a commit.
            return TagRef(name=candidate.name, target=candidate.target, annotated=False)

        tagged_date = None
        if self.tie_break.needs_tagger_date:
            tagged_date = self.graph.tagger_date(candidate.target)
        return TagRef(
            name=candidate.name,
            target=peeled,
            annotated=True,
            tagged_date=tagged_date,
        )

    def build(self) -> TagIndex:
        """Return a mapping from commit id to the winning tag on that commit."""
        index: TagIndex = {}
        collisions = 0

        for candidate in self.graph.list_tag_references():
            tag = self.resolve(candidate)
            current = index.get(tag.target)
            if current is None:
                index[tag.target] = tag
                continue

            collisions += 1
            if self.tie_break.compare(tag, current) < 0:
                index[tag.target] = tag

        log.debug(
            f"Indexed {len(index)} tagged objects "
            f"({collisions} collisions resolved by {self.tie_break.name})"
        )
        return index


def build_tag_index(
    graph: ObjectGraphAccess, tie_break: Optional[TagTieBreak] = None
) -> TagIndex:
    return TagIndexBuilder(graph, tie_break).build()
