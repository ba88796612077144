"""First-parent ancestry walk, the equivalent of `git rev-list --first-parent`."""

import logging
from typing import Iterator, Optional

from .errors import GraphAccessError
from .graph import ObjectGraphAccess
from .models import CommitId

log = logging.getLogger(__name__)


def walk_first_parent(
    graph: ObjectGraphAccess,
    start: CommitId,
    max_depth: Optional[int] = None,
) -> Iterator[CommitId]:
    """Yield start, its first parent, that commit's first parent, and so on.

    The walk is lazy: parents are only read when the caller asks for the
    next element, so a consumer that stops early never touches older
    history. It ends after yielding a root commit, or after yielding the
    commit at max_depth when a limit is given.

    Args:
        graph: Object graph to read parents from.
        start: Commit to start at (depth 0).
        max_depth: Deepest depth to yield, or None for no limit.

    Yields:
        Commit ids in order of increasing depth.

    Raises:
        GraphAccessError: If a commit cannot be read, or the first-parent
            chain revisits a commit.
    """
    seen: set[CommitId] = set()
    current = start
    depth = 0

    while True:
        if current in seen:
            raise GraphAccessError(
                f"First-parent chain revisits {current} at depth {depth}",
                object_id=current,
            )
        seen.add(current)
        yield current

        if max_depth is not None and depth >= max_depth:
            log.debug(f"Stopping first-parent walk at max depth {max_depth}")
            return

        parents = graph.parents_of(current)
        if not parents:
            log.debug(f"Reached root commit {current} at depth {depth}")
            return

        current = parents[0]
        depth += 1
