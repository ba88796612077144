"""First-parent, prefix-filtered `git describe --tags`.

The result is one of:
    - the tag name, when HEAD itself carries the nearest matching tag
    - "{tag}-{depth}-g{abbrev(HEAD)}", when the tag is depth commits back
    - abbrev(HEAD), when no matching tag is found

Only first-parent history is searched, and only the nearest tag is
considered: if its name does not start with the requested prefix the search
gives up rather than looking further back.
"""

import logging
from typing import Optional

from .ancestry import walk_first_parent
from .errors import DescribeError
from .graph import DEFAULT_ABBREV_LENGTH, ObjectGraphAccess, open_graph
from .models import Absent, CommitId, DescribeResult, Ok, ReleaseMode
from .tag_index import TagIndexBuilder
from .tie_breaks import TagTieBreak

log = logging.getLogger(__name__)

RELEASE_BRANCH_EXACT_SUFFIX = ".0"


def long_description(tag: str, depth: int, abbreviated_head: str) -> str:
    return f"{tag}-{depth}-g{abbreviated_head}"


class DescribeEngine:
    """Describes HEAD of a repository relative to its nearest tag.

    The engine holds no state between calls; every describe builds its own
    ancestry walk and tag index.

    Args:
        graph: Object graph of the repository to describe.
        release_mode: Formatting rule for exact matches on HEAD.
        tie_break: Policy for several tags on one commit.
        max_depth: Deepest first-parent distance to search, or None.
    """

    def __init__(
        self,
        graph: ObjectGraphAccess,
        release_mode: ReleaseMode = ReleaseMode.PLAIN,
        tie_break: Optional[TagTieBreak] = None,
        max_depth: Optional[int] = None,
    ):
        self.graph = graph
        self.release_mode = release_mode
        self.tie_break = tie_break
        self.max_depth = max_depth

    def describe(self, prefix: str) -> Optional[str]:
        """Return the version string for HEAD, or None if it can't be computed."""
        return self.describe_detailed(prefix).value_or_none()

    def describe_detailed(self, prefix: str) -> DescribeResult:
        """Describe HEAD, never raising.

        Args:
            prefix: Only a nearest tag whose name starts with prefix is used.

        Returns:
            Ok with the version string and how it was derived, or Absent if
            the repository could not be read.
        """
        try:
            return self._describe(prefix)
        except DescribeError as e:
            log.debug(f"Describe failed: {e}")
            return Absent(reason=str(e))
        except Exception as e:
            log.debug("Describe failed with unexpected error", exc_info=True)
            return Absent(reason=f"{type(e).__name__}: {e}")

    def _describe(self, prefix: str) -> Ok:
        head = self.graph.resolve_head()
        index = TagIndexBuilder(self.graph, self.tie_break).build()

        for depth, commit_id in enumerate(
            walk_first_parent(self.graph, head, max_depth=self.max_depth)
        ):
            tag = index.get(commit_id)
            if tag is None:
                continue

            # Mimics '--match=${prefix}*': only the nearest tag is considered.
            if not tag.name.startswith(prefix):
                log.debug(
                    f"Nearest tag '{tag.name}' at depth {depth} "
                    f"does not match prefix '{prefix}'"
                )
                break

            return self._format(head, tag.name, depth)

        return Ok(value=self.graph.abbreviate(head), head=head)

    def _format(self, head: CommitId, tag: str, depth: int) -> Ok:
        if depth == 0 and not self._forces_long_form(tag):
            return Ok(value=tag, head=head, tag=tag, depth=0)

        value = long_description(tag, depth, self.graph.abbreviate(head))
        return Ok(value=value, head=head, tag=tag, depth=depth)

    def _forces_long_form(self, tag: str) -> bool:
        return (
            self.release_mode == ReleaseMode.RELEASE_BRANCH
            and tag.endswith(RELEASE_BRANCH_EXACT_SUFFIX)
        )


def describe(
    graph: ObjectGraphAccess,
    prefix: str,
    release_mode: ReleaseMode = ReleaseMode.PLAIN,
    tie_break: Optional[TagTieBreak] = None,
    max_depth: Optional[int] = None,
) -> Optional[str]:
    """Describe HEAD of graph; see DescribeEngine."""
    engine = DescribeEngine(graph, release_mode, tie_break=tie_break, max_depth=max_depth)
    return engine.describe(prefix)


def describe_repository(
    path: str,
    prefix: str,
    release_mode: ReleaseMode = ReleaseMode.PLAIN,
    tie_break: Optional[TagTieBreak] = None,
    max_depth: Optional[int] = None,
    abbrev_min_length: int = DEFAULT_ABBREV_LENGTH,
) -> DescribeResult:
    """Open the repository containing path and describe its HEAD.

    Like DescribeEngine.describe_detailed, this never raises; a missing or
    unreadable repository yields Absent.
    """
    try:
        graph = open_graph(path, abbrev_min_length=abbrev_min_length)
    except DescribeError as e:
        log.debug(f"Describe failed: {e}")
        return Absent(reason=str(e))
    except Exception as e:
        log.debug("Opening repository failed with unexpected error", exc_info=True)
        return Absent(reason=f"{type(e).__name__}: {e}")

    engine = DescribeEngine(graph, release_mode, tie_break=tie_break, max_depth=max_depth)
    return engine.describe_detailed(prefix)
