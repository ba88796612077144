"""Read-only access to the commit graph and tag references.

The describe pipeline only talks to ObjectGraphAccess. GitPythonGraph is the
production implementation; tests substitute in-memory graphs.
"""

from abc import ABC, abstractmethod
import logging
from pathlib import Path
from typing import List, Optional

from git import Repo
from git.db import GitDB
from git.exc import InvalidGitRepositoryError, NoSuchPathError
from git.objects.base import Object
from git.util import hex_to_bin
from gitdb.exc import AmbiguousObjectName

from .errors import GraphAccessError, RepositoryUnavailable
from .models import CommitId, TagCandidate

log = logging.getLogger(__name__)

# Same as git's core.abbrev default.
DEFAULT_ABBREV_LENGTH = 7
FULL_SHA_LENGTH = 40


class ObjectGraphAccess(ABC):
    """Capabilities the describe pipeline needs from a repository."""

    @abstractmethod
    def resolve_head(self) -> CommitId:
        """Return the commit HEAD points at.

        Raises:
            RepositoryUnavailable: If HEAD cannot be resolved.
        """
        pass

    @abstractmethod
    def parents_of(self, commit_id: CommitId) -> List[CommitId]:
        """Return the ordered parents of a commit, first parent first.

        Raises:
            GraphAccessError: If the commit cannot be read.
        """
        pass

    @abstractmethod
    def list_tag_references(self) -> List[TagCandidate]:
        """Return every ref under refs/tags, unpeeled."""
        pass

    @abstractmethod
    def peel_annotated_tag(self, raw_target: str) -> Optional[str]:
        """Follow tag objects from raw_target to the object they wrap.

        Returns:
            Hexsha of the first non-tag object reached, or None if raw_target
            is not a tag object.
        """
        pass

    @abstractmethod
    def abbreviate(self, commit_id: CommitId) -> str:
        """Return the shortest unambiguous prefix of commit_id."""
        pass

    def tagger_date(self, raw_target: str) -> Optional[int]:
        """Return the tagger timestamp of a tag object, if available."""
        return None


class GitPythonGraph(ObjectGraphAccess):
    """ObjectGraphAccess backed by a GitPython Repo.

    Args:
        repo: GitPython Repo instance. Objects are read through repo.odb.
        abbrev_min_length: Shortest abbreviation abbreviate() will return.
    """

    def __init__(self, repo: Repo, abbrev_min_length: int = DEFAULT_ABBREV_LENGTH):
        self.repo = repo
        self.abbrev_min_length = abbrev_min_length

    def _read_object(self, hexsha: str):
        try:
            return Object.new_from_sha(self.repo, hex_to_bin(hexsha))
        except Exception as e:
            raise GraphAccessError(
                f"Cannot read object {hexsha}: {e}", object_id=hexsha
            ) from e

    def resolve_head(self) -> CommitId:
        try:
            return self.repo.head.commit.hexsha
        except Exception as e:
            raise RepositoryUnavailable(f"Cannot resolve HEAD: {e}") from e

    def parents_of(self, commit_id: CommitId) -> List[CommitId]:
        obj = self._read_object(commit_id)
        if obj.type != "commit":
            raise GraphAccessError(
                f"Object {commit_id} is a {obj.type}, not a commit",
                object_id=commit_id,
            )
        try:
            return [parent.hexsha for parent in obj.parents]
        except Exception as e:
            raise GraphAccessError(
                f"Cannot parse commit {commit_id}: {e}", object_id=commit_id
            ) from e

    def list_tag_references(self) -> List[TagCandidate]:
        candidates = []
        for ref in self.repo.tags:
            try:
                obj = ref.object
            except Exception as e:
                raise GraphAccessError(
                    f"Cannot resolve tag '{ref.name}': {e}"
                ) from e
            candidates.append(
                TagCandidate(name=ref.name, target=obj.hexsha, target_type=obj.type)
            )
        return candidates

    def peel_annotated_tag(self, raw_target: str) -> Optional[str]:
        obj = self._read_object(raw_target)
        if obj.type != "tag":
            return None

        seen = set()
        while obj.type == "tag":
            if obj.hexsha in seen:
                raise GraphAccessError(
                    f"Tag chain starting at {raw_target} loops", object_id=raw_target
                )
            seen.add(obj.hexsha)
            try:
                obj = obj.object
            except Exception as e:
                raise GraphAccessError(
                    f"Cannot peel tag object {obj.hexsha}: {e}", object_id=obj.hexsha
                ) from e
        return obj.hexsha

    def tagger_date(self, raw_target: str) -> Optional[int]:
        obj = self._read_object(raw_target)
        if obj.type != "tag":
            return None
        return obj.tagged_date

    def abbreviate(self, commit_id: CommitId) -> str:
        for length in range(self.abbrev_min_length, FULL_SHA_LENGTH):
            prefix = commit_id[:length]
            try:
                self.repo.odb.partial_to_complete_sha_hex(prefix)
            except AmbiguousObjectName:
                log.debug(f"Abbreviation {prefix} is ambiguous, extending")
                continue
            except Exception as e:
                raise GraphAccessError(
                    f"Cannot abbreviate {commit_id}: {e}", object_id=commit_id
                ) from e
            return prefix
        return commit_id


def open_graph(
    path: str = ".", abbrev_min_length: int = DEFAULT_ABBREV_LENGTH
) -> GitPythonGraph:
    """Open the repository containing path.

    Objects are read with the pure-python gitdb backend so no git executable
    is needed for describing.

    Args:
        path: Any directory inside the working tree (or the .git directory).
        abbrev_min_length: Shortest abbreviation to produce.

    Returns:
        GitPythonGraph for the repository.

    Raises:
        RepositoryUnavailable: If no repository is found at or above path.
    """
    # gitdb instead of the default GitCmdObjectDB: no git process is spawned and
    # ambiguous prefixes raise AmbiguousObjectName for abbreviate(). GitPython
    # emits a DeprecationWarning for this backend when the Repo is opened.
    try:
        repo = Repo(Path(path), odbt=GitDB, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise RepositoryUnavailable(f"No git repository at {path}: {e}") from e
    return GitPythonGraph(repo, abbrev_min_length=abbrev_min_length)
