import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from git import Actor, Commit, Repo

from tagdescribe.errors import GraphAccessError, RepositoryUnavailable
from tagdescribe.graph import ObjectGraphAccess
from tagdescribe.models import TagCandidate


class FakeGraph(ObjectGraphAccess):
    """In-memory commit graph.

    commits maps a commit id to its ordered parents. tag_objects maps an
    annotated tag object id to (wrapped object id, tagger date).
    """

    def __init__(
        self,
        commits: Dict[str, List[str]],
        head: Optional[str],
        tags: Optional[List[TagCandidate]] = None,
        tag_objects: Optional[Dict[str, tuple]] = None,
    ):
        self.commits = commits
        self.head = head
        self.tags = list(tags or [])
        self.tag_objects = dict(tag_objects or {})
        self.parent_reads: List[str] = []

    def add_lightweight(self, name: str, commit_id: str):
        self.tags.append(TagCandidate(name=name, target=commit_id, target_type="commit"))

    def add_annotated(self, name: str, commit_id: str, date: int = 0):
        tag_id = f"tag-{name}"
        self.tag_objects[tag_id] = (commit_id, date)
        self.tags.append(TagCandidate(name=name, target=tag_id, target_type="tag"))

    def resolve_head(self) -> str:
        if self.head is None:
            raise RepositoryUnavailable("no HEAD")
        return self.head

    def parents_of(self, commit_id: str) -> List[str]:
        self.parent_reads.append(commit_id)
        if commit_id not in self.commits:
            raise GraphAccessError(f"missing {commit_id}", object_id=commit_id)
        return list(self.commits[commit_id])

    def list_tag_references(self) -> List[TagCandidate]:
        return list(self.tags)

    def peel_annotated_tag(self, raw_target: str) -> Optional[str]:
        if raw_target not in self.tag_objects:
            return None
        target = raw_target
        while target in self.tag_objects:
            target = self.tag_objects[target][0]
        return target

    def tagger_date(self, raw_target: str) -> Optional[int]:
        if raw_target not in self.tag_objects:
            return None
        return self.tag_objects[raw_target][1]

    def abbreviate(self, commit_id: str) -> str:
        return commit_id[:7]


def linear_graph(*ids: str) -> FakeGraph:
    """ids[0] is HEAD, ids[-1] is the root."""
    commits = {cid: [parent] for cid, parent in zip(ids, ids[1:])}
    commits[ids[-1]] = []
    return FakeGraph(commits, head=ids[0])


class RepoBuilder:
    """Builds commit graphs in a real repository with GitPython."""

    AUTHOR = Actor("Test User", "test@example.com")

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path)
        with self.repo.config_writer() as writer:
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")
        self._counter = 0

    def commit(
        self,
        message: Optional[str] = None,
        parents: Optional[List[Commit]] = None,
        move_head: bool = True,
    ) -> Commit:
        """Create a commit. Without parents the commit goes on top of HEAD."""
        self._counter += 1
        message = message or f"commit {self._counter}"
        change = self.path / "changes.txt"
        change.write_text(f"{message}\n")
        self.repo.index.add([str(change)])
        return self.repo.index.commit(
            message,
            parent_commits=parents,
            head=move_head,
            author=self.AUTHOR,
            committer=self.AUTHOR,
        )

    def tag(self, name: str, commit: Commit, annotated: bool = False):
        if annotated:
            return self.repo.create_tag(name, ref=commit, message=f"Release {name}")
        return self.repo.create_tag(name, ref=commit)


@pytest.fixture
def repo_builder():
    temp_dir = Path(tempfile.mkdtemp())
    try:
        yield RepoBuilder(temp_dir)
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)
