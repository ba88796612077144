import itertools

import pytest

from tagdescribe.commands.tags import group_tags_by_target
from tagdescribe.errors import GraphAccessError
from tagdescribe.models import TagCandidate, TagRef
from tagdescribe.tag_index import TagIndexBuilder, build_tag_index
from tagdescribe.tie_breaks import (
    AnnotatedThenNameTieBreak,
    TaggerDateTieBreak,
    create_tie_break,
)

from conftest import linear_graph


def test_lightweight_tag_targets_commit():
    graph = linear_graph("c0", "c1")
    graph.add_lightweight("v1.0", "c1")

    index = build_tag_index(graph)

    assert index == {"c1": TagRef(name="v1.0", target="c1", annotated=False)}


def test_annotated_tag_is_peeled():
    graph = linear_graph("c0", "c1")
    graph.add_annotated("v1.0", "c1")

    index = build_tag_index(graph)

    assert set(index) == {"c1"}
    assert index["c1"].annotated is True
    assert index["c1"].name == "v1.0"


def test_nested_annotated_tag_is_peeled_to_commit():
    graph = linear_graph("c0")
    graph.tag_objects["outer"] = ("inner", 0)
    graph.tag_objects["inner"] = ("c0", 0)
    graph.tags.append(TagCandidate(name="v2", target="outer", target_type="tag"))

    assert build_tag_index(graph)["c0"].name == "v2"


def test_tag_on_tree_never_keys_a_commit():
    graph = linear_graph("c0")
    graph.tags.append(TagCandidate(name="tree-tag", target="t0", target_type="tree"))

    index = build_tag_index(graph)

    assert "c0" not in index
    assert index["t0"].name == "tree-tag"


def test_every_entry_targets_its_key():
    graph = linear_graph("c0", "c1", "c2")
    graph.add_lightweight("a", "c0")
    graph.add_annotated("b", "c1")
    graph.add_lightweight("c", "c1")
    graph.add_annotated("d", "c2")

    for commit_id, tag in build_tag_index(graph).items():
        assert tag.target == commit_id


def test_annotated_beats_lightweight_with_greater_name():
    graph = linear_graph("c0")
    graph.add_lightweight("v9.9", "c0")
    graph.add_annotated("v1.0", "c0")

    assert build_tag_index(graph)["c0"].name == "v1.0"


def test_greatest_name_wins_among_same_kind():
    graph = linear_graph("c0")
    graph.add_lightweight("v1.0-rc1", "c0")
    graph.add_lightweight("v1.0-rc2", "c0")

    assert build_tag_index(graph)["c0"].name == "v1.0-rc2"


def test_winner_independent_of_enumeration_order():
    graph = linear_graph("c0")
    graph.add_lightweight("v1.0", "c0")
    graph.add_lightweight("v1.1", "c0")
    graph.add_annotated("v0.9", "c0")
    graph.add_annotated("v0.8", "c0")
    candidates = list(graph.tags)

    winners = set()
    for order in itertools.permutations(candidates):
        graph.tags = list(order)
        winners.add(build_tag_index(graph)["c0"].name)

    assert winners == {"v0.9"}


def test_tagger_date_prefers_newest_annotated():
    graph = linear_graph("c0")
    graph.add_annotated("v1.1", "c0", date=100)
    graph.add_annotated("v1.0", "c0", date=200)
    graph.add_lightweight("v2.0", "c0")

    index = TagIndexBuilder(graph, create_tie_break("tagger-date")).build()

    assert index["c0"].name == "v1.0"
    assert index["c0"].tagged_date == 200


def test_tagger_date_not_loaded_for_default_policy():
    graph = linear_graph("c0")
    graph.add_annotated("v1.0", "c0", date=200)

    assert build_tag_index(graph)["c0"].tagged_date is None


def test_peel_errors_propagate():
    graph = linear_graph("c0")
    graph.tags.append(TagCandidate(name="broken", target="tag-x", target_type="tag"))

    def broken_peel(raw_target):
        raise GraphAccessError("cannot read tag object", object_id=raw_target)

    graph.peel_annotated_tag = broken_peel

    with pytest.raises(GraphAccessError):
        build_tag_index(graph)


class TestTieBreaks:
    def test_compare_is_antisymmetric(self):
        policy = AnnotatedThenNameTieBreak()
        a = TagRef(name="v1", target="c", annotated=True)
        b = TagRef(name="v2", target="c", annotated=False)
        c = TagRef(name="v3", target="c", annotated=False)

        for x, y in [(a, c), (c, b), (a, b)]:
            assert policy.compare(x, y) < 0
            assert policy.compare(y, x) > 0
        assert policy.compare(a, a) == 0

    def test_sort_best_first(self):
        policy = TaggerDateTieBreak()
        tags = [
            TagRef(name="light", target="c", annotated=False),
            TagRef(name="old", target="c", annotated=True, tagged_date=1),
            TagRef(name="new", target="c", annotated=True, tagged_date=5),
        ]
        assert [t.name for t in policy.sort(tags)] == ["new", "old", "light"]

    def test_pick(self):
        policy = AnnotatedThenNameTieBreak()
        a = TagRef(name="a", target="c", annotated=False)
        b = TagRef(name="b", target="c", annotated=False)
        assert policy.pick(a, b) is b
        assert policy.pick(b, a) is b

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="Unknown tie-break"):
            create_tie_break("newest-first")

    def test_default_policy(self):
        assert create_tie_break().name == "annotated-then-name"


def test_grouping_filters_on_winner_not_on_any_tag():
    graph = linear_graph("c0", "c1")
    graph.add_lightweight("v1.0", "c0")
    graph.add_annotated("nightly", "c0")
    graph.add_lightweight("v0.9", "c1")
    builder = TagIndexBuilder(graph)

    groups = group_tags_by_target(builder, "v")

    assert set(groups) == {"c1"}
    assert [t.name for t in group_tags_by_target(builder)["c0"]] == ["nightly", "v1.0"]
    for target, tags in group_tags_by_target(builder).items():
        assert build_tag_index(graph)[target] == tags[0]
