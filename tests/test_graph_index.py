"""Tests for the graph index."""

from factories import parent, person, spouse

from family_graph.constants import ADOPTED, FOSTER, STEP_CHILD
from family_graph.graph_index import GraphIndex
from family_graph.models import Relationship


class TestBuild:
    """Tests for GraphIndex.build."""

    def test_indexes_every_person(self, sample_index):
        """Every loaded person gets a slot."""
        assert len(sample_index) == 12
        assert "p1" in sample_index
        assert "p12" in sample_index

    def test_adjacency_from_sample(self, sample_index):
        """Parent, child and spouse lists match the edges."""
        assert sample_index.children_of("p1") == ["p3", "p4"]
        assert sample_index.parents_of("p10") == ["p7", "p9"]
        assert sample_index.spouses_of("p3") == ["p5"]
        assert sample_index.spouses_of("p5") == ["p3"]

    def test_adopted_edges_count_as_parent_child(self, sample_index):
        """ADOPTED edges are walked like biological ones."""
        assert sample_index.parents_of("p8") == ["p4", "p6"]

    def test_skips_malformed_edges(self, sample_index):
        """Dangling and self-loop edges are skipped and counted."""
        assert sample_index.skipped_edges == 2
        assert sample_index.spouses_of("p12") == []
        assert sample_index.parents_of("p7") == ["p3", "p5"]

    def test_duplicate_edges_collapse(self, sample_index):
        """A repeated parent edge is stored once."""
        assert sample_index.parents_of("p3").count("p1") == 1

    def test_duplicate_person_keeps_last_record(self):
        """A repeated person id keeps its first slot with the last record."""
        index = GraphIndex.build(
            [person("a", first="First"), person("b"), person("a", first="Second")], []
        )
        assert len(index) == 2
        assert index.index_of["a"] == 0
        assert index.get("a").first_name == "Second"

    def test_spouse_edges_symmetric_and_deduped(self):
        """A-B and B-A spouse edges become one symmetric link."""
        index = GraphIndex.build([person("a"), person("b")], [spouse("a", "b"), spouse("b", "a")])
        assert index.spouses_of("a") == ["b"]
        assert index.spouses_of("b") == ["a"]

    def test_all_parent_child_types(self):
        """Step, foster and adopted edges are parent -> child edges."""
        index = GraphIndex.build(
            [person("p"), person("a"), person("b"), person("c")],
            [parent("p", "a", ADOPTED), parent("p", "b", STEP_CHILD), parent("p", "c", FOSTER)],
        )
        assert index.children_of("p") == ["a", "b", "c"]

    def test_unknown_relationship_types_ignored(self):
        """Edges of other types are neither indexed nor counted as skipped."""
        index = GraphIndex.build(
            [person("a"), person("b")],
            [Relationship(type="SIBLING", parent_id="a", child_id="b")],
        )
        assert index.children_of("a") == []
        assert index.skipped_edges == 0

    def test_missing_endpoint_skipped(self):
        """An edge without one of its ends is skipped."""
        index = GraphIndex.build([person("a")], [parent("a", None), spouse(None, "a")])
        assert index.skipped_edges == 2

    def test_empty(self):
        """An empty dataset builds an empty index."""
        index = GraphIndex.build([], [])
        assert len(index) == 0


class TestAccessors:
    """Tests for id-based accessors."""

    def test_unknown_id_returns_empty(self, sample_index):
        assert sample_index.get("nope") is None
        assert sample_index.children_of("nope") == []
        assert sample_index.parents_of("nope") == []
        assert sample_index.spouses_of("nope") == []

    def test_id_at_round_trips_slot(self, sample_index):
        slot = sample_index.index_of["p7"]
        assert sample_index.id_at(slot) == "p7"
        assert sample_index.has_parents(slot)
        assert not sample_index.has_parents(sample_index.index_of["p1"])
