"""Tests for relative discovery and relationship paths."""

import pytest
from factories import parent, person, spouse

from family_graph.graph_index import GraphIndex
from family_graph.models import UserRef
from family_graph.relatives import (
    breadth_first_search,
    find_relationship_path,
    find_relatives,
    relative_distances,
    trace_relationship,
)


@pytest.fixture
def small_graph():
    """A -spouse- B, A -parent-> C."""
    persons = [person("A"), person("B"), person("C")]
    rels = [spouse("A", "B"), parent("A", "C")]
    return persons, rels


class TestDistances:
    """Tests for BFS distances."""

    def test_spouse_of_parent_is_two_hops(self, small_graph):
        index = GraphIndex.build(*small_graph)
        assert relative_distances(index, "C") == {"C": 0, "A": 1, "B": 2}

    def test_max_distance_bounds_search(self, sample_index):
        distances = relative_distances(sample_index, "p10", max_distance=2)
        assert set(distances) == {"p10", "p7", "p9", "p3", "p5"}

    def test_sample_distances(self, sample_index):
        distances = relative_distances(sample_index, "p10")
        assert distances["p1"] == 3
        assert distances["p4"] == 4
        assert distances["p8"] == 5
        assert distances["p11"] == 6
        assert "p12" not in distances

    def test_unknown_source(self, sample_index):
        assert relative_distances(sample_index, "nope") == {}

    def test_node_budget_truncates(self, sample_index):
        result = breadth_first_search(sample_index, sample_index.index_of["p10"], node_budget=3)
        assert result.truncated
        assert len(result.order) <= 3


class TestFindRelatives:
    """Tests for find_relatives."""

    def test_ranked_by_distance_then_id(self, sample_persons, sample_relationships):
        result = find_relatives("p10", 3, 10, sample_persons, sample_relationships)
        assert result.status == "ok"
        assert [(s.person.id, s.distance) for s in result.suggestions] == [
            ("p1", 3),
            ("p2", 3),
            ("p4", 4),
            ("p6", 5),
            ("p8", 5),
            ("p11", 6),
        ]

    def test_relationship_labels(self, sample_persons, sample_relationships):
        result = find_relatives("p10", 3, 10, sample_persons, sample_relationships)
        labels = {s.person.id: s.relationship_path for s in result.suggestions}
        assert labels["p1"] == "Great-Grandparent"
        assert labels["p4"] == "Great-Aunt/Uncle"
        assert labels["p6"] == "Spouse of Great-Aunt/Uncle"
        assert labels["p8"] == "1st Cousin Once Removed"
        assert labels["p11"] == "2nd Cousin"

    def test_path_ids_follow_hops(self, sample_persons, sample_relationships):
        result = find_relatives("p10", 4, 1, sample_persons, sample_relationships)
        suggestion = result.suggestions[0]
        assert suggestion.path_ids == ["p10", "p7", "p3", "p1", "p4"]
        assert suggestion.path == ["parent", "parent", "parent", "child"]

    def test_limit(self, sample_persons, sample_relationships):
        result = find_relatives("p10", 3, 2, sample_persons, sample_relationships)
        assert [s.person.id for s in result.suggestions] == ["p1", "p2"]

    def test_min_distance_excludes_closer_relatives(self, small_graph):
        """The closest relative is at distance 2, so min_distance 3 finds nothing."""
        result = find_relatives("C", 3, 10, *small_graph)
        assert result.suggestions == []
        assert result.status == "no_relatives"
        assert result.message == "No distant relatives found"

    def test_max_distance(self, sample_persons, sample_relationships):
        result = find_relatives("p10", 3, 10, sample_persons, sample_relationships, max_distance=4)
        assert [s.person.id for s in result.suggestions] == ["p1", "p2", "p4"]

    def test_never_includes_source(self, sample_persons, sample_relationships):
        result = find_relatives("p10", 0, 50, sample_persons, sample_relationships)
        assert "p10" not in [s.person.id for s in result.suggestions]

    def test_account_links(self, sample_persons, sample_relationships):
        links = {"p8": UserRef(id="u3", name="Susan Lewis")}
        result = find_relatives("p10", 5, 10, sample_persons, sample_relationships, links)
        by_id = {s.person.id: s for s in result.suggestions}
        assert by_id["p8"].has_account
        assert by_id["p8"].user.id == "u3"
        assert not by_id["p6"].has_account

    def test_same_account_as_source_excluded(self, sample_persons, sample_relationships):
        """A person linked to the requesting account is never suggested."""
        me = UserRef(id="u1")
        links = {"p10": me, "p4": me}
        result = find_relatives("p10", 3, 10, sample_persons, sample_relationships, links)
        assert "p4" not in [s.person.id for s in result.suggestions]

    def test_exclude_user_ids(self, sample_persons, sample_relationships):
        links = {"p8": UserRef(id="u3")}
        result = find_relatives(
            "p10", 3, 10, sample_persons, sample_relationships, links, exclude_user_ids=["u3"]
        )
        assert "p8" not in [s.person.id for s in result.suggestions]

    @pytest.mark.parametrize("source", [None, "", "nope"])
    def test_unlinked_source(self, sample_persons, sample_relationships, source):
        result = find_relatives(source, 3, 10, sample_persons, sample_relationships)
        assert result.status == "no_linked_person"
        assert result.suggestions == []
        assert "Link your profile" in result.message

    def test_isolated_person(self, sample_persons, sample_relationships):
        result = find_relatives("p12", 1, 10, sample_persons, sample_relationships)
        assert result.status == "no_relatives"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_distance": -1},
            {"limit": 0},
            {"max_distance": -2},
            {"node_budget": 0},
        ],
    )
    def test_invalid_arguments(self, sample_persons, sample_relationships, kwargs):
        args = {"min_distance": 3, "limit": 10, **kwargs}
        with pytest.raises(ValueError):
            find_relatives("p10", persons=sample_persons, relationships=sample_relationships, **args)

    def test_to_dict(self, sample_persons, sample_relationships):
        data = find_relatives("p10", 6, 10, sample_persons, sample_relationships).to_dict()
        assert data["status"] == "ok"
        assert data["message"] is None
        assert data["data"][0]["person"]["id"] == "p11"
        assert data["data"][0]["relationship_path"] == "2nd Cousin"
        assert data["data"][0]["has_account"] is False

    def test_deterministic(self, sample_persons, sample_relationships):
        first = find_relatives("p10", 3, 10, sample_persons, sample_relationships)
        second = find_relatives("p10", 3, 10, sample_persons, sample_relationships)
        assert first.to_dict() == second.to_dict()


class TestRelationshipPath:
    """Tests for trace_relationship and find_relationship_path."""

    def test_shortest_path(self, small_graph):
        assert find_relationship_path("C", "B", *small_graph) == ["C", "A", "B"]

    def test_hops(self, sample_index):
        ids, hops = trace_relationship(sample_index, "p7", "p8")
        assert ids[0] == "p7" and ids[-1] == "p8"
        assert hops == ["parent", "parent", "child", "child"]

    def test_equal_spouse_hops_compare_hop_kinds_in_order(self):
        """T is the spouse of S's parent and the parent of S's spouse.

        Both routes are two hops with one spouse hop; the route whose first
        hop is a parent hop wins.
        """
        persons = [person("S"), person("A"), person("W"), person("T")]
        rels = [spouse("S", "W"), parent("A", "S"), spouse("A", "T"), parent("T", "W")]
        index = GraphIndex.build(persons, rels)
        ids, hops = trace_relationship(index, "S", "T")
        assert ids == ["S", "A", "T"]
        assert hops == ["parent", "spouse"]

    def test_blood_path_beats_earlier_spouse_hop(self):
        """X is an aunt through P2's father, and also a step-sibling of P1.

        The in-law route is found first in frontier order, but the all-blood
        route of the same length wins.
        """
        persons = [person(x) for x in ("S", "P1", "P2", "M", "GP2", "X")]
        rels = [
            parent("P1", "S"),
            parent("P2", "S"),
            spouse("P1", "M"),
            parent("M", "X"),
            parent("GP2", "P2"),
            parent("GP2", "X"),
        ]
        index = GraphIndex.build(persons, rels)
        ids, hops = trace_relationship(index, "S", "X")
        assert ids == ["S", "P2", "GP2", "X"]
        assert hops == ["parent", "parent", "child"]

    def test_blood_label_for_relative_with_in_law_route(self):
        persons = [person(x) for x in ("S", "P1", "P2", "M", "GP2", "X")]
        rels = [
            parent("P1", "S"),
            parent("P2", "S"),
            spouse("P1", "M"),
            parent("M", "X"),
            parent("GP2", "P2"),
            parent("GP2", "X"),
        ]
        result = find_relatives("S", 3, 10, persons, rels)
        labels = {s.person.id: s.relationship_path for s in result.suggestions}
        assert labels["X"] == "Aunt/Uncle"

    def test_same_person(self, sample_index):
        assert trace_relationship(sample_index, "p1", "p1") == (["p1"], [])

    def test_not_connected(self, sample_persons, sample_relationships):
        assert find_relationship_path("p1", "p12", sample_persons, sample_relationships) is None

    def test_max_depth(self, sample_persons, sample_relationships):
        assert (
            find_relationship_path("p10", "p11", sample_persons, sample_relationships, max_depth=5)
            is None
        )

    def test_unknown_ids(self, sample_persons, sample_relationships):
        assert find_relationship_path("p1", "nope", sample_persons, sample_relationships) is None
