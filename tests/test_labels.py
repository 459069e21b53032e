"""Tests for relationship labels."""

import pytest

from family_graph.labels import blood_label, ordinal, relationship_label


class TestOrdinal:
    @pytest.mark.parametrize(
        "n,expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"), (21, "21st")],
    )
    def test_suffixes(self, n, expected):
        assert ordinal(n) == expected


class TestBloodLabel:
    """Tests for labels along parent/child lines."""

    @pytest.mark.parametrize(
        "up,down,expected",
        [
            (0, 0, "Self"),
            (1, 0, "Parent"),
            (2, 0, "Grandparent"),
            (3, 0, "Great-Grandparent"),
            (4, 0, "2nd Great-Grandparent"),
            (0, 1, "Child"),
            (0, 2, "Grandchild"),
            (0, 3, "Great-Grandchild"),
            (1, 1, "Sibling"),
            (1, 2, "Niece/Nephew"),
            (1, 3, "Grand-Niece/Nephew"),
            (1, 4, "Great-Grand-Niece/Nephew"),
            (2, 1, "Aunt/Uncle"),
            (3, 1, "Great-Aunt/Uncle"),
            (2, 2, "1st Cousin"),
            (3, 3, "2nd Cousin"),
            (2, 3, "1st Cousin Once Removed"),
            (4, 2, "1st Cousin Twice Removed"),
            (5, 2, "1st Cousin 3 Times Removed"),
        ],
    )
    def test_labels(self, up, down, expected):
        assert blood_label(up, down) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            blood_label(-1, 0)


class TestRelationshipLabel:
    """Tests for labels built from hop sequences."""

    @pytest.mark.parametrize(
        "hops,expected",
        [
            ([], "Self"),
            (["spouse"], "Spouse"),
            (["parent"], "Parent"),
            (["parent", "child"], "Sibling"),
            (["parent", "parent", "child", "child"], "1st Cousin"),
            (["child", "parent"], "Co-parent"),
            (["spouse", "parent"], "Parent-in-law"),
            (["spouse", "parent", "child"], "Sibling-in-law"),
            (["spouse", "child"], "Stepchild"),
            (["spouse", "parent", "parent"], "Grandparent of Spouse"),
            (["child", "spouse"], "Child-in-law"),
            (["parent", "child", "spouse"], "Sibling-in-law"),
            (["parent", "spouse"], "Step-parent"),
            (["parent", "parent", "child", "spouse"], "Spouse of Aunt/Uncle"),
            (["spouse", "parent", "child", "spouse"], "Spouse of Sibling of Spouse"),
        ],
    )
    def test_labels(self, hops, expected):
        assert relationship_label(hops) == expected

    @pytest.mark.parametrize(
        "hops,expected",
        [
            (["child", "spouse", "parent"], "Extended Family"),
            (["parent", "spouse", "child", "child", "parent"], "Distant Relative"),
            (["spouse", "spouse"], "Close Family"),
        ],
    )
    def test_fallback_buckets(self, hops, expected):
        """Paths that are not a simple line fall back to distance buckets."""
        assert relationship_label(hops) == expected
