"""Tree building over the family graph.

A tree view is expanded from one root toward ancestors, descendants or both.
A single visited set is shared across the whole build, so a person appears
at most once anywhere in the result even when reachable by several paths
(pedigree collapse) or when the edges contain cycles.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .constants import (
    ANCESTORS,
    BOTH,
    DEFAULT_DIRECTION,
    DEFAULT_MAX_DEPTH,
    DESCENDANTS,
    DIRECTIONS,
)
from .graph_index import GraphIndex
from .models import Person, Relationship, TreeNode, TreeStats
from .roots import find_topmost_ancestor, resolve_default_root
from .stats import calculate_tree_stats


def validate_tree_request(direction: str, max_depth: int) -> None:
    """Raise ValueError for a direction or depth the caller should never send."""
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {', '.join(DIRECTIONS)}, got {direction!r}")
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise ValueError(f"max_depth must be a positive integer, got {max_depth!r}")


def _attach_spouses(index: GraphIndex, node: TreeNode, slot: int, visited: bytearray) -> None:
    for spouse in index.spouses[slot]:
        if not visited[spouse]:
            visited[spouse] = 1
            node.spouses.append(index.persons[spouse])


def _expand(
    index: GraphIndex,
    root: TreeNode,
    root_slot: int,
    upward: bool,
    max_depth: int,
    visited: bytearray,
    placed: list[tuple[TreeNode, int]],
) -> None:
    """Expand one direction from root, one generation at a time.

    Every relative on a generation is claimed (marked visited) before the
    next generation is walked, so a person reachable through several lines
    keeps the shallowest slot. New nodes are appended to ``placed``; spouses
    are attached afterwards by the caller.
    """
    adjacency = index.parents if upward else index.children
    level = [(root, root_slot)]
    while level:
        next_level = []
        for node, slot in level:
            if node.depth >= max_depth:
                continue
            branch = node.parents if upward else node.children
            for rel in adjacency[slot]:
                if visited[rel]:
                    continue
                visited[rel] = 1
                rel_node = TreeNode(person=index.persons[rel], depth=node.depth + 1)
                branch.append(rel_node)
                next_level.append((rel_node, rel))
        placed.extend(next_level)
        level = next_level


def build_tree_from_index(
    index: GraphIndex,
    root_id: str | None = None,
    direction: str = DEFAULT_DIRECTION,
    max_depth: int = DEFAULT_MAX_DEPTH,
    anchor_to_top: bool = False,
) -> TreeNode | None:
    """Build a tree from a prebuilt index. See build_family_tree."""
    validate_tree_request(direction, max_depth)

    if root_id is None:
        root_id = resolve_default_root(index)
    elif anchor_to_top:
        root_id = find_topmost_ancestor(index, root_id)
    if root_id is None:
        return None

    root_slot = index.index_of.get(root_id)
    if root_slot is None:
        return None

    visited = bytearray(len(index))
    visited[root_slot] = 1
    root = TreeNode(person=index.persons[root_slot], depth=0)
    placed = [(root, root_slot)]

    if direction in (DESCENDANTS, BOTH):
        _expand(index, root, root_slot, False, max_depth, visited, placed)
    if direction in (ANCESTORS, BOTH):
        _expand(index, root, root_slot, True, max_depth, visited, placed)

    # Spouses are leaves: only persons not already placed by blood
    for node, slot in placed:
        _attach_spouses(index, node, slot, visited)

    return root


def build_family_tree(
    root_id: str | None,
    persons: Sequence[Person],
    relationships: Iterable[Relationship],
    direction: str = DEFAULT_DIRECTION,
    max_depth: int = DEFAULT_MAX_DEPTH,
    anchor_to_top: bool = False,
) -> TreeNode | None:
    """Build a rooted, depth-bounded tree view of the family graph.

    Args:
        root_id: Person to root the tree at. None picks the oldest person
            with no known parents.
        persons: All person records.
        relationships: All relationship edges.
        direction: "ancestors", "descendants" or "both".
        max_depth: Hard depth cutoff; nodes at this depth are not expanded.
        anchor_to_top: Walk from root_id up to its topmost ancestor first.

    Returns:
        The root TreeNode, or None for an empty dataset or unknown root.

    Raises:
        ValueError: For an unknown direction or a max_depth below 1.
    """
    validate_tree_request(direction, max_depth)
    index = GraphIndex.build(persons, relationships)
    return build_tree_from_index(index, root_id, direction, max_depth, anchor_to_top)


def collect_tree_node_ids(tree: TreeNode | None) -> set[str]:
    """Return every person id in a tree: nodes at every level and their spouses."""
    ids: set[str] = set()
    if tree is None:
        return ids
    for node in tree.iter_nodes():
        ids.add(node.person.id)
        ids.update(spouse.id for spouse in node.spouses)
    return ids


def scope_to_node_set(
    persons: Iterable[Person],
    relationships: Iterable[Relationship],
    ids: set[str],
) -> tuple[list[Person], list[Relationship]]:
    """Restrict persons and edges to a node set; edges need both ends inside."""
    scoped_persons = [p for p in persons if p.id in ids]
    scoped_edges = [r for r in relationships if all(end in ids for end in r.endpoints())]
    return scoped_persons, scoped_edges


def build_tree_view(
    root_id: str | None,
    persons: Sequence[Person],
    relationships: Sequence[Relationship],
    direction: str = DEFAULT_DIRECTION,
    max_depth: int = DEFAULT_MAX_DEPTH,
    anchor_to_top: bool = False,
) -> dict:
    """Build a tree plus statistics scoped to exactly the rendered subtree.

    Returns:
        {"tree": TreeNode | None, "stats": TreeStats | None, "root_person_id": str | None}
    """
    validate_tree_request(direction, max_depth)
    if not persons:
        return {"tree": None, "stats": None, "root_person_id": None}

    index = GraphIndex.build(persons, relationships)
    tree = build_tree_from_index(index, root_id, direction, max_depth, anchor_to_top)
    if tree is None:
        return {"tree": None, "stats": None, "root_person_id": None}

    scoped_persons, scoped_edges = scope_to_node_set(
        index.persons, relationships, collect_tree_node_ids(tree)
    )
    stats: TreeStats = calculate_tree_stats(scoped_persons, scoped_edges)
    return {"tree": tree, "stats": stats, "root_person_id": tree.person.id}
