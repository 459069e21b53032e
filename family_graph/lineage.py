"""Flat lineage lookups: ancestors, descendants and siblings as id lists."""

from collections import deque

from .constants import DEFAULT_LINEAGE_GENERATIONS
from .graph_index import GraphIndex


def _walk(
    index: GraphIndex, adjacency: list[list[int]], person_id: str, max_generations: int
) -> list[str]:
    start = index.index_of.get(person_id)
    if start is None or max_generations < 1:
        return []

    found: list[str] = []
    seen = {start}
    queue = deque([(start, 0)])
    while queue:
        slot, generation = queue.popleft()
        if generation >= max_generations:
            continue
        for rel in adjacency[slot]:
            if rel in seen:
                continue
            seen.add(rel)
            found.append(index.persons[rel].id)
            queue.append((rel, generation + 1))
    return found


def get_ancestors(
    index: GraphIndex,
    person_id: str,
    max_generations: int = DEFAULT_LINEAGE_GENERATIONS,
) -> list[str]:
    """Ancestor ids up to max_generations back, nearest generation first."""
    return _walk(index, index.parents, person_id, max_generations)


def get_descendants(
    index: GraphIndex,
    person_id: str,
    max_generations: int = DEFAULT_LINEAGE_GENERATIONS,
) -> list[str]:
    """Descendant ids up to max_generations down, nearest generation first."""
    return _walk(index, index.children, person_id, max_generations)


def get_siblings(index: GraphIndex, person_id: str) -> list[str]:
    """Ids of everyone sharing at least one parent with the person (half-siblings included)."""
    slot = index.index_of.get(person_id)
    if slot is None:
        return []

    siblings: list[str] = []
    seen = {slot}
    for parent in index.parents[slot]:
        for child in index.children[parent]:
            if child not in seen:
                seen.add(child)
                siblings.append(index.persons[child].id)
    return siblings
