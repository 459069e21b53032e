"""Root person selection for tree views."""

from datetime import date

from .graph_index import GraphIndex


def resolve_default_root(index: GraphIndex) -> str | None:
    """Pick a default root: the oldest person with no known parents.

    Candidates are persons that never appear as a child. The earliest birth
    date wins; undated persons sort last and ties keep input order. If every
    person has a parent (fully cyclic data) the first person is used.

    Returns:
        A person id, or None when the index is empty.
    """
    if not index.persons:
        return None

    candidates = [slot for slot in range(len(index.persons)) if not index.has_parents(slot)]
    if not candidates:
        return index.persons[0].id

    def sort_key(slot: int) -> tuple[int, date, int]:
        birth = index.persons[slot].birth_date
        return (0, birth, slot) if birth else (1, date.min, slot)

    return index.persons[min(candidates, key=sort_key)].id


def find_topmost_ancestor(index: GraphIndex, person_id: str) -> str | None:
    """Walk up the first unvisited parent until the top of the lineage.

    Stops when a person has no parent left to visit (including a parent
    already seen, which means the data contains a cycle).

    Returns:
        The topmost ancestor's id, the person itself if it has no parents,
        or None for an unknown id.
    """
    slot = index.index_of.get(person_id)
    if slot is None:
        return None

    visited = {slot}
    current = slot
    while True:
        next_slot = next((p for p in index.parents[current] if p not in visited), None)
        if next_slot is None:
            return index.persons[current].id
        visited.add(next_slot)
        current = next_slot
