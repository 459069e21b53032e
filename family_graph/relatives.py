"""Relative discovery by shortest relationship paths.

Distances are hop counts over the undirected projection of the graph:
parent -> child and spouse edges are each one step in either direction, all
with equal weight. Search is level-synchronous breadth-first so that when a
person is reachable from several people on the previous level, the path can
be chosen deterministically: fewest spouse hops first, then the hop kinds
from the source compared in order (parent, then child, then spouse). Blood
paths win over in-law paths of the same length, and labels stay stable
between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_DISTANCE,
    DEFAULT_NODE_BUDGET,
    HOP_CHILD,
    HOP_PARENT,
    HOP_SPOUSE,
    NO_LINKED_PERSON_MESSAGE,
    NO_RELATIVES_MESSAGE,
    STATUS_NO_LINKED_PERSON,
    STATUS_NO_RELATIVES,
    STATUS_OK,
)
from .graph_index import GraphIndex
from .labels import relationship_label
from .models import Person, Relationship, RelativeSuggestion, RelativesResult, UserRef

logger = logging.getLogger(__name__)

_HOP_RANK = {HOP_PARENT: 0, HOP_CHILD: 1, HOP_SPOUSE: 2}


@dataclass
class SearchResult:
    """Breadth-first search state from one source slot."""

    source: int
    order: list[int]  # slots in discovery order, source first
    distance: dict[int, int]
    predecessor: dict[int, tuple[int, str]]  # slot -> (previous slot, hop kind)
    truncated: bool = False

    def path_to(self, slot: int) -> tuple[list[int], list[str]]:
        """Reconstruct (slots, hops) from the source to slot."""
        slots = [slot]
        hops: list[str] = []
        while slot != self.source:
            slot, hop = self.predecessor[slot]
            slots.append(slot)
            hops.append(hop)
        slots.reverse()
        hops.reverse()
        return slots, hops


def _neighbours(index: GraphIndex, slot: int):
    for parent in index.parents[slot]:
        yield parent, HOP_PARENT
    for child in index.children[slot]:
        yield child, HOP_CHILD
    for spouse in index.spouses[slot]:
        yield spouse, HOP_SPOUSE


def breadth_first_search(
    index: GraphIndex,
    source: int,
    max_distance: int | None = None,
    node_budget: int = DEFAULT_NODE_BUDGET,
    target: int | None = None,
) -> SearchResult:
    """Search outward from a source slot, level by level.

    Stops at max_distance, once node_budget persons have been discovered,
    or after the level on which target is found.
    """
    result = SearchResult(source=source, order=[source], distance={source: 0}, predecessor={})
    # slot -> (spouse hops, hop ranks from the source); smaller is preferred
    path_key: dict[int, tuple[int, tuple[int, ...]]] = {source: (0, ())}
    frontier = [source]
    level = 0

    while frontier and (max_distance is None or level < max_distance):
        if target is not None and target in result.distance:
            break
        level += 1
        discovered: dict[int, tuple[int, str]] = {}
        keys: dict[int, tuple[int, tuple[int, ...]]] = {}
        for slot in frontier:
            spouse_hops, ranks = path_key[slot]
            for neighbour, hop in _neighbours(index, slot):
                if neighbour in result.distance:
                    continue
                key = (spouse_hops + (hop == HOP_SPOUSE), ranks + (_HOP_RANK[hop],))
                best = keys.get(neighbour)
                if best is None:
                    if len(result.order) + len(discovered) >= node_budget:
                        result.truncated = True
                        continue
                elif key >= best:
                    continue
                discovered[neighbour] = (slot, hop)
                keys[neighbour] = key

        frontier = list(discovered)
        for slot, pred in discovered.items():
            result.distance[slot] = level
            result.predecessor[slot] = pred
            path_key[slot] = keys[slot]
            result.order.append(slot)

        if result.truncated:
            logger.info(
                f"Relationship search from {index.id_at(source)} hit the node budget "
                f"of {node_budget} at distance {level}"
            )
            break

    return result


def relative_distances(
    index: GraphIndex,
    source_id: str,
    max_distance: int | None = None,
    node_budget: int = DEFAULT_NODE_BUDGET,
) -> dict[str, int]:
    """Shortest hop count from source_id to every reachable person (source included)."""
    source = index.index_of.get(source_id)
    if source is None:
        return {}
    result = breadth_first_search(index, source, max_distance, node_budget)
    return {index.id_at(slot): result.distance[slot] for slot in result.order}


def trace_relationship(
    index: GraphIndex,
    id1: str,
    id2: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[list[str], list[str]] | None:
    """Return (person ids, hops) along one shortest path, or None if not within max_depth."""
    a = index.index_of.get(id1)
    b = index.index_of.get(id2)
    if a is None or b is None:
        return None
    if a == b:
        return [id1], []

    result = breadth_first_search(
        index, a, max_distance=max_depth, node_budget=len(index), target=b
    )
    if b not in result.distance:
        return None
    slots, hops = result.path_to(b)
    return [index.id_at(s) for s in slots], hops


def find_relationship_path(
    id1: str,
    id2: str,
    persons: Sequence[Person],
    relationships: Iterable[Relationship],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[str] | None:
    """Shortest path of person ids between two persons, both ends included."""
    traced = trace_relationship(GraphIndex.build(persons, relationships), id1, id2, max_depth)
    return traced[0] if traced else None


def _validate(min_distance: int, limit: int, max_distance: int | None, node_budget: int) -> None:
    if min_distance < 0:
        raise ValueError(f"min_distance must be non-negative, got {min_distance}")
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")
    if max_distance is not None and max_distance < 0:
        raise ValueError(f"max_distance must be non-negative, got {max_distance}")
    if node_budget < 1:
        raise ValueError(f"node_budget must be a positive integer, got {node_budget}")


def find_relatives_in_index(
    index: GraphIndex,
    source_person_id: str | None,
    min_distance: int,
    limit: int,
    account_links: Mapping[str, UserRef] | None = None,
    max_distance: int | None = DEFAULT_MAX_DISTANCE,
    node_budget: int = DEFAULT_NODE_BUDGET,
    exclude_user_ids: Iterable[str] | None = None,
) -> RelativesResult:
    """Find relatives against a prebuilt index. See find_relatives."""
    _validate(min_distance, limit, max_distance, node_budget)
    account_links = account_links or {}
    excluded_users = set(exclude_user_ids or ())

    source = index.index_of.get(source_person_id) if source_person_id else None
    if source is None:
        return RelativesResult(status=STATUS_NO_LINKED_PERSON, message=NO_LINKED_PERSON_MESSAGE)

    source_account = account_links.get(source_person_id)
    if source_account:
        excluded_users.add(source_account.id)

    search = breadth_first_search(index, source, max_distance, node_budget)

    candidates = []
    for slot in search.order:
        distance = search.distance[slot]
        if slot == source or distance < min_distance:
            continue
        person = index.persons[slot]
        user = account_links.get(person.id)
        if user and user.id in excluded_users:
            continue
        candidates.append((distance, person.id, slot))

    if not candidates:
        return RelativesResult(status=STATUS_NO_RELATIVES, message=NO_RELATIVES_MESSAGE)

    candidates.sort(key=lambda c: (c[0], c[1]))

    suggestions = []
    for distance, person_id, slot in candidates[:limit]:
        slots, hops = search.path_to(slot)
        suggestions.append(
            RelativeSuggestion(
                person=index.persons[slot],
                relationship_path=relationship_label(hops),
                distance=distance,
                user=account_links.get(person_id),
                path=hops,
                path_ids=[index.id_at(s) for s in slots],
            )
        )

    return RelativesResult(suggestions=suggestions, status=STATUS_OK)


def find_relatives(
    source_person_id: str | None,
    min_distance: int,
    limit: int,
    persons: Sequence[Person],
    relationships: Iterable[Relationship],
    account_links: Mapping[str, UserRef] | None = None,
    max_distance: int | None = DEFAULT_MAX_DISTANCE,
    node_budget: int = DEFAULT_NODE_BUDGET,
    exclude_user_ids: Iterable[str] | None = None,
) -> RelativesResult:
    """Suggest relatives of a person ranked by relationship distance.

    Args:
        source_person_id: The person linked to the requesting account.
        min_distance: Only suggest persons at least this many hops away.
        limit: Maximum number of suggestions.
        persons: All person records.
        relationships: All relationship edges.
        account_links: Person id -> linked user account.
        max_distance: Do not search further than this many hops (None = no bound).
        node_budget: Stop searching after discovering this many persons.
        exclude_user_ids: Accounts to leave out, e.g. already contacted users.

    Returns:
        RelativesResult sorted by distance then person id. A source that is
        missing from the graph yields status "no_linked_person" and an
        explanatory message rather than an error.

    Raises:
        ValueError: For negative distances or a limit or budget below 1.
    """
    _validate(min_distance, limit, max_distance, node_budget)
    index = GraphIndex.build(persons, relationships)
    return find_relatives_in_index(
        index,
        source_person_id,
        min_distance,
        limit,
        account_links=account_links,
        max_distance=max_distance,
        node_budget=node_budget,
        exclude_user_ids=exclude_user_ids,
    )
