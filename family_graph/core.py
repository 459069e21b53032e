"""Core operations over the loaded dataset, used by MCP tools and resources."""

from . import state
from .constants import (
    DEFAULT_DIRECTION,
    DEFAULT_LINEAGE_GENERATIONS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_DISTANCE,
    DEFAULT_MIN_DISTANCE,
    DEFAULT_RELATIVES_LIMIT,
)
from .graph_index import GraphIndex
from .labels import relationship_label
from .lineage import get_ancestors, get_descendants, get_siblings
from .relatives import find_relatives_in_index, trace_relationship
from .roots import find_topmost_ancestor
from .stats import calculate_tree_stats
from .telemetry import get_tracer
from .tree import build_tree_view


def _build_index() -> GraphIndex:
    with get_tracer().start_as_current_span("index.build") as span:
        index = GraphIndex.build(state.persons, state.relationships)
        span.set_attribute("index.persons", len(index))
        span.set_attribute("index.skipped_edges", index.skipped_edges)
        return index


def _normalize_lookup_id(id_str: str, index: GraphIndex) -> str:
    """Resolve a caller-supplied id against the index.

    GEDCOM-loaded ids are stored with @ symbols (e.g. '@I123@'), so a bare
    'I123' is retried in that form.
    """
    stripped = id_str.strip()
    if stripped in index or not stripped:
        return stripped
    wrapped = f"@{stripped.strip('@')}@"
    return wrapped if wrapped in index else stripped


def _summaries(index: GraphIndex, ids: list[str]) -> list[dict]:
    return [index.get(person_id).to_summary() for person_id in ids]


def _get_person(person_id: str) -> dict | None:
    index = _build_index()
    person = index.get(_normalize_lookup_id(person_id, index))
    return person.to_dict() if person else None


def _get_home_person() -> dict | None:
    """Get the home person record."""
    if not state.HOME_PERSON_ID:
        return None
    return _get_person(state.HOME_PERSON_ID)


def _get_family_tree(
    root_person_id: str | None = None,
    direction: str = DEFAULT_DIRECTION,
    max_depth: int | None = None,
    anchor_to_top: bool = False,
) -> dict:
    max_depth = max_depth if max_depth is not None else state.TREE_MAX_DEPTH
    index = _build_index()
    if root_person_id:
        root_person_id = _normalize_lookup_id(root_person_id, index)
        if root_person_id not in index:
            return {"error": f"Person {root_person_id} not found"}

    with get_tracer().start_as_current_span("tree.build") as span:
        span.set_attribute("tree.direction", direction)
        span.set_attribute("tree.max_depth", max_depth)
        try:
            view = build_tree_view(
                root_person_id,
                index.persons,
                state.relationships,
                direction=direction,
                max_depth=max_depth,
                anchor_to_top=anchor_to_top,
            )
        except ValueError as e:
            return {"error": str(e)}

        tree = view["tree"]
        stats = view["stats"]
        if stats is not None:
            span.set_attribute("tree.members", stats.total_members)
        return {
            "tree": tree.to_dict() if tree else None,
            "stats": stats.to_dict() if stats else None,
            "root_person_id": view["root_person_id"],
        }


def _get_tree_statistics() -> dict:
    """Statistics over the whole dataset."""
    with get_tracer().start_as_current_span("stats.calculate"):
        stats = calculate_tree_stats(state.persons, state.relationships).to_dict()
    stats["total_relationships"] = len(state.relationships)
    stats["linked_accounts"] = len(state.account_links)
    return stats


def _resolve_source(person_id: str | None, user_id: str | None) -> str | None:
    if person_id:
        return person_id
    if user_id:
        return state.user_person_ids.get(user_id)
    return state.HOME_PERSON_ID


def _get_relatives(
    person_id: str | None = None,
    user_id: str | None = None,
    min_distance: int = DEFAULT_MIN_DISTANCE,
    max_distance: int | None = DEFAULT_MAX_DISTANCE,
    limit: int = DEFAULT_RELATIVES_LIMIT,
    exclude_user_ids: list[str] | None = None,
) -> dict:
    index = _build_index()
    source = _resolve_source(person_id, user_id)
    if source:
        source = _normalize_lookup_id(source, index)

    with get_tracer().start_as_current_span("relatives.find") as span:
        span.set_attribute("relatives.min_distance", min_distance)
        span.set_attribute("relatives.limit", limit)
        try:
            result = find_relatives_in_index(
                index,
                source,
                min_distance,
                limit,
                account_links=state.account_links,
                max_distance=max_distance,
                node_budget=state.RELATIVES_NODE_BUDGET,
                exclude_user_ids=exclude_user_ids,
            )
        except ValueError as e:
            return {"error": str(e)}

        span.set_attribute("relatives.status", result.status)
        response = result.to_dict()
        response["source_person_id"] = source if source in index else None
        return response


def _get_relationship_path(id1: str, id2: str, max_depth: int = DEFAULT_MAX_DEPTH) -> dict:
    index = _build_index()
    id1 = _normalize_lookup_id(id1, index)
    id2 = _normalize_lookup_id(id2, index)
    for person_id in (id1, id2):
        if person_id not in index:
            return {"error": f"Person {person_id} not found"}

    with get_tracer().start_as_current_span("relatives.path"):
        traced = trace_relationship(index, id1, id2, max_depth)

    result = {
        "person1": index.get(id1).to_summary(),
        "person2": index.get(id2).to_summary(),
        "path": None,
        "hops": None,
        "distance": None,
        "relationship": None,
    }
    if traced is None:
        result["message"] = f"No relationship found within {max_depth} steps"
        return result

    ids, hops = traced
    result.update(
        {
            "path": _summaries(index, ids),
            "hops": hops,
            "distance": len(hops),
            "relationship": relationship_label(hops),
        }
    )
    return result


def _get_ancestors(person_id: str, generations: int = DEFAULT_LINEAGE_GENERATIONS) -> list[dict]:
    index = _build_index()
    with get_tracer().start_as_current_span("lineage.ancestors"):
        ids = get_ancestors(index, _normalize_lookup_id(person_id, index), generations)
    return _summaries(index, ids)


def _get_descendants(person_id: str, generations: int = DEFAULT_LINEAGE_GENERATIONS) -> list[dict]:
    index = _build_index()
    with get_tracer().start_as_current_span("lineage.descendants"):
        ids = get_descendants(index, _normalize_lookup_id(person_id, index), generations)
    return _summaries(index, ids)


def _get_siblings(person_id: str) -> list[dict]:
    index = _build_index()
    return _summaries(index, get_siblings(index, _normalize_lookup_id(person_id, index)))


def _get_topmost_ancestor(person_id: str) -> dict | None:
    index = _build_index()
    top = find_topmost_ancestor(index, _normalize_lookup_id(person_id, index))
    return index.get(top).to_summary() if top else None
