"""Person search by name with fuzzy matching."""

from rapidfuzz import fuzz, process

from . import state
from .telemetry import get_tracer


def _searchable_name(person) -> str:
    parts = [
        person.first_name,
        person.middle_name,
        person.last_name,
        person.maiden_name,
        person.nickname,
    ]
    return " ".join(p for p in parts if p).lower()


def _search_persons(query: str, max_results: int = 50, threshold: int = 70) -> list[dict]:
    """Search persons by first, middle, last, maiden or nick name.

    Case-insensitive substring matches rank first (score 100), followed by
    fuzzy matches scored with rapidfuzz WRatio at or above threshold.

    Returns:
        Person summaries with a "score" field, best first.
    """
    query_norm = query.strip().lower()
    if not query_norm or max_results <= 0:
        return []

    with get_tracer().start_as_current_span("search.persons") as span:
        span.set_attribute("search.query", query_norm)

        names = {i: _searchable_name(p) for i, p in enumerate(state.persons)}
        exact = [i for i, name in names.items() if query_norm in name]

        scored: dict[int, float] = {i: 100.0 for i in exact}
        if len(scored) < max_results:
            remaining = {i: name for i, name in names.items() if i not in scored}
            matches = process.extract(
                query_norm,
                remaining,
                scorer=fuzz.WRatio,
                limit=max_results - len(scored),
                score_cutoff=threshold,
            )
            for _name, score, i in matches:
                scored[i] = score

        ranked = sorted(scored.items(), key=lambda item: (-item[1], state.persons[item[0]].id))
        results = []
        for i, score in ranked[:max_results]:
            info = state.persons[i].to_summary()
            info["score"] = round(score, 1)
            results.append(info)

        span.set_attribute("search.result_count", len(results))
        return results
