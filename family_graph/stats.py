"""Aggregate statistics over a set of persons and relationships."""

from collections.abc import Iterable, Sequence

from .constants import FEMALE, GENDERS, MALE
from .graph_index import GraphIndex
from .helpers import lifespan_years
from .models import Person, Relationship, TreeStats


def _member_ref(person: Person) -> dict:
    return {
        "id": person.id,
        "name": person.full_name(),
        "birth_year": person.birth_date.year if person.birth_date else None,
    }


def _generation_count(index: GraphIndex) -> int:
    """Number of persons on the longest parent -> child chain.

    Longest path over the parent graph with an iterative DFS. Edges back to
    a node still on the DFS stack close a cycle and are ignored.
    """
    n = len(index)
    if n == 0:
        return 0

    chain = [0] * n
    status = bytearray(n)  # 0 = new, 1 = on stack, 2 = done

    for start in range(n):
        if status[start]:
            continue
        status[start] = 1
        stack = [(start, 0)]
        while stack:
            slot, pos = stack[-1]
            children = index.children[slot]
            if pos < len(children):
                stack[-1] = (slot, pos + 1)
                child = children[pos]
                if status[child] == 0:
                    status[child] = 1
                    stack.append((child, 0))
                continue

            best = 0
            for child in children:
                if status[child] == 2 and chain[child] > best:
                    best = chain[child]
            chain[slot] = best + 1
            status[slot] = 2
            stack.pop()

    return max(chain)


def calculate_tree_stats(
    persons: Sequence[Person],
    relationships: Iterable[Relationship],
) -> TreeStats:
    """Compute statistics for exactly the given persons.

    Edges with an end outside ``persons`` are ignored, so passing a subtree's
    scoped persons never leaks in global totals. Average lifespan is None
    when no deceased person has both dates recorded.
    """
    index = GraphIndex.build(persons, relationships)
    members = index.persons

    gender_counts = {gender: 0 for gender in GENDERS}
    gender_counts["UNKNOWN"] = 0
    living = 0
    lifespans = []
    oldest = None
    youngest_living = None

    for person in members:
        gender_counts[person.gender if person.gender in GENDERS else "UNKNOWN"] += 1

        if person.is_living:
            living += 1
        elif person.birth_date and person.death_date and person.death_date >= person.birth_date:
            lifespans.append(lifespan_years(person.birth_date, person.death_date))

        if person.birth_date:
            if oldest is None or person.birth_date < oldest.birth_date:
                oldest = person
            if person.is_living and (
                youngest_living is None or person.birth_date > youngest_living.birth_date
            ):
                youngest_living = person

    return TreeStats(
        total_members=len(members),
        living_count=living,
        deceased_count=len(members) - living,
        male_count=gender_counts[MALE],
        female_count=gender_counts[FEMALE],
        gender_counts=gender_counts,
        marriage_count=sum(len(s) for s in index.spouses) // 2,
        generation_count=_generation_count(index),
        average_lifespan=round(sum(lifespans) / len(lifespans), 1) if lifespans else None,
        oldest_member=_member_ref(oldest) if oldest else None,
        youngest_living=_member_ref(youngest_living) if youngest_living else None,
    )
