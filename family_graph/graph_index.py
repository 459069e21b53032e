"""Graph index over person and relationship records.

Persons live in a list addressed by a dense integer index; adjacency lists
store those integers. ``index_of`` maps person ids to slots at the boundary,
so traversal code works with ints and visited sets can be bytearrays.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .models import Person, Relationship

logger = logging.getLogger(__name__)


@dataclass
class GraphIndex:
    persons: list[Person] = field(default_factory=list)
    index_of: dict[str, int] = field(default_factory=dict)
    children: list[list[int]] = field(default_factory=list)
    parents: list[list[int]] = field(default_factory=list)
    spouses: list[list[int]] = field(default_factory=list)
    skipped_edges: int = 0

    @classmethod
    def build(cls, persons: Iterable[Person], relationships: Iterable[Relationship]) -> GraphIndex:
        """Build the index in O(P + E).

        Duplicate person ids keep one slot (the first position) holding the
        last record seen. Edges that are self-loops, have a missing end or
        reference an unknown person are skipped. Duplicate edges collapse.
        """
        index = cls()
        for person in persons:
            slot = index.index_of.get(person.id)
            if slot is None:
                index.index_of[person.id] = len(index.persons)
                index.persons.append(person)
                index.children.append([])
                index.parents.append([])
                index.spouses.append([])
            else:
                logger.debug(f"Duplicate person id {person.id}; keeping last record")
                index.persons[slot] = person

        seen_parent_edges: set[tuple[int, int]] = set()
        seen_spouse_edges: set[tuple[int, int]] = set()

        for rel in relationships:
            if not (rel.is_parent_child or rel.is_spouse):
                continue
            a_id, b_id = rel.endpoints()
            a = index.index_of.get(a_id) if a_id else None
            b = index.index_of.get(b_id) if b_id else None
            if a is None or b is None or a == b:
                index.skipped_edges += 1
                logger.debug(f"Skipping malformed {rel.type} edge {a_id!r} -> {b_id!r}")
                continue

            if rel.is_parent_child:
                if (a, b) in seen_parent_edges:
                    continue
                seen_parent_edges.add((a, b))
                index.children[a].append(b)
                index.parents[b].append(a)
            else:
                key = (a, b) if a < b else (b, a)
                if key in seen_spouse_edges:
                    continue
                seen_spouse_edges.add(key)
                index.spouses[a].append(b)
                index.spouses[b].append(a)

        if index.skipped_edges:
            logger.info(f"Skipped {index.skipped_edges} malformed relationship edges")

        return index

    def __len__(self) -> int:
        return len(self.persons)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self.index_of

    def get(self, person_id: str) -> Person | None:
        slot = self.index_of.get(person_id)
        return self.persons[slot] if slot is not None else None

    def id_at(self, slot: int) -> str:
        return self.persons[slot].id

    def _ids(self, adjacency: list[list[int]], person_id: str) -> list[str]:
        slot = self.index_of.get(person_id)
        if slot is None:
            return []
        return [self.persons[i].id for i in adjacency[slot]]

    def children_of(self, person_id: str) -> list[str]:
        return self._ids(self.children, person_id)

    def parents_of(self, person_id: str) -> list[str]:
        return self._ids(self.parents, person_id)

    def spouses_of(self, person_id: str) -> list[str]:
        return self._ids(self.spouses, person_id)

    def has_parents(self, slot: int) -> bool:
        return bool(self.parents[slot])
