"""Data models for family graph records and engine output."""

from dataclasses import dataclass, field
from datetime import date

from .constants import PARENT_CHILD_TYPES, SPOUSE
from .helpers import format_person_name


@dataclass(frozen=True)
class Person:
    id: str
    first_name: str = ""
    last_name: str = ""
    middle_name: str | None = None
    maiden_name: str | None = None
    nickname: str | None = None
    gender: str | None = None  # MALE, FEMALE, OTHER or None
    birth_date: date | None = None
    death_date: date | None = None
    is_living: bool = True
    is_verified: bool = False
    profile_image: str | None = None
    occupation: str | None = None

    def full_name(self) -> str:
        parts = [self.first_name, self.last_name]
        return " ".join(p for p in parts if p)

    def display_name(self) -> str:
        return format_person_name(
            self.first_name,
            self.last_name,
            middle_name=self.middle_name,
            maiden_name=self.maiden_name,
            nickname=self.nickname,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.full_name(),
            "display_name": self.display_name(),
            "first_name": self.first_name,
            "middle_name": self.middle_name,
            "last_name": self.last_name,
            "maiden_name": self.maiden_name,
            "nickname": self.nickname,
            "gender": self.gender,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "death_date": self.death_date.isoformat() if self.death_date else None,
            "is_living": self.is_living,
            "is_verified": self.is_verified,
            "profile_image": self.profile_image,
            "occupation": self.occupation,
        }

    def to_summary(self) -> dict:
        """Short summary for list views."""
        return {
            "id": self.id,
            "name": self.full_name(),
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "death_date": self.death_date.isoformat() if self.death_date else None,
        }


@dataclass(frozen=True)
class Relationship:
    type: str  # PARENT_CHILD, ADOPTED, STEP_CHILD, FOSTER, SPOUSE, ...
    parent_id: str | None = None
    child_id: str | None = None
    spouse1_id: str | None = None
    spouse2_id: str | None = None
    id: str | None = None

    @property
    def is_parent_child(self) -> bool:
        return self.type in PARENT_CHILD_TYPES

    @property
    def is_spouse(self) -> bool:
        return self.type == SPOUSE

    def endpoints(self) -> tuple[str | None, str | None]:
        """Return the two person ids this edge connects, in edge order."""
        if self.is_spouse:
            return self.spouse1_id, self.spouse2_id
        return self.parent_id, self.child_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "parent_id": self.parent_id,
            "child_id": self.child_id,
            "spouse1_id": self.spouse1_id,
            "spouse2_id": self.spouse2_id,
        }


@dataclass(frozen=True)
class UserRef:
    id: str
    name: str | None = None
    image: str | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "image": self.image}


@dataclass
class TreeNode:
    person: Person
    depth: int = 0
    spouses: list[Person] = field(default_factory=list)
    children: list["TreeNode"] = field(default_factory=list)
    parents: list["TreeNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.person.id

    def iter_nodes(self):
        """Yield this node and every node below it, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.parents))
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict:
        return _tree_node_to_dict(self)


def _person_node_dict(person: Person) -> dict:
    """Render a person the way the tree view payload expects."""
    return {
        "id": person.id,
        "name": person.full_name(),
        "first_name": person.first_name,
        "last_name": person.last_name,
        "gender": person.gender,
        "birth_date": person.birth_date.isoformat() if person.birth_date else None,
        "death_date": person.death_date.isoformat() if person.death_date else None,
        "profile_image": person.profile_image,
        "is_living": person.is_living,
        "attributes": {
            "birth_year": str(person.birth_date.year) if person.birth_date else None,
            "death_year": str(person.death_date.year) if person.death_date else None,
            "occupation": person.occupation,
            "maiden_name": person.maiden_name,
        },
    }


def _tree_node_to_dict(root: TreeNode) -> dict:
    # Iterative so deep trees never hit the recursion limit
    result = _person_node_dict(root.person)
    stack = [(root, result)]
    while stack:
        node, out = stack.pop()
        out["depth"] = node.depth
        out["spouses"] = [_person_node_dict(s) for s in node.spouses]
        for key, branch in (("children", node.children), ("parents", node.parents)):
            rendered = []
            for child in branch:
                child_out = _person_node_dict(child.person)
                rendered.append(child_out)
                stack.append((child, child_out))
            out[key] = rendered
    return result


@dataclass
class TreeStats:
    total_members: int = 0
    living_count: int = 0
    deceased_count: int = 0
    male_count: int = 0
    female_count: int = 0
    gender_counts: dict[str, int] = field(default_factory=dict)
    marriage_count: int = 0
    generation_count: int = 0
    average_lifespan: float | None = None  # None = not applicable
    oldest_member: dict | None = None
    youngest_living: dict | None = None

    def to_dict(self) -> dict:
        return {
            "total_members": self.total_members,
            "living_count": self.living_count,
            "deceased_count": self.deceased_count,
            "male_count": self.male_count,
            "female_count": self.female_count,
            "gender_counts": dict(self.gender_counts),
            "marriage_count": self.marriage_count,
            "generation_count": self.generation_count,
            "average_lifespan": self.average_lifespan,
            "oldest_member": self.oldest_member,
            "youngest_living": self.youngest_living,
        }


@dataclass
class RelativeSuggestion:
    person: Person
    relationship_path: str
    distance: int
    user: UserRef | None = None
    path: list[str] = field(default_factory=list)  # hop kinds: parent, child, spouse
    path_ids: list[str] = field(default_factory=list)

    @property
    def has_account(self) -> bool:
        return self.user is not None

    def to_dict(self) -> dict:
        return {
            "person": self.person.to_dict(),
            "user": self.user.to_dict() if self.user else None,
            "relationship_path": self.relationship_path,
            "distance": self.distance,
            "has_account": self.has_account,
            "path": list(self.path),
            "path_ids": list(self.path_ids),
        }


@dataclass
class RelativesResult:
    suggestions: list[RelativeSuggestion] = field(default_factory=list)
    status: str = "ok"
    message: str | None = None

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "message": self.message,
            "data": [s.to_dict() for s in self.suggestions],
        }
