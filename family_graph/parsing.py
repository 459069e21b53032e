"""Dataset loading: JSON snapshots and GEDCOM files into the state snapshot."""

import json
import logging
import os
from pathlib import Path

from ged4py import GedcomReader

from . import state
from .constants import PARENT_CHILD, SPOUSE
from .graph_index import GraphIndex
from .helpers import normalize_gender, parse_date
from .models import Person, Relationship, UserRef
from .roots import resolve_default_root

logger = logging.getLogger(__name__)


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _field(record: dict, key: str, default=None):
    """Read a field by snake_case key, falling back to its camelCase form."""
    if key in record:
        return record[key]
    return record.get(_camel(key), default)


def _text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def person_from_dict(record: dict) -> Person | None:
    """Build a Person from a JSON record, or None if it has no id."""
    person_id = _text(_field(record, "id"))
    if not person_id:
        return None

    birth_date = parse_date(_field(record, "birth_date"))
    death_date = parse_date(_field(record, "death_date"))
    is_living = _field(record, "is_living")
    if is_living is None:
        is_living = death_date is None

    profile_image = _field(record, "profile_image")
    if isinstance(profile_image, dict):
        profile_image = profile_image.get("url")

    return Person(
        id=person_id,
        first_name=_text(_field(record, "first_name")) or "",
        last_name=_text(_field(record, "last_name")) or "",
        middle_name=_text(_field(record, "middle_name")),
        maiden_name=_text(_field(record, "maiden_name")),
        nickname=_text(_field(record, "nickname")) or _text(_field(record, "nick_name")),
        gender=normalize_gender(_field(record, "gender")),
        birth_date=birth_date,
        death_date=death_date,
        is_living=bool(is_living),
        is_verified=bool(_field(record, "is_verified", False)),
        profile_image=_text(profile_image),
        occupation=_text(_field(record, "occupation")),
    )


def relationship_from_dict(record: dict) -> Relationship | None:
    """Build a Relationship from a JSON record, or None if it has no type."""
    rel_type = _text(_field(record, "type"))
    if not rel_type:
        return None
    return Relationship(
        type=rel_type.upper(),
        parent_id=_text(_field(record, "parent_id")),
        child_id=_text(_field(record, "child_id")),
        spouse1_id=_text(_field(record, "spouse1_id")),
        spouse2_id=_text(_field(record, "spouse2_id")),
        id=_text(_field(record, "id")),
    )


def load_json_dataset(path: Path) -> tuple[list[Person], list[Relationship], list[dict]]:
    """Read persons, relationships and user records from a JSON snapshot."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Dataset {path} must be a JSON object")

    persons = []
    for record in data.get("persons") or []:
        person = person_from_dict(record) if isinstance(record, dict) else None
        if person is None:
            logger.warning(f"Skipping person record without id: {record!r}")
            continue
        persons.append(person)

    relationships = []
    for record in data.get("relationships") or []:
        rel = relationship_from_dict(record) if isinstance(record, dict) else None
        if rel is None:
            logger.warning(f"Skipping relationship record without type: {record!r}")
            continue
        relationships.append(rel)

    users = [u for u in data.get("users") or [] if isinstance(u, dict) and u.get("id")]
    return persons, relationships, users


def normalize_id(ref) -> str | None:
    """Normalize a GEDCOM reference to a consistent ID string with @ symbols."""
    if ref is None:
        return None
    if hasattr(ref, "xref_id"):
        return ref.xref_id
    stripped = str(ref).strip("@")
    return f"@{stripped}@" if stripped else None


def _sub_value(record, tag: str) -> str | None:
    try:
        sub = record.sub_tag(tag)
        if sub and sub.value:
            return str(sub.value)
    except (AttributeError, KeyError):
        pass
    return None


def parse_name(record) -> tuple[str, str]:
    """Parse name from GEDCOM record, returning (given_name, surname)."""
    given = ""
    surname = ""
    name_rec = record.sub_tag("NAME")
    if name_rec and name_rec.value:
        value = name_rec.value
        if isinstance(value, tuple):
            # ged4py splits NAME into (given, surname, suffix)
            given = value[0] or ""
            surname = value[1] if len(value) > 1 and value[1] else ""
        else:
            parts = str(value).split("/")
            given = parts[0].strip()
            if len(parts) > 1:
                surname = parts[1].strip()
    if name_rec:
        given = _sub_value(name_rec, "GIVN") or given
        surname = _sub_value(name_rec, "SURN") or surname
    return given.strip(), surname.strip()


def _event_date(record, tag: str):
    event = record.sub_tag(tag)
    if not event:
        return None, False
    return parse_date(_sub_value(event, "DATE")), True


def load_gedcom_dataset(path: Path) -> tuple[list[Person], list[Relationship], list[dict]]:
    """Read persons and relationships from a GEDCOM file.

    FAM records become a SPOUSE edge between husband and wife plus a
    PARENT_CHILD edge from each parent to each child.
    """
    persons: list[Person] = []
    relationships: list[Relationship] = []

    with GedcomReader(str(path)) as reader:
        for record in reader.records0("INDI"):
            given, surname = parse_name(record)
            given_parts = given.split()
            birth_date, _ = _event_date(record, "BIRT")
            death_date, has_death = _event_date(record, "DEAT")
            persons.append(
                Person(
                    id=record.xref_id,
                    first_name=given_parts[0] if given_parts else "",
                    middle_name=" ".join(given_parts[1:]) or None,
                    last_name=surname,
                    gender=normalize_gender(_sub_value(record, "SEX")),
                    birth_date=birth_date,
                    death_date=death_date,
                    is_living=not has_death,
                    occupation=_sub_value(record, "OCCU"),
                )
            )

        for record in reader.records0("FAM"):
            parents = []
            children = []
            for sub in record.sub_records:
                if sub.tag in ("HUSB", "WIFE") and sub.value:
                    parents.append(normalize_id(sub.value))
                elif sub.tag == "CHIL" and sub.value:
                    children.append(normalize_id(sub.value))

            if len(parents) == 2:
                relationships.append(
                    Relationship(
                        type=SPOUSE,
                        spouse1_id=parents[0],
                        spouse2_id=parents[1],
                        id=f"{record.xref_id}:SPOUSE",
                    )
                )
            for parent_id in parents:
                for child_id in children:
                    relationships.append(
                        Relationship(
                            type=PARENT_CHILD,
                            parent_id=parent_id,
                            child_id=child_id,
                            id=f"{record.xref_id}:{parent_id}:{child_id}",
                        )
                    )

    return persons, relationships, []


def load_dataset() -> None:
    """Load the configured dataset into state and pick the home person.

    Requires configure() to be called first to set state.DATA_FILE.
    """
    if state.DATA_FILE is None:
        raise RuntimeError("configure() must be called before load_dataset()")
    if not state.DATA_FILE.exists():
        raise FileNotFoundError(f"Family dataset not found: {state.DATA_FILE}")

    if state.DATA_FILE.suffix.lower() == ".ged":
        persons, relationships, users = load_gedcom_dataset(state.DATA_FILE)
    else:
        persons, relationships, users = load_json_dataset(state.DATA_FILE)

    state.reset()
    state.persons.extend(persons)
    state.relationships.extend(relationships)

    known_ids = {p.id for p in persons}
    for record in users:
        user = UserRef(
            id=str(record["id"]),
            name=_text(record.get("name")),
            image=_text(record.get("image")),
        )
        state.users_by_id[user.id] = user
        person_id = _text(_field(record, "linked_person_id"))
        if person_id and person_id in known_ids:
            state.account_links[person_id] = user
            state.user_person_ids[user.id] = person_id
        elif person_id:
            logger.warning(f"User {user.id} is linked to unknown person {person_id}")

    logger.info(
        f"Loaded {len(state.persons)} persons, {len(state.relationships)} relationships "
        f"and {len(state.users_by_id)} users from {state.DATA_FILE}"
    )

    # Set home person from env var or fall back to the default tree root
    env_home = os.getenv("FAMILY_HOME_PERSON_ID")
    if env_home:
        state.HOME_PERSON_ID = env_home
    else:
        state.HOME_PERSON_ID = resolve_default_root(GraphIndex.build(persons, relationships))
