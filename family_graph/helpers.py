"""Utility functions for dates, names and ages."""

import re
from datetime import date, datetime

from .constants import GEDCOM_MONTHS, GEDCOM_SEX_MAP, GENDERS

_GEDCOM_DATE_RE = re.compile(
    r"(?:(?P<day>\d{1,2})\s+)?(?:(?P<month>[A-Z]{3})\s+)?(?P<year>\d{4})\b",
    re.IGNORECASE,
)


def extract_year(value) -> int | None:
    """Extract year from a date, datetime or date string."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.year
    match = re.search(r"\b(\d{4})\b", str(value))
    return int(match.group(1)) if match else None


def parse_date(value) -> date | None:
    """Parse a date from a date object, an ISO string or a GEDCOM date string.

    GEDCOM qualifiers (ABT, BEF, AFT, BET ... AND ...) are ignored and the
    first concrete date is used. Missing day or month default to 1.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    match = _GEDCOM_DATE_RE.search(text)
    if not match:
        return None
    month_abbr = (match.group("month") or "").upper()
    if month_abbr and month_abbr not in GEDCOM_MONTHS:
        month_abbr = ""
    month = GEDCOM_MONTHS.get(month_abbr, 1)
    day = int(match.group("day")) if match.group("day") and month_abbr else 1
    try:
        return date(int(match.group("year")), month, day)
    except ValueError:
        return None


def normalize_gender(value: str | None) -> str | None:
    """Normalize a gender value (MALE/FEMALE/OTHER or GEDCOM M/F/U/X)."""
    if not value:
        return None
    upper = str(value).strip().upper()
    if upper in GENDERS:
        return upper
    return GEDCOM_SEX_MAP.get(upper)


def format_person_name(
    first_name: str,
    last_name: str,
    middle_name: str | None = None,
    maiden_name: str | None = None,
    nickname: str | None = None,
) -> str:
    """Format a full display name, e.g. 'Mary Ann Smith (née Jones) "Polly"'."""
    parts = [first_name]
    if middle_name:
        parts.append(middle_name)
    parts.append(last_name)
    name = " ".join(p for p in parts if p)

    if maiden_name:
        name += f" (née {maiden_name})"
    if nickname:
        name += f' "{nickname}"'

    return name


def calculate_age(birth_date: date, death_date: date | None = None, today: date | None = None) -> int:
    """Calculate age in whole years at death, or as of today if still living."""
    end = death_date or today or date.today()
    age = end.year - birth_date.year
    if (end.month, end.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def lifespan_years(birth_date: date, death_date: date) -> float:
    """Lifespan in fractional years between two dates."""
    return (death_date - birth_date).days / 365.25
