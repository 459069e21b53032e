"""Global state: configuration and the loaded dataset snapshot.

The snapshot is read-only once loaded. Every engine call builds its own
GraphIndex from these collections, so concurrent tool calls share nothing
mutable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from .constants import DEFAULT_MAX_DEPTH, DEFAULT_NODE_BUDGET

if TYPE_CHECKING:
    from .models import Person, Relationship, UserRef

# Configuration (set by configure() at startup)
DATA_FILE: Path | None = None
HOME_PERSON_ID: str | None = None
TREE_MAX_DEPTH: int = DEFAULT_MAX_DEPTH
RELATIVES_NODE_BUDGET: int = DEFAULT_NODE_BUDGET

# Dataset snapshot (populated at startup by load_dataset)
persons: list[Person] = []
relationships: list[Relationship] = []
account_links: dict[str, UserRef] = {}  # person id -> linked user account
users_by_id: dict[str, UserRef] = {}
user_person_ids: dict[str, str] = {}  # user id -> linked person id


def _resolve_data_path() -> Path:
    """Get dataset path from FAMILY_DATA_FILE env var.

    Raises:
        FileNotFoundError: If FAMILY_DATA_FILE env var not set or file doesn't exist.
    """
    env_path = os.getenv("FAMILY_DATA_FILE")
    if not env_path:
        raise FileNotFoundError(
            "FAMILY_DATA_FILE environment variable not set.\n"
            "Set it to the path of your family dataset (.json or .ged):\n"
            "  export FAMILY_DATA_FILE=/path/to/family.json\n"
            "Or use the --data-file CLI argument:\n"
            "  family-graph-server --data-file /path/to/family.json"
        )
    path = Path(env_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Family dataset not found: {path}")
    return path


def _int_env(name: str, default: int) -> int:
    """Read a positive integer env var, falling back to default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise RuntimeError(f"{name} must be a positive integer, got {value}")
    return value


def configure() -> None:
    """Initialize configuration from environment. Called at startup.

    Loads .env file if present, then reads FAMILY_* settings from environment.
    Note: load_dotenv() does NOT override existing env vars by default.
    """
    global DATA_FILE, TREE_MAX_DEPTH, RELATIVES_NODE_BUDGET
    load_dotenv()  # Load .env, won't override existing env vars
    DATA_FILE = _resolve_data_path()
    TREE_MAX_DEPTH = _int_env("FAMILY_TREE_MAX_DEPTH", DEFAULT_MAX_DEPTH)
    RELATIVES_NODE_BUDGET = _int_env("FAMILY_RELATIVES_NODE_BUDGET", DEFAULT_NODE_BUDGET)


def reset() -> None:
    """Clear the loaded snapshot in place (module-level references stay valid)."""
    persons.clear()
    relationships.clear()
    account_links.clear()
    users_by_id.clear()
    user_person_ids.clear()
