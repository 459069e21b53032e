"""Shared fixtures for family graph server tests."""

import os
from pathlib import Path

import pytest

# Set dataset env vars BEFORE importing any family_graph modules
# Set explicit test values so .env doesn't override them (load_dotenv won't override existing)
FIXTURES = Path(__file__).parent / "fixtures"
_TEST_DATASET = FIXTURES / "sample_family.json"
os.environ["FAMILY_DATA_FILE"] = str(_TEST_DATASET)
os.environ["FAMILY_HOME_PERSON_ID"] = ""  # Empty string = auto-detect the oldest root

from family_graph import initialize  # noqa: E402

initialize()

from family_graph import state  # noqa: E402
from family_graph.graph_index import GraphIndex  # noqa: E402


@pytest.fixture
def sample_persons():
    """Persons loaded from sample_family.json."""
    return list(state.persons)


@pytest.fixture
def sample_relationships():
    """Relationships loaded from sample_family.json (malformed edges included)."""
    return list(state.relationships)


@pytest.fixture
def sample_index(sample_persons, sample_relationships):
    """GraphIndex over the sample dataset."""
    return GraphIndex.build(sample_persons, sample_relationships)


@pytest.fixture
def home_person_id():
    """The auto-detected home person's ID."""
    return state.HOME_PERSON_ID


@pytest.fixture
def gedcom_path():
    """Path to the small GEDCOM fixture."""
    return FIXTURES / "sample.ged"
