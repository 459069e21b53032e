"""Constants for relationship types, traversal defaults and labels."""

# Relationship edge types
PARENT_CHILD = "PARENT_CHILD"
ADOPTED = "ADOPTED"
STEP_CHILD = "STEP_CHILD"
FOSTER = "FOSTER"
SPOUSE = "SPOUSE"

# All of these are walked as parent -> child for traversal purposes
PARENT_CHILD_TYPES = frozenset({PARENT_CHILD, ADOPTED, STEP_CHILD, FOSTER})

# Gender values
MALE = "MALE"
FEMALE = "FEMALE"
OTHER = "OTHER"
GENDERS = (MALE, FEMALE, OTHER)

# GEDCOM SEX values -> gender
GEDCOM_SEX_MAP = {"M": MALE, "F": FEMALE, "U": None, "X": OTHER}

# Tree directions
ANCESTORS = "ancestors"
DESCENDANTS = "descendants"
BOTH = "both"
DIRECTIONS = (ANCESTORS, DESCENDANTS, BOTH)

DEFAULT_DIRECTION = BOTH
DEFAULT_MAX_DEPTH = 10

# Relative discovery defaults
DEFAULT_MIN_DISTANCE = 3
DEFAULT_MAX_DISTANCE = 6
DEFAULT_RELATIVES_LIMIT = 10
DEFAULT_NODE_BUDGET = 5000

# Lineage helpers default generation bound
DEFAULT_LINEAGE_GENERATIONS = 5

# Path hop kinds
HOP_PARENT = "parent"
HOP_CHILD = "child"
HOP_SPOUSE = "spouse"

# Relatives result statuses
STATUS_OK = "ok"
STATUS_NO_LINKED_PERSON = "no_linked_person"
STATUS_NO_RELATIVES = "no_relatives"

NO_LINKED_PERSON_MESSAGE = "Link your profile to a family member to see relative suggestions"
NO_RELATIVES_MESSAGE = "No distant relatives found"

# Month abbreviations used in GEDCOM dates
GEDCOM_MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}
