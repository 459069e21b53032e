"""Family Graph Server - FastMCP server over a family relationship graph.

Builds depth-bounded family tree views, subtree statistics and relative
suggestions from flat person and relationship records. The engine modules
(graph_index, roots, tree, stats, relatives, labels, lineage) are pure and
can be used without the server.

Usage:
    family-graph-server --data-file /path/to/family.json
    FAMILY_DATA_FILE=/path/to/family.json python -m family_graph
"""

from fastmcp import FastMCP

from .mcp_resources import register_resources
from .mcp_tools import register_tools
from .parsing import load_dataset
from .relatives import find_relatives
from .state import configure
from .stats import calculate_tree_stats
from .telemetry import initialize_tracing
from .tree import build_family_tree, collect_tree_node_ids

# Initialize tracing FIRST (before creating server)
# This is a no-op if FAMILY_GRAPH_TRACING_ENABLED is not set to 'true'
initialize_tracing()

# Initialize FastMCP server
mcp = FastMCP("Family Graph Server")

# Register tools and resources
register_tools(mcp)
register_resources(mcp)

_initialized = False


def initialize():
    """Initialize the server: configure from env vars and load the dataset.

    Called automatically on first use or can be called explicitly.
    Safe to call multiple times.
    """
    global _initialized
    if _initialized:
        return
    configure()
    load_dataset()
    _initialized = True


__all__ = [
    "mcp",
    "initialize",
    "build_family_tree",
    "calculate_tree_stats",
    "collect_tree_node_ids",
    "find_relatives",
]
