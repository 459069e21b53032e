"""MCP resource definitions for the family graph server."""

import json

from .core import _get_family_tree, _get_person, _get_tree_statistics


def register_resources(mcp):
    """Register all MCP resources with the server."""

    @mcp.resource("family://person/{id}")
    def resource_person(id: str) -> str:
        """Get person record by ID."""
        person = _get_person(id)
        if person:
            return json.dumps(person)
        return f"Person {id} not found"

    @mcp.resource("family://stats")
    def resource_stats() -> str:
        """Get statistics for the whole dataset."""
        return json.dumps(_get_tree_statistics())

    @mcp.resource("family://tree")
    def resource_tree() -> str:
        """Get the default family tree (oldest root, both directions)."""
        return json.dumps(_get_family_tree())
