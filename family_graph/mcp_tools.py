"""MCP tool definitions for the family graph server."""

from .core import (
    _get_ancestors,
    _get_descendants,
    _get_family_tree,
    _get_home_person,
    _get_person,
    _get_relationship_path,
    _get_relatives,
    _get_siblings,
    _get_topmost_ancestor,
    _get_tree_statistics,
)
from .search import _search_persons


def register_tools(mcp):
    """Register all MCP tools with the server."""

    # ============== CONTEXT TOOLS (2) ==============

    @mcp.tool()
    def get_home_person() -> dict | None:
        """
        Get the home person - the default anchor for trees and relative discovery.

        Configured with FAMILY_HOME_PERSON_ID, otherwise the oldest person
        with no recorded parents.

        Returns:
            Full person record for the home person
        """
        return _get_home_person()

    @mcp.tool()
    def get_tree_statistics() -> dict:
        """
        Get statistics about the whole family dataset.

        Returns:
            Counts (living, deceased, gender breakdown, marriages), generation
            count, average lifespan, oldest member and youngest living member
        """
        return _get_tree_statistics()

    # ============== LOOKUP TOOLS (2) ==============

    @mcp.tool()
    def get_person(person_id: str) -> dict | None:
        """
        Get a person's record by ID.

        Args:
            person_id: The person ID (GEDCOM IDs work with or without @ symbols)

        Returns:
            Person record with names, gender, dates and flags
        """
        return _get_person(person_id)

    @mcp.tool()
    def search_persons(query: str, max_results: int = 50) -> list[dict]:
        """
        Search for persons by name (first, middle, last, maiden or nickname).

        Substring matches come first, then fuzzy matches for misspellings.

        Args:
            query: Name to search for (case-insensitive)
            max_results: Maximum results to return (default 50)

        Returns:
            List of matching persons with summary info and a match score
        """
        return _search_persons(query, max_results)

    # ============== TREE TOOLS (5) ==============

    @mcp.tool()
    def get_family_tree(
        root_person_id: str | None = None,
        direction: str = "both",
        max_depth: int | None = None,
        anchor_to_top: bool = False,
    ) -> dict:
        """
        Build a family tree view with statistics for exactly the rendered subtree.

        Each person appears at most once in the tree, even with cousin
        marriages or cyclic data. Spouses are attached at every level.

        Args:
            root_person_id: Person to root the tree at. Omit to use the oldest
                person with no recorded parents.
            direction: "ancestors" | "descendants" | "both" (default "both")
            max_depth: Generations to expand from the root (default 10)
            anchor_to_top: Start from the topmost ancestor of root_person_id

        Returns:
            {"tree": nested tree or null, "stats": subtree statistics or null,
             "root_person_id": the root actually used}
        """
        return _get_family_tree(root_person_id, direction, max_depth, anchor_to_top)

    @mcp.tool()
    def get_ancestors(person_id: str, generations: int = 5) -> list[dict]:
        """
        List a person's ancestors, nearest generation first.

        Args:
            person_id: Starting person's ID
            generations: How many generations back (default 5)
        """
        return _get_ancestors(person_id, generations)

    @mcp.tool()
    def get_descendants(person_id: str, generations: int = 5) -> list[dict]:
        """
        List a person's descendants, nearest generation first.

        Args:
            person_id: Starting person's ID
            generations: How many generations down (default 5)
        """
        return _get_descendants(person_id, generations)

    @mcp.tool()
    def get_siblings(person_id: str) -> list[dict]:
        """
        List a person's siblings, including half-siblings.

        Args:
            person_id: The person's ID
        """
        return _get_siblings(person_id)

    @mcp.tool()
    def get_topmost_ancestor(person_id: str) -> dict | None:
        """
        Walk up from a person to the top of their recorded lineage.

        Args:
            person_id: Starting person's ID

        Returns:
            Summary of the topmost ancestor (the person itself if no parents)
        """
        return _get_topmost_ancestor(person_id)

    # ============== RELATIONSHIP TOOLS (2) ==============

    @mcp.tool()
    def get_relatives(
        person_id: str | None = None,
        user_id: str | None = None,
        min_distance: int = 3,
        max_distance: int | None = 6,
        limit: int = 10,
        exclude_user_ids: list[str] | None = None,
    ) -> dict:
        """
        Suggest relatives to connect with, ranked by relationship distance.

        Distance counts parent, child and spouse steps equally. Persons linked
        to the same account as the source are never suggested.

        Args:
            person_id: Source person. Defaults to the person linked to user_id,
                then to the home person.
            user_id: Account whose linked person is the source
            min_distance: Minimum number of steps away (default 3)
            max_distance: Maximum number of steps to search (default 6)
            limit: Maximum suggestions (default 10)
            exclude_user_ids: Accounts to leave out, e.g. already contacted

        Returns:
            {"status", "message", "data": [suggestions], "source_person_id"}
            where status is "ok", "no_linked_person" or "no_relatives"
        """
        return _get_relatives(
            person_id, user_id, min_distance, max_distance, limit, exclude_user_ids
        )

    @mcp.tool()
    def get_relationship_path(id1: str, id2: str, max_depth: int = 10) -> dict:
        """
        Find the shortest relationship path between two persons and name it.

        Args:
            id1: First person's ID
            id2: Second person's ID
            max_depth: Maximum number of steps to search (default 10)

        Returns:
            Both persons, the path of persons between them, the hops taken
            and a label such as "1st Cousin" or "Parent-in-law"

        Examples:
            get_relationship_path("p1", "p9")
        """
        return _get_relationship_path(id1, id2, max_depth)
