"""Entry point for running the family graph server as a module.

Usage:
    python -m family_graph --data-file /path/to/family.json
    family-graph-server --data-file /path/to/family.json
"""

import argparse
import os


def main():
    """Main entry point for the family graph MCP server."""
    parser = argparse.ArgumentParser(
        description="Family Graph Server - family trees and relative discovery via MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  family-graph-server --data-file ~/family.json
  family-graph-server -f ~/tree.ged --home-person @I123@

Environment variables:
  FAMILY_DATA_FILE              Path to dataset (.json snapshot or .ged file)
  FAMILY_HOME_PERSON_ID         ID of home person (default: oldest root)
  FAMILY_TREE_MAX_DEPTH         Default tree depth (default: 10)
  FAMILY_RELATIVES_NODE_BUDGET  Max persons visited per relative search (default: 5000)
""",
    )
    parser.add_argument(
        "--data-file",
        "-f",
        metavar="PATH",
        help="Path to dataset file (or set FAMILY_DATA_FILE env var)",
    )
    parser.add_argument(
        "--home-person",
        "-p",
        metavar="ID",
        help="ID of home person (default: oldest person with no recorded parents)",
    )
    args = parser.parse_args()

    # CLI args override env vars
    if args.data_file:
        os.environ["FAMILY_DATA_FILE"] = args.data_file
    if args.home_person:
        os.environ["FAMILY_HOME_PERSON_ID"] = args.home_person

    # Import and initialize AFTER setting env vars
    from . import initialize, mcp

    initialize()
    mcp.run()


if __name__ == "__main__":
    main()
