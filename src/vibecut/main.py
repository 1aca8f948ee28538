"""Subcommand dispatcher for vibecut.

Usage:
    vibecut edit      clip.mp4 --prompt "make it energetic"
    vibecut batch     --manifest edits.yaml --workers 4
    vibecut license   ABC-123 [--grant | --revoke]
    vibecut history
    vibecut init-db
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="vibecut",
        description="Prompt-driven video edits with ffmpeg.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("edit", help="Edit one video from a vibe prompt")
    subparsers.add_parser("batch", help="Run edits from a YAML manifest")
    subparsers.add_parser("license", help="Check, grant, or revoke a license key")
    subparsers.add_parser("history", help="List recorded edits")
    subparsers.add_parser("init-db", help="Create the database tables")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "edit":
        from .edit_cli import main as edit_main
        edit_main(remaining)
    elif parsed.command == "batch":
        from .batch_cli import main as batch_main
        batch_main(remaining)
    elif parsed.command == "license":
        from .db_cli import license_main
        license_main(remaining)
    elif parsed.command == "history":
        from .db_cli import history_main
        history_main(remaining)
    elif parsed.command == "init-db":
        from .db_cli import init_db_main
        init_db_main(remaining)


if __name__ == "__main__":
    main()
