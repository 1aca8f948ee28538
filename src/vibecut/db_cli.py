"""CLI for the license/project database.

Usage:
    vibecut init-db --db sqlite:///vibe.db
    vibecut license ABC-123
    vibecut license ABC-123 --grant
    vibecut license ABC-123 --revoke
    vibecut history
"""

import argparse
import sys

from .config import load_config
from .errors import VibecutError
from .license import check_license
from .store import EditStore


def _store(parsed) -> EditStore:
    config = load_config(parsed.config)
    return EditStore.from_url(parsed.db or config["database"])


def _parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--db", default=None, help="SQLAlchemy database URL")
    return parser


def init_db_main(args=None):
    parser = _parser("Create the licenses and projects tables.")
    parsed = parser.parse_args(args)
    try:
        store = _store(parsed)
        store.init_schema()
    except VibecutError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Database ready: {store.engine.url}")


def license_main(args=None):
    parser = _parser("Check, grant, or revoke a license key.")
    parser.add_argument("key", help="License key")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--grant", action="store_true", help="Mark the key valid")
    action.add_argument("--revoke", action="store_true", help="Mark the key invalid")
    parsed = parser.parse_args(args)

    try:
        store = _store(parsed)
        if parsed.grant or parsed.revoke:
            store.set_license(parsed.key, valid=parsed.grant)
        valid = check_license(store, parsed.key)
    except VibecutError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("valid" if valid else "invalid")
    if not valid:
        sys.exit(2)


def history_main(args=None):
    parser = _parser("List recorded edits, oldest first.")
    parsed = parser.parse_args(args)
    try:
        records = _store(parsed).projects()
    except VibecutError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not records:
        print("No edits recorded.")
        return
    for i, r in enumerate(records):
        print(f"  {i}: {r.input_path} -> {r.output_path}  \"{r.prompt}\"")
