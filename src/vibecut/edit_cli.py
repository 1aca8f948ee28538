"""CLI for a single prompt-driven edit.

Usage:
    vibecut edit clip.mp4 --prompt "make it energetic"
    vibecut edit clip.mp4 --prompt "chill, add animation" --license-key ABC-123
    vibecut edit clip.mp4 --prompt "action" --no-overlay --json
"""

import argparse
import json
import sys
from pathlib import Path

from .config import load_config
from .errors import VibecutError
from .log import setup_logging
from .pipeline import EditPipeline


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", default=None,
        help="YAML config file (default: $VIBECUT_CONFIG if set)",
    )
    parser.add_argument(
        "--db", default=None,
        help="SQLAlchemy database URL (overrides config)",
    )


def load_pipeline(parsed) -> EditPipeline:
    """Config + logging + pipeline from parsed --config/--db args."""
    config = load_config(parsed.config)
    if parsed.db:
        config["database"] = parsed.db
    setup_logging(config["log_level"])
    return EditPipeline.from_config(config)


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Edit a video from a natural-language vibe prompt.",
    )
    parser.add_argument("source", help="Path to source video")
    parser.add_argument("--prompt", required=True, help="Vibe prompt")
    parser.add_argument(
        "--license-key", default=None,
        help="License key; without a valid one the output is watermarked",
    )
    overlay = parser.add_mutually_exclusive_group()
    overlay.add_argument(
        "--overlay", dest="overlay", action="store_const", const=True,
        help="Always composite the animated overlay",
    )
    overlay.add_argument(
        "--no-overlay", dest="overlay", action="store_const", const=False,
        help="Never composite the animated overlay",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the outcome as JSON",
    )
    add_common_args(parser)
    parsed = parser.parse_args(args)

    if not Path(parsed.source).exists():
        parser.error(f"Source video not found: {parsed.source}")

    try:
        pipeline = load_pipeline(parsed)
        outcome = pipeline.run_edit(
            parsed.source,
            parsed.prompt,
            license_key=parsed.license_key,
            overlay_override=parsed.overlay,
        )
    except VibecutError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if parsed.json:
        print(json.dumps(outcome.to_dict(), indent=2))
        return

    print(f"Filters ({'gemini' if outcome.used_remote_inference else 'keyword rules'}):")
    for f in outcome.filters:
        print(f"  {f}")
    if outcome.watermarked:
        print("Trial watermark applied (no valid license).")
    if outcome.overlay_applied:
        print("Animated overlay composited.")
    print(f"Done: {outcome.output_path}")


if __name__ == "__main__":
    main()
