"""CLI for batch edits from a YAML manifest.

Usage:
    vibecut batch --manifest edits.yaml
    vibecut batch --manifest edits.yaml --workers 4
    vibecut batch --manifest edits.yaml --validate
"""

import argparse
import sys
import time

from .batch import run_batch
from .batch_manifest import load_batch_manifest, validate_batch_sources
from .errors import VibecutError
from .edit_cli import add_common_args, load_pipeline


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Run many vibe edits from a YAML manifest.",
    )
    parser.add_argument("--manifest", required=True, help="Path to batch YAML manifest")
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Edits to run in parallel (default: 1)",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate manifest and source paths, then exit",
    )
    add_common_args(parser)
    parsed = parser.parse_args(args)

    if parsed.workers < 1:
        parser.error("--workers must be >= 1")

    requests = load_batch_manifest(parsed.manifest)
    validate_batch_sources(requests)

    if parsed.validate:
        print(f"Manifest valid: {len(requests)} edits")
        for i, r in enumerate(requests):
            print(f"  {i}: {r.input_path} — {r.prompt}")
        print("All paths verified.")
        return

    try:
        pipeline = load_pipeline(parsed)
    except VibecutError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Running {len(requests)} edits ({parsed.workers} worker(s))\n")
    start = time.time()
    results = run_batch(requests, pipeline, workers=parsed.workers)

    failed = 0
    for result in results:
        if result.ok:
            print(f"  DONE   {result.request.input_path} -> {result.outcome.output_path}")
        else:
            failed += 1
            print(f"  FAIL   {result.request.input_path}: {result.error}")

    print(f"\nDone: {len(results) - failed}/{len(results)} edits ({time.time() - start:.1f}s total)")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
