"""Batch manifest loader — many edits from one YAML file.

Batch manifest schema:
  paths:
    raw: "/data/recordings"
  license_key: "ABC-123"            # default for every edit, optional
  edits:
    - source: "${raw}/intro/clip.mp4"
      prompt: "make it energetic"
    - source: "${raw}/outro/clip.mp4"
      prompt: "calm, add animation"
      license_key: "XYZ-789"        # per-edit override
      overlay: false                # force overlay on/off

Outputs are written next to each source under fixed names, so two edits
in the same directory would overwrite each other; that is rejected.
"""

import re
from pathlib import Path

import yaml

from .models import EditRequest


def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return paths[key]
    return re.sub(r"\$\{(\w+)\}", _replace, text)


def load_batch_manifest(manifest_path: str | Path) -> list[EditRequest]:
    """Load and validate a batch manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Resolve ${path} variables in each source.
      3. Validate each edit entry (source, prompt, overlay).
      4. Reject edits sharing an output directory.

    Returns:
        EditRequests in manifest order.

    Raises:
        ValueError: Missing/invalid fields.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f) or {}

    if "edits" not in raw:
        raise ValueError("Batch manifest: missing required 'edits' field")
    if not isinstance(raw["edits"], list):
        raise ValueError("Batch manifest: 'edits' must be a list")

    paths = raw.get("paths", {})
    default_key = raw.get("license_key")

    requests = []
    seen_dirs = {}
    for i, edit in enumerate(raw["edits"]):
        if not isinstance(edit, dict):
            raise ValueError(f"Edit {i}: must be a mapping")
        if "source" not in edit:
            raise ValueError(f"Edit {i}: missing required field 'source'")
        if not str(edit.get("prompt") or "").strip():
            raise ValueError(f"Edit {i}: missing required field 'prompt'")

        overlay = edit.get("overlay")
        if overlay is not None and not isinstance(overlay, bool):
            raise ValueError(f"Edit {i}: 'overlay' must be true or false, got {overlay!r}")

        source = Path(resolve_path_vars(str(edit["source"]), paths))
        out_dir = source.parent.resolve()
        if out_dir in seen_dirs:
            raise ValueError(
                f"Edit {i}: shares output directory {out_dir} with edit {seen_dirs[out_dir]}"
            )
        seen_dirs[out_dir] = i

        key = edit.get("license_key", default_key)
        requests.append(EditRequest(
            input_path=source,
            prompt=str(edit["prompt"]),
            license_key=str(key) if key is not None else None,
            overlay_override=overlay,
        ))

    return requests


def validate_batch_sources(requests: list[EditRequest]) -> None:
    """Check that every source video exists on disk.

    Raises:
        FileNotFoundError: On the first missing source.
    """
    for request in requests:
        if not request.input_path.exists():
            raise FileNotFoundError(f"Source video not found: {request.input_path}")
