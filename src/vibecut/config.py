"""Configuration loader — YAML file plus environment.

Config file schema (every key optional):
  database: "sqlite:///vibe.db"      # SQLAlchemy URL
  ffmpeg: "/usr/bin/ffmpeg"          # default: imageio-ffmpeg's bundled binary
  ffprobe: "ffprobe"
  node: "node"
  overlay_entry: "remotion/render.mjs"   # relative to the working directory
  log_level: "INFO"
  gemini:
    model: "gemini-2.5-flash"
    endpoint: "https://generativelanguage.googleapis.com/v1beta/models"
  timeouts:
    http: 30
    transcode: 3600
    probe: 30
    overlay: 1800

The Gemini API key is never read from the file, only from GEMINI_API_KEY.
"""

import copy
import os
from pathlib import Path

import imageio_ffmpeg
import yaml


CONFIG_ENV_VAR = "VIBECUT_CONFIG"
API_KEY_ENV_VAR = "GEMINI_API_KEY"

DEFAULTS = {
    "database": "sqlite:///vibe.db",
    "ffmpeg": None,
    "ffprobe": "ffprobe",
    "node": "node",
    "overlay_entry": "remotion/render.mjs",
    "log_level": "INFO",
    "gemini": {
        "model": "gemini-2.5-flash",
        "endpoint": "https://generativelanguage.googleapis.com/v1beta/models",
    },
    "timeouts": {
        "http": 30.0,
        "transcode": 3600.0,
        "probe": 30.0,
        "overlay": 1800.0,
    },
}

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}
_STRING_KEYS = ("database", "ffmpeg", "ffprobe", "node", "overlay_entry")


def _merge_section(name: str, raw: dict, defaults: dict) -> dict:
    """Overlay a nested mapping on its defaults, rejecting unknown keys."""
    if not isinstance(raw, dict):
        raise ValueError(f"Config: '{name}' must be a mapping")
    unknown = set(raw) - set(defaults)
    if unknown:
        raise ValueError(f"Config: unknown key(s) in '{name}': {sorted(unknown)}")
    return {**defaults, **raw}


def load_config(path: str | Path | None = None) -> dict:
    """Load, validate, and normalize configuration.

    Processing pipeline:
      1. Pick the file: explicit path, else $VIBECUT_CONFIG, else none.
      2. Parse YAML and reject unknown keys.
      3. Apply defaults, validate types and ranges.
      4. Fill in the bundled ffmpeg binary and the API key from the
         environment.

    Raises:
        FileNotFoundError: An explicitly named config file is missing.
        ValueError: Unknown keys or invalid values.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None

    raw = {}
    if path is not None:
        if not Path(path).exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError("Config: top level must be a mapping")

    unknown = set(raw) - set(DEFAULTS)
    if unknown:
        raise ValueError(f"Config: unknown key(s): {sorted(unknown)}")

    config = copy.deepcopy(DEFAULTS)
    for key, value in raw.items():
        if key in ("gemini", "timeouts"):
            config[key] = _merge_section(key, value, DEFAULTS[key])
        else:
            config[key] = value

    for key in _STRING_KEYS:
        value = config[key]
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Config: '{key}' must be a string, got {value!r}")

    level = str(config["log_level"]).upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Config: invalid log_level '{config['log_level']}'. "
            f"Valid: {sorted(VALID_LOG_LEVELS)}"
        )
    config["log_level"] = level

    for name, value in config["timeouts"].items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"Config: timeouts.{name} must be > 0, got {value!r}")
        config["timeouts"][name] = float(value)

    if config["ffmpeg"] is None:
        config["ffmpeg"] = imageio_ffmpeg.get_ffmpeg_exe()

    config["api_key"] = os.environ.get(API_KEY_ENV_VAR) or None
    return config
