"""ffmpeg transcoding of a filter chain.

The output always lands next to the input as vibe_output.mp4, so a rerun
overwrites the previous result instead of piling up files.
"""

import logging
import subprocess
from pathlib import Path

from .errors import TranscodeError
from .filters import filter_graph

logger = logging.getLogger(__name__)


OUTPUT_NAME = "vibe_output.mp4"
VIDEO_CODEC = "libx264"
PRESET = "veryfast"
AUDIO_CODEC = "aac"
MAX_DIAGNOSTIC_LINES = 5
GENERIC_FAILURE = "ffmpeg may be missing or the input is invalid"


def output_path_for(input_path: str | Path) -> Path:
    return Path(input_path).with_name(OUTPUT_NAME)


def build_command(input_path: str | Path, chain, output_path: str | Path) -> list[str]:
    """ffmpeg arguments (without the executable) for one transcode."""
    return [
        "-y",
        "-i", str(input_path),
        "-vf", filter_graph(chain),
        "-c:v", VIDEO_CODEC,
        "-preset", PRESET,
        "-c:a", AUDIO_CODEC,
        str(output_path),
    ]


def summarize_diagnostic(stderr: str | None) -> str:
    """First five non-blank stderr lines joined by spaces, or a fixed hint.

    Blank lines are skipped before the first five are taken.
    """
    lines = [line.strip() for line in (stderr or "").splitlines() if line.strip()]
    if not lines:
        return GENERIC_FAILURE
    return " ".join(lines[:MAX_DIAGNOSTIC_LINES])


def transcode(
    input_path: str | Path,
    chain,
    runner,
    ffmpeg: str = "ffmpeg",
    timeout: float | None = None,
) -> Path:
    """Apply chain to input_path and return the output path.

    Raises:
        TranscodeError: ffmpeg could not start (including arguments
            subprocess rejects), timed out, or exited non-zero.
    """
    output = output_path_for(input_path)
    args = build_command(input_path, chain, output)
    logger.info("Transcoding %s -> %s", input_path, output)

    try:
        result = runner.run(ffmpeg, args, timeout=timeout)
    except (OSError, ValueError) as e:
        # ValueError: arguments subprocess refuses, e.g. an embedded NUL byte.
        raise TranscodeError(f"ffmpeg failed: could not run {ffmpeg}: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise TranscodeError(f"ffmpeg failed: timed out after {e.timeout:.0f}s") from e

    if result.returncode != 0:
        detail = summarize_diagnostic(result.stderr)
        logger.error("ffmpeg exited %d: %s", result.returncode, detail)
        raise TranscodeError(f"ffmpeg failed: {detail}")
    return output
