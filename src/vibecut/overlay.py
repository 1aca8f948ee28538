"""Best-effort animated overlay pass.

After transcoding, the video can be re-rendered through an external Node
script (remotion/render.mjs) that draws an animated overlay on top. This
step never fails an edit: a missing script, a failed probe, or a non-zero
exit all leave the transcoded output as the final result.
"""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


OVERLAY_KEYWORDS = (
    "add animation",
    "animation in between",
    "transparent overlay",
    "overlay",
)
OVERLAY_OUTPUT_NAME = "vibe_output_overlay.mp4"
FALLBACK_DURATION = 30.0


def wants_overlay(prompt: str, explicit: bool | None = None) -> bool:
    """Explicit flag wins; otherwise look for overlay phrases in the prompt."""
    if explicit is not None:
        return explicit
    lowered = prompt.lower()
    return any(k in lowered for k in OVERLAY_KEYWORDS)


def overlay_output_for(video_path: str | Path) -> Path:
    return Path(video_path).with_name(OVERLAY_OUTPUT_NAME)


def probe_duration(
    video_path: str | Path,
    runner,
    ffprobe: str = "ffprobe",
    timeout: float | None = None,
) -> float:
    """Video duration in seconds, or FALLBACK_DURATION if probing fails."""
    args = [
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(video_path),
    ]
    try:
        result = runner.run(ffprobe, args, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.info("ffprobe unavailable (%s); assuming %.0fs", e, FALLBACK_DURATION)
        return FALLBACK_DURATION
    if result.returncode != 0:
        return FALLBACK_DURATION

    try:
        duration = float(result.stdout.strip().splitlines()[0])
    except (ValueError, IndexError):
        return FALLBACK_DURATION
    return duration if duration > 0 else FALLBACK_DURATION


def composite_overlay(
    video_path: str | Path,
    runner,
    *,
    entry_point: str | Path = "remotion/render.mjs",
    node: str = "node",
    ffprobe: str = "ffprobe",
    probe_timeout: float | None = None,
    timeout: float | None = None,
) -> Path | None:
    """Render the overlay; return its output path, or None if skipped/failed.

    entry_point is resolved against the process working directory.
    """
    entry = Path.cwd() / entry_point
    if not entry.exists():
        logger.debug("Overlay entry point %s not found; skipping", entry)
        return None

    duration = probe_duration(video_path, runner, ffprobe, timeout=probe_timeout)
    output = overlay_output_for(video_path)
    args = [str(entry), str(video_path), str(output), f"{duration:.2f}"]

    try:
        result = runner.run(node, args, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.info("Overlay render could not run: %s", e)
        return None
    if result.returncode != 0:
        logger.info("Overlay render exited %d; keeping transcoded output", result.returncode)
        return None
    return output


def maybe_composite_overlay(
    output_path: Path,
    prompt: str,
    explicit: bool | None,
    runner,
    config: dict,
) -> tuple[Path, bool]:
    """Return (final output path, overlay_applied)."""
    if not wants_overlay(prompt, explicit):
        return output_path, False

    overlay = composite_overlay(
        output_path,
        runner,
        entry_point=config["overlay_entry"],
        node=config["node"],
        ffprobe=config["ffprobe"],
        probe_timeout=config["timeouts"]["probe"],
        timeout=config["timeouts"]["overlay"],
    )
    if overlay is None:
        return output_path, False
    logger.info("Overlay composited: %s", overlay)
    return overlay, True
