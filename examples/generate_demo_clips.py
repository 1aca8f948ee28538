#!/usr/bin/env python3
"""Generate synthetic source videos for the vibecut demo batch manifest.

Creates three short clips, each in its own directory under
examples/demo-clips/ (vibecut writes its output next to the source, so
every edit needs a directory of its own).

Usage:
    python examples/generate_demo_clips.py
    # Then edit:
    vibecut init-db
    vibecut batch --manifest examples/demo-batch.yaml --workers 3
"""

import subprocess
from pathlib import Path

import imageio_ffmpeg

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-clips"
SIZE = "320x240"
FPS = 30

# (directory, lavfi color, duration)
CLIPS = [
    ("energetic", "red", 4.0),
    ("chill", "blue", 5.0),
    ("action", "green", 3.0),
]


def main():
    for name, color, duration in CLIPS:
        out = OUTPUT_DIR / name / "clip.mp4"
        if out.exists():
            print(f"  skip {name} (exists)")
            continue
        out.parent.mkdir(parents=True, exist_ok=True)

        subprocess.run(
            [
                _FFMPEG, "-y",
                "-f", "lavfi", "-i", f"color=c={color}:s={SIZE}:d={duration}:r={FPS}",
                "-f", "lavfi", "-i", "anullsrc=r=44100:cl=mono",
                "-shortest",
                "-c:v", "libx264", "-pix_fmt", "yuv420p",
                "-c:a", "aac",
                str(out),
            ],
            check=True,
            capture_output=True,
        )
        print(f"  wrote {name} ({duration}s)")

    print(f"\nDone. {len(CLIPS)} clips in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
