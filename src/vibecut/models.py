"""Data model for one edit request and its outcome."""

from dataclasses import dataclass
from pathlib import Path


CHAIN_LENGTH = 3


@dataclass(frozen=True)
class EditRequest:
    """One prompt-to-edit invocation.

    overlay_override: None lets the prompt decide whether to composite
    the animated overlay; True/False forces it on or off.
    """
    input_path: Path
    prompt: str
    license_key: str | None = None
    overlay_override: bool | None = None


@dataclass(frozen=True)
class EditOutcome:
    """Result of a completed edit.

    filters is the exact chain handed to ffmpeg (after padding and
    watermarking), not the raw resolver output.
    """
    output_path: Path
    filters: tuple[str, ...]
    used_remote_inference: bool
    watermarked: bool
    overlay_applied: bool = False

    def to_dict(self) -> dict:
        return {
            "output_path": str(self.output_path),
            "filters": list(self.filters),
            "used_remote_inference": self.used_remote_inference,
            "watermarked": self.watermarked,
            "overlay_applied": self.overlay_applied,
        }


@dataclass(frozen=True)
class ProjectRecord:
    input_path: str
    output_path: str
    prompt: str
