"""Shared test fixtures for vibecut tests."""

import logging
import subprocess

import pytest
import imageio_ffmpeg

from vibecut.process import ProcessResult

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


class FakeRunner:
    """ProcessRunner stand-in.

    Responses are keyed by executable. A value may be a ProcessResult, an
    exception instance (raised), or a callable taking (executable, args)
    and returning a ProcessResult. Unknown executables succeed silently.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def run(self, executable, args, cwd=None, timeout=None):
        self.calls.append((executable, list(args), timeout))
        response = self.responses.get(executable, ProcessResult(0, "", ""))
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(executable, args)
        return response

    def calls_to(self, executable):
        return [c for c in self.calls if c[0] == executable]


class FakeClient:
    """Inference client returning fixed filters or raising a fixed error."""

    def __init__(self, filters=None, error=None):
        self.filters = filters
        self.error = error
        self.prompts = []

    def suggest_filters(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return list(self.filters)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No ambient config file or API key leaks into tests."""
    monkeypatch.delenv("VIBECUT_CONFIG", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging() so handlers don't outlive capsys streams."""
    yield
    logger = logging.getLogger("vibecut")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config(tmp_path):
    """Default config with test-friendly executable names and database."""
    from vibecut.config import load_config

    cfg = load_config()
    cfg["database"] = f"sqlite:///{tmp_path / 'vibe.db'}"
    cfg["ffmpeg"] = "ffmpeg"
    return cfg


@pytest.fixture
def store(tmp_path):
    """Fresh on-disk SQLite store with schema and one valid license."""
    from vibecut.store import EditStore

    s = EditStore.from_url(f"sqlite:///{tmp_path / 'vibe.db'}")
    s.init_schema()
    s.set_license("GOOD-KEY", valid=True)
    s.set_license("REVOKED-KEY", valid=False)
    return s


@pytest.fixture
def clip(tmp_path):
    """Placeholder input file; only its path matters with a fake runner."""
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00")
    return path


@pytest.fixture
def source_video(tmp_path):
    """Create a 5-second test video (320x240, 10fps) with audio using ffmpeg."""
    out = tmp_path / "source.mp4"
    subprocess.run(
        [
            _FFMPEG, "-y",
            "-f", "lavfi", "-i", "color=c=blue:s=320x240:d=5:r=10",
            "-f", "lavfi", "-i", "anullsrc=r=44100:cl=mono",
            "-shortest",
            "-c:v", "libx264", "-crf", "28", "-pix_fmt", "yuv420p",
            "-c:a", "aac", "-b:a", "32k",
            str(out),
        ],
        check=True,
        capture_output=True,
    )
    return out
