"""Tests for ffmpeg invocation and failure messages.

Uses the FakeRunner from conftest.py; the real-ffmpeg case lives in
test_pipeline.py.
"""

import subprocess
from pathlib import Path

import pytest

from conftest import FakeRunner
from vibecut.errors import TranscodeError
from vibecut.process import ProcessResult

CHAIN = ("setpts=0.85*PTS", "hue=s=1.25", "hue=s=1")


class TestOutputPath:
    def test_same_directory_fixed_name(self):
        from vibecut.transcode import output_path_for

        assert output_path_for("/videos/trip/clip.mov") == Path("/videos/trip/vibe_output.mp4")


class TestBuildCommand:
    def test_arguments(self):
        from vibecut.transcode import build_command

        args = build_command("in.mp4", CHAIN, "out.mp4")
        assert args == [
            "-y",
            "-i", "in.mp4",
            "-vf", "setpts=0.85*PTS,hue=s=1.25,hue=s=1",
            "-c:v", "libx264",
            "-preset", "veryfast",
            "-c:a", "aac",
            "out.mp4",
        ]


class TestSummarizeDiagnostic:
    @pytest.mark.parametrize("stderr", ["", None, "\n  \n"])
    def test_blank_uses_generic_message(self, stderr):
        from vibecut.transcode import GENERIC_FAILURE, summarize_diagnostic

        assert summarize_diagnostic(stderr) == GENERIC_FAILURE

    def test_first_five_lines_joined(self):
        from vibecut.transcode import summarize_diagnostic

        stderr = "\n".join(f"line {i}" for i in range(1, 9))
        assert summarize_diagnostic(stderr) == "line 1 line 2 line 3 line 4 line 5"

    def test_blank_lines_not_counted(self):
        from vibecut.transcode import summarize_diagnostic

        stderr = "\nline 1\n\n  \nline 2\nline 3\n\nline 4\nline 5\nline 6\n"
        assert summarize_diagnostic(stderr) == "line 1 line 2 line 3 line 4 line 5"


class TestTranscode:
    def test_success_returns_output(self, clip):
        from vibecut.transcode import transcode

        runner = FakeRunner()
        out = transcode(clip, CHAIN, runner, ffmpeg="ffmpeg-bin", timeout=60)
        assert out == clip.with_name("vibe_output.mp4")
        ((exe, args, timeout),) = runner.calls
        assert exe == "ffmpeg-bin"
        assert args[-1] == str(out)
        assert timeout == 60

    def test_non_zero_exit_with_empty_stderr(self, clip):
        from vibecut.transcode import transcode

        runner = FakeRunner({"ffmpeg": ProcessResult(1, "", "")})
        with pytest.raises(TranscodeError) as exc_info:
            transcode(clip, CHAIN, runner)
        assert str(exc_info.value) == (
            "ffmpeg failed: ffmpeg may be missing or the input is invalid"
        )

    def test_non_zero_exit_with_diagnostic(self, clip):
        from vibecut.transcode import transcode

        stderr = "clip.mp4: Invalid data found when processing input\n" + "noise\n" * 10
        runner = FakeRunner({"ffmpeg": ProcessResult(183, "", stderr)})
        with pytest.raises(TranscodeError, match="Invalid data found") as exc_info:
            transcode(clip, CHAIN, runner)
        assert str(exc_info.value).count("noise") == 4

    def test_missing_executable(self, clip):
        from vibecut.transcode import transcode

        runner = FakeRunner({"ffmpeg": FileNotFoundError("No such file: 'ffmpeg'")})
        with pytest.raises(TranscodeError, match="could not run ffmpeg"):
            transcode(clip, CHAIN, runner)

    def test_timeout(self, clip):
        from vibecut.transcode import transcode

        runner = FakeRunner({"ffmpeg": subprocess.TimeoutExpired("ffmpeg", 5)})
        with pytest.raises(TranscodeError, match="timed out"):
            transcode(clip, CHAIN, runner, timeout=5)

    def test_rejected_arguments(self, clip):
        from vibecut.transcode import transcode

        runner = FakeRunner({"ffmpeg": ValueError("embedded null byte")})
        with pytest.raises(TranscodeError, match="embedded null byte"):
            transcode(clip, CHAIN, runner)

    def test_nul_byte_in_filter_with_real_subprocess(self, clip):
        from vibecut.process import SubprocessRunner
        from vibecut.transcode import transcode

        chain = ("hue=s=1\x00", "hue=s=1", "hue=s=1")
        with pytest.raises(TranscodeError, match="^ffmpeg failed: "):
            transcode(clip, chain, SubprocessRunner())
