"""Tests for concurrent batch edits."""

import threading

import pytest

from conftest import FakeRunner
from vibecut.errors import TranscodeError
from vibecut.models import EditOutcome, EditRequest
from vibecut.process import ProcessResult


class _StubPipeline:
    """Fails for sources whose name starts with 'bad'."""

    def __init__(self):
        self.threads = set()
        self.lock = threading.Lock()

    def run(self, request):
        with self.lock:
            self.threads.add(threading.get_ident())
        if request.input_path.name.startswith("bad"):
            raise TranscodeError("ffmpeg failed: boom")
        return EditOutcome(request.input_path.with_name("vibe_output.mp4"), ("a", "b", "c"), False, True)


def _requests(tmp_path, names):
    return [EditRequest(tmp_path / str(i) / name, "x") for i, name in enumerate(names)]


class TestRunBatch:
    @pytest.mark.parametrize("workers", [1, 3])
    def test_results_in_request_order(self, tmp_path, workers):
        from vibecut.batch import run_batch

        requests = _requests(tmp_path, ["a.mp4", "bad.mp4", "c.mp4", "d.mp4"])
        results = run_batch(requests, _StubPipeline(), workers=workers)
        assert [r.request for r in results] == requests
        assert [r.ok for r in results] == [True, False, True, True]
        assert results[1].error == "ffmpeg failed: boom"
        assert results[1].outcome is None
        assert results[0].outcome.output_path == requests[0].input_path.with_name("vibe_output.mp4")

    def test_single_worker_runs_inline(self, tmp_path):
        from vibecut.batch import run_batch

        pipeline = _StubPipeline()
        run_batch(_requests(tmp_path, ["a.mp4", "b.mp4"]), pipeline, workers=1)
        assert pipeline.threads == {threading.get_ident()}

    def test_invalid_workers(self, tmp_path):
        from vibecut.batch import run_batch

        with pytest.raises(ValueError):
            run_batch([], _StubPipeline(), workers=0)

    def test_real_pipeline_shared_store(self, tmp_path, config, store):
        from vibecut.batch import run_batch
        from vibecut.inference import GeminiClient
        from vibecut.pipeline import EditPipeline

        requests = []
        for i in range(4):
            src = tmp_path / f"job{i}" / "clip.mp4"
            src.parent.mkdir()
            src.write_bytes(b"\x00")
            requests.append(EditRequest(src, "energetic", license_key="GOOD-KEY"))

        def ffmpeg(exe, args):
            if "job2" in args[2]:
                return ProcessResult(1, "", "")
            return ProcessResult(0, "", "")

        pipeline = EditPipeline(store, GeminiClient(api_key=None), FakeRunner({"ffmpeg": ffmpeg}), config)
        results = run_batch(requests, pipeline, workers=4)

        assert [r.ok for r in results] == [True, True, False, True]
        assert all(not r.outcome.watermarked for r in results if r.ok)
        assert sorted(p.input_path for p in store.projects()) == sorted(
            str(requests[i].input_path) for i in (0, 1, 3)
        )

    def test_nul_byte_filter_fails_only_its_edit(self, tmp_path, config, store):
        from vibecut.batch import run_batch
        from vibecut.pipeline import EditPipeline

        requests = []
        for i in range(2):
            src = tmp_path / f"job{i}" / "clip.mp4"
            src.parent.mkdir()
            src.write_bytes(b"\x00")
            requests.append(EditRequest(src, "bad" if i == 0 else "good"))

        class PerPromptClient:
            def suggest_filters(self, prompt):
                return ["hue=s=1\x00"] if prompt == "bad" else ["hue=s=1.2"]

        def runner_fn(exe, args):
            if "\x00" in "".join(args):
                raise ValueError("embedded null byte")
            return ProcessResult(0, "", "")

        pipeline = EditPipeline(store, PerPromptClient(), FakeRunner({"ffmpeg": runner_fn}), config)
        results = run_batch(requests, pipeline, workers=2)

        assert [r.ok for r in results] == [False, True]
        assert "embedded null byte" in results[0].error
        assert [p.input_path for p in store.projects()] == [str(requests[1].input_path)]
