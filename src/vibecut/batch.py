"""Concurrent batch edits.

Each edit is an independent pipeline on its own worker thread; the store's
connection pool is the only thing they share.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from .errors import VibecutError
from .models import EditOutcome, EditRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    request: EditRequest
    outcome: EditOutcome | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _run_one(pipeline, request: EditRequest) -> BatchResult:
    start = time.time()
    try:
        outcome = pipeline.run(request)
    except VibecutError as e:
        logger.error("Edit failed for %s: %s", request.input_path, e)
        return BatchResult(request, error=str(e))
    logger.info("Edit done for %s in %.1fs", request.input_path, time.time() - start)
    return BatchResult(request, outcome=outcome)


def run_batch(requests: list[EditRequest], pipeline, workers: int = 1) -> list[BatchResult]:
    """Run every request; results come back in request order.

    A failed edit is reported in its BatchResult and does not stop the
    others.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if workers == 1 or len(requests) <= 1:
        return [_run_one(pipeline, r) for r in requests]

    results = [None] * len(requests)
    with ThreadPoolExecutor(max_workers=min(workers, len(requests))) as pool:
        futures = {
            pool.submit(_run_one, pipeline, r): i for i, r in enumerate(requests)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return results
