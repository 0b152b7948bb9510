"""Concurrent scan-and-classify pipeline."""

from __future__ import annotations

import logging
import math
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from filesniff.analysis import ClassificationResult, ClassificationStatus, FileClassifier
from filesniff.analysis.entropy import DEFAULT_ENCRYPTION_THRESHOLD

from .errors import PipelineBusyError
from .progress import CancellationToken, ScanProgress
from .summary import ScanReport

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8
DEFAULT_SEQUENTIAL_THRESHOLD = 10


class PipelineState(str, Enum):
    """Lifecycle of a single ``ScanPipeline.run`` invocation."""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


def resolve_worker_count(
    file_count: int,
    requested: int | None = None,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    sequential_threshold: int = DEFAULT_SEQUENTIAL_THRESHOLD,
    available: int | None = None,
) -> int:
    """Decide how many workers a scan should use.

    Without an explicit request the pipeline uses the available parallelism
    capped at ``max_workers``, and stays sequential for batches smaller than
    ``sequential_threshold`` where dispatch overhead dominates. An explicit
    request is honoured up to ``max_workers``. The result never exceeds the
    number of files and is at least 1.
    """
    if requested is None:
        if file_count < sequential_threshold:
            return 1
        budget = available if available is not None else (os.cpu_count() or 1)
    else:
        budget = requested
    budget = min(budget, max(1, max_workers), max(1, file_count))
    return max(1, budget)


def partition(total: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``range(total)`` into contiguous, size-balanced ``(start, end)`` chunks.

    Chunks hold ``ceil(total / workers)`` items each (the last may be
    shorter), so at most ``workers`` chunks are produced.
    """
    if total <= 0:
        return []
    chunk_size = math.ceil(total / max(1, workers))
    return [(start, min(start + chunk_size, total)) for start in range(0, total, chunk_size)]


def cancelled_result(path: Path) -> ClassificationResult:
    """Return the placeholder recorded for files skipped by cancellation."""
    return ClassificationResult(
        path=path,
        name=path.name,
        type_name="Skipped",
        description="Scan cancelled before analysis",
        status=ClassificationStatus.CANCELLED,
        actual_extension=path.suffix.lower(),
    )


class ScanPipeline:
    """Fan a fixed file list out across a bounded pool of worker threads.

    Each worker owns one contiguous chunk of the input and writes its results
    straight into the matching slots of a pre-sized list, which keeps output
    order equal to input order without any merge step. The signature table is
    frozen before dispatch and only read by workers afterwards.
    """

    def __init__(
        self,
        classifier: FileClassifier,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        sequential_threshold: int = DEFAULT_SEQUENTIAL_THRESHOLD,
        entropy_threshold: float = DEFAULT_ENCRYPTION_THRESHOLD,
    ) -> None:
        self.classifier = classifier
        self.max_workers = max(1, max_workers)
        self.sequential_threshold = sequential_threshold
        self.entropy_threshold = entropy_threshold
        self.progress = ScanProgress()
        self._state = PipelineState.IDLE
        self._state_lock = threading.Lock()

    @property
    def state(self) -> PipelineState:
        """Return the current lifecycle state."""
        return self._state

    def worker_count(self, file_count: int, requested: int | None = None) -> int:
        """Return the number of workers a run over ``file_count`` files would use."""
        return resolve_worker_count(
            file_count,
            requested,
            max_workers=self.max_workers,
            sequential_threshold=self.sequential_threshold,
        )

    def run(
        self,
        paths: Sequence[Path | str],
        workers: int | None = None,
        progress: ScanProgress | None = None,
        cancel: CancellationToken | None = None,
    ) -> ScanReport:
        """Classify ``paths`` and return results in input order.

        Args:
            paths: Ordered candidate files.
            workers: Worker budget; None selects one automatically.
            progress: Counter to update after each file; defaults to
                ``self.progress``.
            cancel: Optional token checked between files.

        Returns:
            ScanReport: Report whose ``results[i]`` describes ``paths[i]``.

        Raises:
            PipelineBusyError: If this pipeline is already running.
        """
        with self._state_lock:
            if self._state not in (PipelineState.IDLE, PipelineState.DONE):
                raise PipelineBusyError("Scan pipeline is already running.")
            self._state = PipelineState.DISPATCHING

        try:
            report = self._run(
                [Path(path) for path in paths],
                workers,
                progress if progress is not None else self.progress,
                cancel,
            )
        except BaseException:
            self._state = PipelineState.IDLE
            raise
        self._state = PipelineState.DONE
        return report

    def _run(
        self,
        paths: List[Path],
        workers: int | None,
        progress: ScanProgress,
        cancel: CancellationToken | None,
    ) -> ScanReport:
        self.classifier.table.freeze()
        total = len(paths)
        results: List[Optional[ClassificationResult]] = [None] * total
        progress.reset(total)

        count = self.worker_count(total, workers)
        chunks = partition(total, count)
        LOGGER.info("Scanning %d file(s) with %d worker(s).", total, count)

        started = time.perf_counter()
        self._state = PipelineState.RUNNING
        if count == 1:
            for start, end in chunks:
                self._work(paths, results, start, end, progress, cancel)
            self._state = PipelineState.DRAINING
        else:
            with ThreadPoolExecutor(max_workers=count, thread_name_prefix="filesniff-scan") as pool:
                futures = [
                    pool.submit(self._work, paths, results, start, end, progress, cancel)
                    for start, end in chunks
                ]
                self._state = PipelineState.DRAINING
                for future in futures:
                    future.result()
        elapsed = time.perf_counter() - started

        cancelled = cancel is not None and cancel.cancelled
        if cancelled:
            skipped = sum(
                1
                for result in results
                if result is not None and result.status is ClassificationStatus.CANCELLED
            )
            LOGGER.info("Scan cancelled; %d file(s) skipped.", skipped)

        return ScanReport(
            results=[result for result in results if result is not None],
            workers=count,
            elapsed_seconds=elapsed,
            cancelled=cancelled,
            entropy_threshold=self.entropy_threshold,
        )

    def _work(
        self,
        paths: List[Path],
        results: List[Optional[ClassificationResult]],
        start: int,
        end: int,
        progress: ScanProgress,
        cancel: CancellationToken | None,
    ) -> None:
        for index in range(start, end):
            path = paths[index]
            if cancel is not None and cancel.cancelled:
                result = cancelled_result(path)
            else:
                result = self.classifier.classify(path)
            results[index] = result
            progress.advance(result.name)


__all__ = [
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_SEQUENTIAL_THRESHOLD",
    "PipelineState",
    "ScanPipeline",
    "cancelled_result",
    "partition",
    "resolve_worker_count",
]
