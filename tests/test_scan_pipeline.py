"""Tests for the concurrent scan pipeline."""

import threading
from pathlib import Path
from typing import List

import pytest
from PIL import Image

from filesniff.analysis import ClassificationResult, ClassificationStatus, FileClassifier
from filesniff.scan import (
    CancellationToken,
    PipelineBusyError,
    PipelineState,
    ScanPipeline,
    ScanProgress,
    partition,
    resolve_worker_count,
)
from filesniff.signatures import SignatureRule, SignatureTable, SignatureTableFrozenError


def _write_batch(root: Path, count: int) -> List[Path]:
    paths = []
    for index in range(count):
        path = root / f"file_{index:03d}.txt"
        path.write_text(f"content number {index}\n" * (index + 1), encoding="utf-8")
        paths.append(path)
    return paths


_MIXED_KINDS = [
    (".pdf", b"%PDF-1.4\n", "PDF"),
    (".gif", b"GIF89a", "GIF"),
    (".txt", b"plain words\n", "Text"),
    (".bin", b"Z", "Empty/Corrupt"),
    (".zip", b"PK\x03\x04", "ZIP/DOCX/XLSX"),
]


def test_results_preserve_input_order(tmp_path: Path) -> None:
    paths: List[Path] = []
    expected_types: List[str] = []
    for index in range(25):
        suffix, header, type_name = _MIXED_KINDS[index % len(_MIXED_KINDS)]
        path = tmp_path / f"item_{index:03d}{suffix}"
        padding = b"" if type_name == "Empty/Corrupt" else b" " * index
        path.write_bytes(header + padding)
        paths.append(path)
        expected_types.append(type_name)
    # Reverse so output order cannot accidentally match a sorted listing.
    paths.reverse()
    expected_types.reverse()

    report = ScanPipeline(FileClassifier()).run(paths, workers=4)

    assert report.workers == 4
    assert [result.path for result in report.results] == paths
    assert [result.type_name for result in report.results] == expected_types
    assert [result.size_bytes for result in report.results] == [
        path.stat().st_size for path in paths
    ]


def test_progress_reaches_total(tmp_path: Path) -> None:
    paths = _write_batch(tmp_path, 12)
    progress = ScanProgress()

    ScanPipeline(FileClassifier()).run(paths, workers=3, progress=progress)
    snapshot = progress.snapshot()

    assert snapshot.completed == 12
    assert snapshot.total == 12
    assert snapshot.done
    assert snapshot.fraction == 1.0
    assert snapshot.current_file.startswith("file_")


def test_default_progress_attribute_is_updated(tmp_path: Path) -> None:
    pipeline = ScanPipeline(FileClassifier())

    pipeline.run(_write_batch(tmp_path, 3))

    assert pipeline.progress.snapshot().completed == 3


def test_end_to_end_mixed_files(tmp_path: Path) -> None:
    png = tmp_path / "a.png"
    Image.new("RGB", (8, 8), color="green").save(png, format="PNG")
    pdf = tmp_path / "b.pdf"
    pdf.write_bytes(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n")
    tiny = tmp_path / "c.bin"
    tiny.write_bytes(b"Z")

    report = ScanPipeline(FileClassifier()).run([png, pdf, tiny])

    assert [result.type_name for result in report.results] == ["PNG", "PDF", "Empty/Corrupt"]
    summary = report.summary()
    assert summary.total_files == 3
    assert summary.corrupt_count == 1
    assert summary.mismatch_count == 0
    assert [stat.type_name for stat in summary.types] == ["Empty/Corrupt", "PDF", "PNG"]


def test_empty_input_produces_empty_report() -> None:
    pipeline = ScanPipeline(FileClassifier())

    report = pipeline.run([])

    assert report.results == []
    assert report.summary().total_files == 0
    assert pipeline.state is PipelineState.DONE


def test_table_is_frozen_after_run(tmp_path: Path) -> None:
    table = SignatureTable.with_builtins()
    pipeline = ScanPipeline(FileClassifier(table))

    pipeline.run(_write_batch(tmp_path, 2))

    with pytest.raises(SignatureTableFrozenError):
        table.load_additional([SignatureRule(pattern="CAFE", type_name="Cafe")])


def test_cancelled_token_skips_remaining_files(tmp_path: Path) -> None:
    paths = _write_batch(tmp_path, 5)
    token = CancellationToken()
    token.cancel()

    report = ScanPipeline(FileClassifier()).run(paths, workers=1, cancel=token)

    assert report.cancelled is True
    assert len(report.results) == 5
    assert all(result.status is ClassificationStatus.CANCELLED for result in report.results)
    assert [result.path for result in report.results] == paths


def test_cancellation_mid_scan_keeps_completed_results(tmp_path: Path) -> None:
    paths = _write_batch(tmp_path, 6)
    token = CancellationToken()

    class CancellingClassifier(FileClassifier):
        def classify(self, path: Path | str) -> ClassificationResult:
            result = super().classify(path)
            if Path(path).name == "file_001.txt":
                token.cancel()
            return result

    report = ScanPipeline(CancellingClassifier()).run(paths, workers=1, cancel=token)
    statuses = [result.status for result in report.results]

    assert statuses[:2] == [ClassificationStatus.OK, ClassificationStatus.OK]
    assert all(status is ClassificationStatus.CANCELLED for status in statuses[2:])
    assert report.results[2].type_name == "Skipped"


def test_pipeline_rejects_reentrant_runs(tmp_path: Path) -> None:
    paths = _write_batch(tmp_path, 2)
    entered = threading.Event()
    release = threading.Event()

    class BlockingClassifier(FileClassifier):
        def classify(self, path: Path | str) -> ClassificationResult:
            entered.set()
            release.wait(timeout=5)
            return super().classify(path)

    pipeline = ScanPipeline(BlockingClassifier())
    worker = threading.Thread(target=pipeline.run, args=(paths, 1))
    worker.start()
    try:
        assert entered.wait(timeout=5)
        assert pipeline.state is not PipelineState.IDLE
        with pytest.raises(PipelineBusyError):
            pipeline.run(paths)
    finally:
        release.set()
        worker.join(timeout=5)

    assert pipeline.state is PipelineState.DONE
    # A finished pipeline can be reused.
    assert len(pipeline.run(paths).results) == 2


def test_failed_run_returns_pipeline_to_idle(tmp_path: Path) -> None:
    class ExplodingClassifier(FileClassifier):
        def classify(self, path: Path | str) -> ClassificationResult:
            raise RuntimeError("boom")

    pipeline = ScanPipeline(ExplodingClassifier())

    with pytest.raises(RuntimeError):
        pipeline.run(_write_batch(tmp_path, 1))

    assert pipeline.state is PipelineState.IDLE


@pytest.mark.parametrize(
    ("total", "workers", "expected"),
    [
        (0, 4, []),
        (5, 1, [(0, 5)]),
        (10, 3, [(0, 4), (4, 8), (8, 10)]),
        (3, 8, [(0, 1), (1, 2), (2, 3)]),
        (8, 4, [(0, 2), (2, 4), (4, 6), (6, 8)]),
    ],
)
def test_partition_covers_range_contiguously(
    total: int, workers: int, expected: list[tuple[int, int]]
) -> None:
    assert partition(total, workers) == expected


def test_resolve_worker_count_rules() -> None:
    # Small batches stay sequential unless a count is requested.
    assert resolve_worker_count(5, available=16) == 1
    assert resolve_worker_count(5, 4, available=16) == 4
    # Automatic selection is capped by max_workers.
    assert resolve_worker_count(100, available=16) == 8
    assert resolve_worker_count(100, available=2) == 2
    # Explicit requests are capped by max_workers and the file count.
    assert resolve_worker_count(100, 32) == 8
    assert resolve_worker_count(3, 6) == 3
    assert resolve_worker_count(0, 4) == 1
    assert resolve_worker_count(50, 4, max_workers=2) == 2


def test_worker_count_uses_pipeline_limits() -> None:
    pipeline = ScanPipeline(FileClassifier(), max_workers=3, sequential_threshold=2)

    assert pipeline.worker_count(1) == 1
    assert pipeline.worker_count(100, 10) == 3
