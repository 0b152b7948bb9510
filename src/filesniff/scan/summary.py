"""Scan reports and aggregate statistics."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from filesniff.analysis import DEFAULT_ENCRYPTION_THRESHOLD, ClassificationResult

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(size_bytes: int) -> str:
    """Render a byte count using binary units with two decimals."""
    size = float(size_bytes)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.2f} {_SIZE_UNITS[unit]}"


class TypeStatistic(BaseModel):
    """Count and total size of files sharing a detected type."""

    type_name: str
    count: int = 0
    size_bytes: int = 0


class ScanSummary(BaseModel):
    """Aggregate statistics computed from an ordered result list.

    Attributes:
        total_files: Number of results.
        total_size_bytes: Sum of file sizes.
        corrupt_count: Files flagged as corrupt.
        mismatch_count: Files whose extension disagrees with their type.
        encrypted_count: Files at or above the entropy threshold.
        elapsed_seconds: Wall-clock duration of the scan.
        workers: Number of workers used.
        types: Per-type statistics sorted by type name.
    """

    total_files: int = 0
    total_size_bytes: int = 0
    corrupt_count: int = 0
    mismatch_count: int = 0
    encrypted_count: int = 0
    elapsed_seconds: float = 0.0
    workers: int = 1
    types: List[TypeStatistic] = Field(default_factory=list)

    @classmethod
    def from_results(
        cls,
        results: List[ClassificationResult],
        *,
        elapsed_seconds: float = 0.0,
        workers: int = 1,
        entropy_threshold: float = DEFAULT_ENCRYPTION_THRESHOLD,
    ) -> "ScanSummary":
        """Compute aggregates for ``results``."""
        per_type: Dict[str, TypeStatistic] = {}
        summary = cls(elapsed_seconds=elapsed_seconds, workers=workers)
        for result in results:
            stat = per_type.setdefault(result.type_name, TypeStatistic(type_name=result.type_name))
            stat.count += 1
            stat.size_bytes += result.size_bytes
            summary.total_files += 1
            summary.total_size_bytes += result.size_bytes
            if result.is_corrupt:
                summary.corrupt_count += 1
            if result.extension_mismatch:
                summary.mismatch_count += 1
            if result.likely_encrypted(entropy_threshold):
                summary.encrypted_count += 1
        summary.types = [per_type[name] for name in sorted(per_type)]
        return summary


class ScanReport(BaseModel):
    """Outcome of one pipeline run.

    ``results[i]`` always describes ``paths[i]`` of the run's input.
    """

    results: List[ClassificationResult] = Field(default_factory=list)
    workers: int = 1
    elapsed_seconds: float = 0.0
    cancelled: bool = False
    entropy_threshold: float = DEFAULT_ENCRYPTION_THRESHOLD

    def summary(self) -> ScanSummary:
        """Return aggregate statistics for this report."""
        return ScanSummary.from_results(
            self.results,
            elapsed_seconds=self.elapsed_seconds,
            workers=self.workers,
            entropy_threshold=self.entropy_threshold,
        )


__all__ = ["ScanReport", "ScanSummary", "TypeStatistic", "format_size"]
