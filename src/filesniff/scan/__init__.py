"""Concurrent scanning of file lists."""

from .errors import EnumerationError, PipelineBusyError, ScanError
from .pipeline import PipelineState, ScanPipeline, partition, resolve_worker_count
from .progress import CancellationToken, ProgressSnapshot, ScanProgress
from .summary import ScanReport, ScanSummary, TypeStatistic, format_size

__all__ = [
    "CancellationToken",
    "EnumerationError",
    "PipelineBusyError",
    "PipelineState",
    "ProgressSnapshot",
    "ScanError",
    "ScanPipeline",
    "ScanProgress",
    "ScanReport",
    "ScanSummary",
    "TypeStatistic",
    "format_size",
    "partition",
    "resolve_worker_count",
]
