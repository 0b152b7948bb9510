"""Scan pipeline errors."""


class ScanError(Exception):
    """Base exception for scan operations that cannot proceed at all."""


class PipelineBusyError(ScanError):
    """Raised when a pipeline is asked to run while a run is in progress."""


class EnumerationError(ScanError):
    """Raised when the candidate file list cannot be produced."""
