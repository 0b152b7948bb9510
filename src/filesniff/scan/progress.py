"""Shared progress and cancellation primitives for scan workers."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Point-in-time view of scan progress.

    Attributes:
        completed: Number of files classified so far.
        total: Number of files in the scan.
        current_file: Name of the most recently completed file.
    """

    completed: int
    total: int
    current_file: str

    @property
    def fraction(self) -> float:
        """Return completion as a value between 0 and 1."""
        if self.total <= 0:
            return 1.0
        return min(1.0, self.completed / self.total)

    @property
    def done(self) -> bool:
        """Return True once every file has been accounted for."""
        return self.completed >= self.total


class ScanProgress:
    """Monotonic completion counter shared between workers and a reporter.

    Workers call ``advance`` after each file; reporters poll ``snapshot`` at
    their own cadence and may miss intermediate values.
    """

    def __init__(self, total: int = 0) -> None:
        self._lock = threading.Lock()
        self._completed = 0
        self._total = total
        self._current_file = ""

    def reset(self, total: int) -> None:
        """Prepare the counter for a new run over ``total`` files."""
        with self._lock:
            self._completed = 0
            self._total = total
            self._current_file = ""

    def advance(self, file_name: str) -> int:
        """Record one completed file and return the new completed count."""
        with self._lock:
            self._completed += 1
            self._current_file = file_name
            return self._completed

    def snapshot(self) -> ProgressSnapshot:
        """Return the current progress without blocking workers for long."""
        with self._lock:
            return ProgressSnapshot(self._completed, self._total, self._current_file)


class CancellationToken:
    """Cooperative cancellation flag checked by workers between files."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request that workers stop before their next file."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Return True once cancellation has been requested."""
        return self._event.is_set()


__all__ = ["CancellationToken", "ProgressSnapshot", "ScanProgress"]
