"""Content-based file classification."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from filesniff.signatures import SignatureRule, SignatureTable

from .entropy import entropy_of
from .hashing import HashComputer
from .models import (
    UNKNOWN_CATEGORY,
    UNKNOWN_TYPE,
    ClassificationResult,
    ClassificationStatus,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_SAMPLE_BYTES = 65536
DEFAULT_PREFIX_BYTES = 64
MIN_READABLE_BYTES = 2

_TEXT = ("Text", "Text", "Plain text file")
_C_SOURCE = ("Source Code", "Code", "C/C++ source file")
_HTML = ("HTML", "Web", "HTML document")

# Formats without a dependable magic number, identified by extension only.
EXTENSION_FALLBACKS: Dict[str, Tuple[str, str, str]] = {
    ".txt": _TEXT,
    ".log": _TEXT,
    ".md": _TEXT,
    ".csv": _TEXT,
    ".cfg": _TEXT,
    ".ini": _TEXT,
    ".cpp": _C_SOURCE,
    ".c": _C_SOURCE,
    ".h": _C_SOURCE,
    ".hpp": _C_SOURCE,
    ".py": ("Python", "Code", "Python script"),
    ".js": ("JavaScript", "Code", "JavaScript file"),
    ".java": ("Java", "Code", "Java source file"),
    ".html": _HTML,
    ".htm": _HTML,
    ".css": ("CSS", "Web", "Cascading Style Sheet"),
}

_TEXTUAL_TYPES = {UNKNOWN_TYPE.lower(), "text"}


def is_traversal_path(path: Path) -> bool:
    """Return True when ``path`` contains a parent-directory segment."""
    return ".." in Path(path).parts


class FileClassifier:
    """Classify files by their leading bytes with extension fallbacks.

    ``classify`` never raises for per-file problems: unsafe paths, unreadable
    files and tiny files are reported through ``ClassificationStatus`` so a
    failure in one file cannot abort a multi-file scan.
    """

    def __init__(
        self,
        table: SignatureTable | None = None,
        *,
        sample_bytes: int = DEFAULT_SAMPLE_BYTES,
        prefix_bytes: int = DEFAULT_PREFIX_BYTES,
        hasher: HashComputer | None = None,
    ) -> None:
        self.table = table if table is not None else SignatureTable.with_builtins()
        self.sample_bytes = max(MIN_READABLE_BYTES, sample_bytes)
        self.prefix_bytes = max(1, min(prefix_bytes, self.sample_bytes))
        self.hasher = hasher

    def classify(self, path: Path | str) -> ClassificationResult:
        """Classify a single file.

        Args:
            path: File to inspect.

        Returns:
            ClassificationResult: Immutable record describing the file.
        """
        path = Path(path)
        fields: Dict[str, Any] = {"path": path, "name": path.name}

        if is_traversal_path(path):
            return ClassificationResult(
                **fields,
                type_name="Error",
                description="Invalid file path (security check failed)",
                status=ClassificationStatus.PATH_REJECTED,
            )

        started = time.perf_counter()
        fields["actual_extension"] = path.suffix.lower()

        try:
            fields["size_bytes"] = path.stat().st_size
        except (OSError, ValueError):
            fields["size_bytes"] = 0

        try:
            with path.open("rb") as fh:
                sample = fh.read(min(self.sample_bytes, fields["size_bytes"]))
        except (OSError, ValueError) as exc:
            LOGGER.debug("Could not open %s: %s", path, exc)
            return self._finish(
                fields,
                started,
                type_name="Unreadable",
                description="Could not open file",
                status=ClassificationStatus.UNREADABLE,
            )

        if len(sample) < MIN_READABLE_BYTES:
            return self._finish(
                fields,
                started,
                type_name="Empty/Corrupt",
                description="File too small to identify",
                status=ClassificationStatus.EMPTY_OR_CORRUPT,
                is_corrupt=True,
            )

        fields["entropy"] = entropy_of(sample)
        rule = self.table.match_bytes(sample[: self.prefix_bytes])

        if rule is not None:
            fields.update(
                type_name=rule.type_name,
                category=rule.category,
                description=rule.description,
                matched_pattern=rule.pattern,
                status=ClassificationStatus.OK,
            )
            expected = self._expected_extension(rule, fields["actual_extension"])
            if expected is not None:
                fields.update(extension_mismatch=True, expected_extension=expected)
        else:
            fallback = EXTENSION_FALLBACKS.get(fields["actual_extension"])
            if fallback is not None:
                type_name, category, description = fallback
                fields.update(
                    type_name=type_name,
                    category=category,
                    description=description,
                    status=ClassificationStatus.OK,
                )

        if self.hasher is not None:
            fields["sha256"] = self.hasher.compute(path)

        return self._finish(fields, started)

    def _expected_extension(self, rule: SignatureRule, actual: str) -> Optional[str]:
        """Return the preferred extension when ``actual`` disagrees with ``rule``."""
        if not actual:
            return None
        if rule.type_name.lower() in _TEXTUAL_TYPES or rule.category == "Text":
            return None
        known = self.table.known_extensions(rule.type_name)
        if not known or actual in known:
            return None
        return known[0]

    def _finish(
        self, fields: Dict[str, Any], started: float, **overrides: Any
    ) -> ClassificationResult:
        fields.update(overrides)
        fields["analysis_duration_ms"] = (time.perf_counter() - started) * 1000.0
        return ClassificationResult(**fields)


__all__ = [
    "DEFAULT_PREFIX_BYTES",
    "DEFAULT_SAMPLE_BYTES",
    "EXTENSION_FALLBACKS",
    "FileClassifier",
    "is_traversal_path",
]
