"""Classification result models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .entropy import DEFAULT_ENCRYPTION_THRESHOLD, entropy_level

UNKNOWN_TYPE = "Unknown"
UNKNOWN_CATEGORY = "Unknown"
UNKNOWN_DESCRIPTION = "Unrecognized file type"


class ClassificationStatus(str, Enum):
    """Outcome of classifying a single file.

    Failures are reported through this status instead of being raised, so
    one bad file never aborts a scan.
    """

    OK = "ok"
    UNCLASSIFIED = "unclassified"
    PATH_REJECTED = "path_rejected"
    UNREADABLE = "unreadable"
    EMPTY_OR_CORRUPT = "empty_or_corrupt"
    CANCELLED = "cancelled"


class ClassificationResult(BaseModel):
    """Immutable classification record for one file.

    Attributes:
        path: Path of the classified file, as supplied to the classifier.
        name: File name component of ``path``.
        size_bytes: File size, or 0 when the size could not be determined.
        type_name: Detected type label.
        category: Broad category of the detected type.
        description: Human-readable description of the detected type.
        status: Outcome of the classification.
        entropy: Shannon entropy of the sampled bytes, in bits per byte.
        is_corrupt: True when fewer than two bytes could be read.
        extension_mismatch: True when the extension disagrees with the type.
        expected_extension: Preferred extension when a mismatch is flagged.
        actual_extension: Lower-cased extension of the file name.
        matched_pattern: Signature pattern that matched, if any.
        sha256: Optional content digest.
        analysis_duration_ms: Wall-clock time spent classifying the file.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str
    size_bytes: int = 0
    type_name: str = UNKNOWN_TYPE
    category: str = UNKNOWN_CATEGORY
    description: str = UNKNOWN_DESCRIPTION
    status: ClassificationStatus = ClassificationStatus.UNCLASSIFIED
    entropy: float = 0.0
    is_corrupt: bool = False
    extension_mismatch: bool = False
    expected_extension: Optional[str] = None
    actual_extension: str = ""
    matched_pattern: Optional[str] = None
    sha256: Optional[str] = None
    analysis_duration_ms: float = 0.0

    @property
    def is_known(self) -> bool:
        """Return True when the file was readable and a type was identified."""
        return self.status is ClassificationStatus.OK

    @property
    def entropy_level(self) -> str:
        """Return the coarse entropy bucket for this file."""
        return entropy_level(self.entropy)

    def likely_encrypted(self, threshold: float = DEFAULT_ENCRYPTION_THRESHOLD) -> bool:
        """Return True when the entropy meets the encryption/compression threshold."""
        return self.entropy >= threshold


__all__ = [
    "ClassificationResult",
    "ClassificationStatus",
    "UNKNOWN_CATEGORY",
    "UNKNOWN_DESCRIPTION",
    "UNKNOWN_TYPE",
]
