"""File classification: signatures, entropy and extension heuristics."""

from .classifier import EXTENSION_FALLBACKS, FileClassifier, is_traversal_path
from .entropy import DEFAULT_ENCRYPTION_THRESHOLD, entropy_level, entropy_of, is_likely_encrypted
from .hashing import HashComputer
from .models import ClassificationResult, ClassificationStatus

__all__ = [
    "ClassificationResult",
    "ClassificationStatus",
    "DEFAULT_ENCRYPTION_THRESHOLD",
    "EXTENSION_FALLBACKS",
    "FileClassifier",
    "HashComputer",
    "entropy_level",
    "entropy_of",
    "is_likely_encrypted",
    "is_traversal_path",
]
