"""Shannon entropy estimation over byte samples."""

from __future__ import annotations

import math
from collections import Counter

DEFAULT_ENCRYPTION_THRESHOLD = 7.5


def entropy_of(data: bytes) -> float:
    """Return the Shannon entropy of ``data`` in bits per byte.

    The result lies in ``[0, 8]``; an empty sample has entropy 0.
    """
    length = len(data)
    if length == 0:
        return 0.0
    entropy = 0.0
    for count in Counter(data).values():
        p = count / length
        entropy -= p * math.log2(p)
    # Guard against -0.0 and float drift above the 8-bit ceiling.
    return min(8.0, max(0.0, entropy))


def is_likely_encrypted(entropy: float, threshold: float = DEFAULT_ENCRYPTION_THRESHOLD) -> bool:
    """Return True when ``entropy`` suggests encrypted or compressed content."""
    return entropy >= threshold


def entropy_level(entropy: float) -> str:
    """Bucket an entropy value into ``Low``, ``Medium`` or ``High``."""
    if entropy < 4:
        return "Low"
    if entropy < 7:
        return "Medium"
    return "High"


__all__ = [
    "DEFAULT_ENCRYPTION_THRESHOLD",
    "entropy_level",
    "entropy_of",
    "is_likely_encrypted",
]
