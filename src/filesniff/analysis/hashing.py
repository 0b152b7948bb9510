"""Content hashing helpers."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional

LOGGER = logging.getLogger(__name__)

_BLOCK_SIZE = 64 * 1024


class HashComputer:
    """Compute SHA-256 digests of whole files, streamed in fixed blocks."""

    def __init__(self, block_size: int = _BLOCK_SIZE) -> None:
        self.block_size = max(1, block_size)

    def compute(self, path: Path) -> Optional[str]:
        """Return the hex digest of ``path``, or None when it cannot be read."""
        digest = hashlib.sha256()
        try:
            with Path(path).open("rb") as fh:
                for block in iter(lambda: fh.read(self.block_size), b""):
                    digest.update(block)
        except OSError as exc:
            LOGGER.debug("Hashing failed for %s: %s", path, exc)
            return None
        return digest.hexdigest()


__all__ = ["HashComputer"]
