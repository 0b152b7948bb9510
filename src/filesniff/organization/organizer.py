"""Copy classified files into per-type folders."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import Iterable, List

from filesniff.analysis import ClassificationResult

from .models import CopyOperation, ExtensionFix, OrganizationResult

LOGGER = logging.getLogger(__name__)

DEFAULT_FOLDER_NAME = "OrganizedFiles"


def type_folder_name(type_name: str) -> str:
    """Return a single path segment for ``type_name``.

    Separators inside compound labels such as ``ZIP/DOCX/XLSX`` would create
    nested folders, so they are replaced with ``-``.
    """
    cleaned = re.sub(r"[\\/:*?\"<>|]+", "-", type_name.strip())
    cleaned = cleaned.strip(". ")
    return cleaned or "Other"


class FileOrganizer:
    """Copy readable, identified files into ``<root>/<folder>/<type>/``.

    Copying is best effort: a file that cannot be copied is recorded in
    ``OrganizationResult.failed`` and the pass continues.
    """

    def __init__(self, root: Path, folder_name: str = DEFAULT_FOLDER_NAME) -> None:
        self.root = Path(root)
        self.folder_name = folder_name

    @property
    def output_root(self) -> Path:
        """Return the directory that receives organized copies."""
        return self.root / self.folder_name

    def organize(self, results: Iterable[ClassificationResult]) -> OrganizationResult:
        """Copy each identified file into its type folder.

        Existing files with the same name at the destination are replaced.

        Args:
            results: Classification results from a scan.

        Returns:
            OrganizationResult: Copies made, plus skipped and failed sources.
        """
        outcome = OrganizationResult(output_root=self.output_root)
        for result in results:
            if not result.is_known:
                outcome.skipped.append(result.path)
                continue
            destination = self.output_root / type_folder_name(result.type_name) / result.name
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                if destination.exists():
                    destination.unlink()
                shutil.copy2(result.path, destination)
            except OSError as exc:
                LOGGER.debug("Skipping copy of %s: %s", result.path, exc)
                outcome.failed.append(result.path)
                continue
            outcome.copied.append(
                CopyOperation(source=result.path, destination=destination, type_name=result.type_name)
            )
        return outcome


def suggest_extension_fixes(results: Iterable[ClassificationResult]) -> List[ExtensionFix]:
    """Propose corrected file names for results flagged with an extension mismatch."""
    fixes: List[ExtensionFix] = []
    for result in results:
        if not result.extension_mismatch or not result.expected_extension:
            continue
        fixes.append(
            ExtensionFix(
                source=result.path,
                suggested_name=f"{result.path.stem}{result.expected_extension}",
                expected_extension=result.expected_extension,
            )
        )
    return fixes


__all__ = ["DEFAULT_FOLDER_NAME", "FileOrganizer", "suggest_extension_fixes", "type_folder_name"]
