"""Organization data models."""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


class CopyOperation(BaseModel):
    """Represents copying a classified file into its type folder.

    Attributes:
        source: Original file path.
        destination: Path of the copy inside the organized tree.
        type_name: Detected type that selected the destination folder.
    """

    source: Path
    destination: Path
    type_name: str


class ExtensionFix(BaseModel):
    """Suggested rename for a file whose extension disagrees with its content."""

    source: Path
    suggested_name: str
    expected_extension: str


class OrganizationResult(BaseModel):
    """Aggregated outcome of an organize pass."""

    output_root: Path
    copied: List[CopyOperation] = Field(default_factory=list)
    skipped: List[Path] = Field(default_factory=list)
    failed: List[Path] = Field(default_factory=list)
