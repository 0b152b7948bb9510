"""Configuration models describing filesniff settings."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilesniffBaseModel(BaseModel):
    """Shared configuration for filesniff Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ScanSettings(FilesniffBaseModel):
    """Options governing enumeration and the scan pipeline.

    Attributes:
        recursive: Whether to descend into subdirectories.
        include_hidden: Whether dot-files and dot-directories are scanned.
        follow_symlinks: Whether symlinked files are scanned.
        workers: Fixed worker count; None selects one from available CPUs.
        max_workers: Upper bound on the worker pool size.
        sequential_threshold: Batches smaller than this run on one worker.
        sample_bytes: Bytes read per file for entropy and signature checks.
        prefix_bytes: Leading bytes compared against signatures.
        entropy_threshold: Entropy at which content is flagged as encrypted.
        compute_hash: Whether to compute a SHA-256 digest of each file.
        progress_interval_ms: Polling interval for the live progress bar.
    """

    recursive: bool = False
    include_hidden: bool = True
    follow_symlinks: bool = False
    workers: Optional[int] = Field(default=None, ge=1)
    max_workers: int = Field(default=8, ge=1)
    sequential_threshold: int = Field(default=10, ge=0)
    sample_bytes: int = Field(default=65_536, ge=2)
    prefix_bytes: int = Field(default=64, ge=1)
    entropy_threshold: float = Field(default=7.5, ge=0.0, le=8.0)
    compute_hash: bool = False
    progress_interval_ms: int = Field(default=50, ge=1)


class SignatureSettings(FilesniffBaseModel):
    """Extra signature sources loaded before every scan.

    Attributes:
        paths: JSON or YAML signature files appended after the built-ins.
    """

    paths: List[str] = Field(default_factory=list)


class OrganizationOptions(FilesniffBaseModel):
    """Settings for copying files into per-type folders.

    Attributes:
        enabled: Whether scans organize files without ``--organize``.
        folder_name: Folder created under the scan root for copies.
    """

    enabled: bool = False
    folder_name: str = "OrganizedFiles"


class LoggingSettings(FilesniffBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        file: Optional log file path; enables a rotating file handler.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3


class CLIOptions(FilesniffBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class FilesniffConfig(FilesniffBaseModel):
    """Top-level configuration struct for filesniff.

    Attributes:
        scan: Enumeration and pipeline settings.
        signatures: Additional signature sources.
        organization: Organize-into-folders settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    scan: ScanSettings = Field(default_factory=ScanSettings)
    signatures: SignatureSettings = Field(default_factory=SignatureSettings)
    organization: OrganizationOptions = Field(default_factory=OrganizationOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "CLIOptions",
    "FilesniffBaseModel",
    "FilesniffConfig",
    "LoggingSettings",
    "OrganizationOptions",
    "ScanSettings",
    "SignatureSettings",
]
