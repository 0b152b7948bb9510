"""Render scan reports as JSON payloads or rich terminal tables."""

from __future__ import annotations

from typing import Any, Iterable

from rich.console import Console
from rich.table import Table

from filesniff.analysis import ClassificationResult
from filesniff.organization import ExtensionFix
from filesniff.scan import ScanReport, ScanSummary, format_size
from filesniff.signatures import SignatureRule


def file_status(result: ClassificationResult, entropy_threshold: float) -> str:
    """Return the headline status label for a result."""
    if result.is_corrupt:
        return "CORRUPT"
    if result.extension_mismatch:
        return "MISMATCH"
    if result.likely_encrypted(entropy_threshold):
        return "ENCRYPTED"
    return "OK"


def result_payload(result: ClassificationResult, entropy_threshold: float) -> dict[str, Any]:
    """Return the JSON representation of one result."""
    payload: dict[str, Any] = {
        "name": result.name,
        "path": str(result.path),
        "type": result.type_name,
        "category": result.category,
        "description": result.description,
        "status": result.status.value,
        "size": result.size_bytes,
        "sizeFormatted": format_size(result.size_bytes),
        "entropy": round(result.entropy, 4),
        "entropyLevel": result.entropy_level,
        "isCorrupt": result.is_corrupt,
        "extensionMismatch": result.extension_mismatch,
        "isEncrypted": result.likely_encrypted(entropy_threshold),
        "actualExtension": result.actual_extension,
        "analysisTime": round(result.analysis_duration_ms, 2),
    }
    if result.expected_extension:
        payload["expectedExtension"] = result.expected_extension
    if result.sha256:
        payload["sha256"] = result.sha256
    return payload


def build_json_payload(
    report: ScanReport,
    *,
    fixes: Iterable[ExtensionFix] = (),
    organized_root: str | None = None,
) -> dict[str, Any]:
    """Return the machine-readable report for a scan."""
    summary = report.summary()
    payload: dict[str, Any] = {
        "totalFiles": summary.total_files,
        "totalTime": round(summary.elapsed_seconds, 2),
        "threadsUsed": summary.workers,
        "totalSize": summary.total_size_bytes,
        "totalSizeFormatted": format_size(summary.total_size_bytes),
        "corruptFiles": summary.corrupt_count,
        "mismatchedFiles": summary.mismatch_count,
        "encryptedFiles": summary.encrypted_count,
        "cancelled": report.cancelled,
        "statistics": [
            {
                "type": stat.type_name,
                "count": stat.count,
                "size": stat.size_bytes,
                "sizeFormatted": format_size(stat.size_bytes),
            }
            for stat in summary.types
        ],
        "files": [result_payload(result, report.entropy_threshold) for result in report.results],
    }
    fix_list = [
        {"path": str(fix.source), "suggestedName": fix.suggested_name} for fix in fixes
    ]
    if fix_list:
        payload["extensionFixes"] = fix_list
    if organized_root is not None:
        payload["organizedInto"] = organized_root
    return payload


_STATUS_STYLES = {
    "CORRUPT": "[red]CORRUPT[/red]",
    "MISMATCH": "[yellow]MISMATCH[/yellow]",
    "ENCRYPTED": "[blue]ENCRYPTED[/blue]",
    "OK": "[green]OK[/green]",
}


def results_table(report: ScanReport, *, title: str) -> Table:
    """Return a table of results ordered by size, largest first."""
    table = Table(title=title)
    table.add_column("File", overflow="fold")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Entropy", justify="right")
    table.add_column("Status")
    ordered = sorted(report.results, key=lambda result: result.size_bytes, reverse=True)
    for result in ordered:
        status = file_status(result, report.entropy_threshold)
        table.add_row(
            result.name,
            result.type_name,
            format_size(result.size_bytes),
            f"{result.entropy:.2f}",
            _STATUS_STYLES[status],
        )
    return table


def distribution_table(summary: ScanSummary) -> Table:
    """Return a per-type count/size table with a simple bar column."""
    table = Table(title="File Type Distribution")
    table.add_column("Type")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("")
    for stat in summary.types:
        bar = "█" * min(stat.count * 2, 30)
        table.add_row(
            stat.type_name, str(stat.count), format_size(stat.size_bytes), f"[green]{bar}[/green]"
        )
    return table


def signatures_table(rules: Iterable[SignatureRule]) -> Table:
    """Return a table describing signature rules in match order."""
    table = Table(title="Signature Table")
    table.add_column("#", justify="right")
    table.add_column("Pattern")
    table.add_column("Type")
    table.add_column("Category")
    table.add_column("Description", overflow="fold")
    table.add_column("Extensions")
    for index, rule in enumerate(rules, start=1):
        table.add_row(
            str(index),
            rule.pattern,
            rule.type_name,
            rule.category,
            rule.description,
            ", ".join(rule.known_extensions),
        )
    return table


def render_report(console: Console, report: ScanReport, *, title: str) -> None:
    """Print the detailed results and the type distribution."""
    console.print(results_table(report, title=title))
    console.print(distribution_table(report.summary()))


__all__ = [
    "build_json_payload",
    "distribution_table",
    "file_status",
    "render_report",
    "result_payload",
    "results_table",
    "signatures_table",
]
