"""Tests for JSON and terminal report rendering."""

from pathlib import Path

from rich.console import Console

from filesniff.analysis import ClassificationResult, ClassificationStatus
from filesniff.organization import ExtensionFix
from filesniff.reporting import build_json_payload, file_status, render_report
from filesniff.scan import ScanReport, format_size


def _result(name: str, **fields: object) -> ClassificationResult:
    return ClassificationResult(path=Path("/data") / name, name=name, **fields)


def _report() -> ScanReport:
    return ScanReport(
        results=[
            _result(
                "photo.txt",
                size_bytes=2048,
                type_name="PNG",
                category="Image",
                status=ClassificationStatus.OK,
                entropy=7.8,
                extension_mismatch=True,
                expected_extension=".png",
                actual_extension=".txt",
            ),
            _result(
                "empty.bin",
                type_name="Empty/Corrupt",
                status=ClassificationStatus.EMPTY_OR_CORRUPT,
                is_corrupt=True,
                actual_extension=".bin",
            ),
            _result(
                "secret.dat",
                size_bytes=100,
                entropy=7.9,
                actual_extension=".dat",
                sha256="ab" * 32,
            ),
        ],
        workers=2,
        elapsed_seconds=0.123,
    )


def test_format_size_uses_binary_units() -> None:
    assert format_size(0) == "0.00 B"
    assert format_size(1536) == "1.50 KB"
    assert format_size(5 * 1024 * 1024) == "5.00 MB"


def test_file_status_priority() -> None:
    report = _report()

    assert [file_status(result, 7.5) for result in report.results] == [
        "MISMATCH",
        "CORRUPT",
        "ENCRYPTED",
    ]


def test_json_payload_contains_aggregates_and_files() -> None:
    fixes = [
        ExtensionFix(
            source=Path("/data/photo.txt"), suggested_name="photo.png", expected_extension=".png"
        )
    ]

    payload = build_json_payload(_report(), fixes=fixes, organized_root="/data/OrganizedFiles")

    assert payload["totalFiles"] == 3
    assert payload["threadsUsed"] == 2
    assert payload["totalSize"] == 2148
    assert payload["corruptFiles"] == 1
    assert payload["mismatchedFiles"] == 1
    assert payload["encryptedFiles"] == 2
    assert payload["cancelled"] is False
    assert [stat["type"] for stat in payload["statistics"]] == ["Empty/Corrupt", "PNG", "Unknown"]
    assert payload["extensionFixes"] == [
        {"path": str(Path("/data/photo.txt")), "suggestedName": "photo.png"}
    ]
    assert payload["organizedInto"] == "/data/OrganizedFiles"

    first, second, third = payload["files"]
    assert first["name"] == "photo.txt"
    assert first["status"] == "ok"
    assert first["expectedExtension"] == ".png"
    assert first["entropyLevel"] == "High"
    assert "sha256" not in first
    assert second["isCorrupt"] is True
    assert "expectedExtension" not in second
    assert third["sha256"] == "ab" * 32
    assert third["isEncrypted"] is True


def test_json_payload_omits_optional_sections() -> None:
    payload = build_json_payload(ScanReport())

    assert payload["files"] == []
    assert "extensionFixes" not in payload
    assert "organizedInto" not in payload


def test_render_report_prints_tables() -> None:
    console = Console(record=True, width=160)

    render_report(console, _report(), title="Analysis results")
    output = console.export_text()

    assert "Analysis results" in output
    assert "photo.txt" in output
    assert "MISMATCH" in output
    assert "File Type Distribution" in output
