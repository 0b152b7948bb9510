"""Tests for organizing classified files into type folders."""

from pathlib import Path

from PIL import Image

from filesniff.analysis import FileClassifier
from filesniff.organization import FileOrganizer, suggest_extension_fixes, type_folder_name


def test_type_folder_name_flattens_separators() -> None:
    assert type_folder_name("ZIP/DOCX/XLSX") == "ZIP-DOCX-XLSX"
    assert type_folder_name("PNG") == "PNG"
    assert type_folder_name("  ") == "Other"


def test_organize_copies_identified_files(tmp_path: Path) -> None:
    image = tmp_path / "image.png"
    Image.new("RGB", (4, 4), color="white").save(image, format="PNG")
    archive = tmp_path / "bundle.zip"
    archive.write_bytes(b"PK\x03\x04" + b"\x00" * 30)
    tiny = tmp_path / "tiny.bin"
    tiny.write_bytes(b"x")
    blob = tmp_path / "blob.bin"
    blob.write_bytes(bytes(range(1, 100)))

    classifier = FileClassifier()
    results = [classifier.classify(path) for path in (image, archive, tiny, blob)]

    outcome = FileOrganizer(tmp_path).organize(results)

    organized = tmp_path / "OrganizedFiles"
    assert outcome.output_root == organized
    assert (organized / "PNG" / "image.png").read_bytes() == image.read_bytes()
    assert (organized / "ZIP-DOCX-XLSX" / "bundle.zip").exists()
    assert sorted(op.source.name for op in outcome.copied) == ["bundle.zip", "image.png"]
    assert sorted(path.name for path in outcome.skipped) == ["blob.bin", "tiny.bin"]
    assert outcome.failed == []
    # Sources are copied, never moved.
    assert image.exists()


def test_organize_replaces_existing_copies(tmp_path: Path) -> None:
    note = tmp_path / "note.txt"
    note.write_text("first version", encoding="utf-8")
    organizer = FileOrganizer(tmp_path, folder_name="Sorted")
    classifier = FileClassifier()

    organizer.organize([classifier.classify(note)])
    note.write_text("second version", encoding="utf-8")
    organizer.organize([classifier.classify(note)])

    copied = tmp_path / "Sorted" / "Text" / "note.txt"
    assert copied.read_text(encoding="utf-8") == "second version"


def test_organize_records_failures_and_continues(tmp_path: Path) -> None:
    note = tmp_path / "note.txt"
    note.write_text("words", encoding="utf-8")
    other = tmp_path / "other.txt"
    other.write_text("more words", encoding="utf-8")
    classifier = FileClassifier()
    results = [classifier.classify(note), classifier.classify(other)]
    note.unlink()

    outcome = FileOrganizer(tmp_path).organize(results)

    assert [path.name for path in outcome.failed] == ["note.txt"]
    assert [op.source.name for op in outcome.copied] == ["other.txt"]


def test_suggest_extension_fixes(tmp_path: Path) -> None:
    disguised = tmp_path / "holiday.txt"
    Image.new("RGB", (4, 4), color="black").save(disguised, format="PNG")
    honest = tmp_path / "notes.txt"
    honest.write_text("plain", encoding="utf-8")

    classifier = FileClassifier()
    fixes = suggest_extension_fixes([classifier.classify(disguised), classifier.classify(honest)])

    assert len(fixes) == 1
    assert fixes[0].source == disguised
    assert fixes[0].suggested_name == "holiday.png"
    assert fixes[0].expected_extension == ".png"
