"""Built-in magic-number catalogue.

Entries are tried in order and the first match wins, so longer or more
specific patterns must appear before shorter patterns that would shadow them
(for example the ``504B0304`` ZIP header ahead of the bare ``504B`` fallback).
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import SignatureRule

# (pattern, type, category, description, extensions)
_SEED: List[Tuple[str, str, str, str, Tuple[str, ...]]] = [
    # Images
    ("89504E47", "PNG", "Image", "Portable Network Graphics", (".png",)),
    ("FFD8FFE0", "JPEG", "Image", "JPEG Image (JFIF)", (".jpg", ".jpeg")),
    ("FFD8FFE1", "JPEG", "Image", "JPEG Image (EXIF)", (".jpg", ".jpeg")),
    ("FFD8FFDB", "JPEG", "Image", "JPEG Image", (".jpg", ".jpeg")),
    ("47494638", "GIF", "Image", "Graphics Interchange Format", (".gif",)),
    ("424D", "BMP", "Image", "Bitmap Image", (".bmp",)),
    ("38425053", "PSD", "Image", "Adobe Photoshop Document", (".psd",)),
    ("49492A00", "TIFF", "Image", "Tagged Image File Format (LE)", (".tiff", ".tif")),
    ("4D4D002A", "TIFF", "Image", "Tagged Image File Format (BE)", (".tiff", ".tif")),
    ("00000100", "ICO", "Image", "Windows Icon", (".ico",)),
    ("00000200", "CUR", "Image", "Windows Cursor", (".cur",)),
    # Documents
    ("25504446", "PDF", "Document", "Portable Document Format", (".pdf",)),
    (
        "D0CF11E0A1B11AE1",
        "DOC/XLS/PPT",
        "Document",
        "Microsoft Office Legacy",
        (".doc", ".xls", ".ppt"),
    ),
    (
        "504B0304",
        "ZIP/DOCX/XLSX",
        "Archive",
        "ZIP Archive or Office Open XML",
        (".zip", ".docx", ".xlsx", ".pptx", ".jar", ".apk"),
    ),
    ("504B0506", "ZIP", "Archive", "ZIP Archive (empty)", (".zip",)),
    ("504B0708", "ZIP", "Archive", "ZIP Archive (spanned)", (".zip",)),
    ("7B5C727466", "RTF", "Document", "Rich Text Format", (".rtf",)),
    # Archives
    ("52617221", "RAR", "Archive", "RAR Archive", (".rar",)),
    ("377ABCAF271C", "7Z", "Archive", "7-Zip Archive", (".7z",)),
    ("1F8B", "GZIP", "Archive", "GZIP Compressed", (".gz", ".gzip")),
    ("425A68", "BZ2", "Archive", "BZIP2 Compressed", (".bz2",)),
    ("FD377A585A00", "XZ", "Archive", "XZ Compressed", (".xz",)),
    ("504B", "ZIP", "Archive", "ZIP Archive", (".zip",)),
    ("1F9D", "Z", "Archive", "LZW Compressed", (".z",)),
    ("1FA0", "Z", "Archive", "LZH Compressed", (".z",)),
    # Audio
    ("494433", "MP3", "Audio", "MP3 Audio (ID3)", (".mp3",)),
    ("FFFB", "MP3", "Audio", "MP3 Audio", (".mp3",)),
    ("FFF3", "MP3", "Audio", "MP3 Audio", (".mp3",)),
    ("FFF2", "MP3", "Audio", "MP3 Audio", (".mp3",)),
    ("664C6143", "FLAC", "Audio", "Free Lossless Audio Codec", (".flac",)),
    ("4F676753", "OGG", "Audio", "OGG Vorbis", (".ogg",)),
    # Video
    ("1A45DFA3", "MKV/WEBM", "Video", "Matroska/WebM Video", (".mkv", ".webm")),
    ("464C56", "FLV", "Video", "Flash Video", (".flv",)),
    ("000001BA", "MPEG", "Video", "MPEG Video", (".mpg", ".mpeg")),
    ("000001B3", "MPEG", "Video", "MPEG Video", (".mpg", ".mpeg")),
    ("30264032", "WMV", "Video", "Windows Media Video", (".wmv",)),
    # Executables
    ("4D5A", "EXE/DLL", "Executable", "Windows Executable", (".exe", ".dll", ".sys")),
    ("7F454C46", "ELF", "Executable", "Linux Executable", ()),
    ("CAFEBABE", "CLASS/MACH-O", "Executable", "Java Class or macOS", (".class",)),
    ("FEEDFACE", "MACH-O", "Executable", "macOS Executable (32-bit)", ()),
    ("FEEDFACF", "MACH-O", "Executable", "macOS Executable (64-bit)", ()),
    ("6465780A", "DEX", "Executable", "Android Dalvik Executable", (".dex",)),
    # Database
    ("53514C697465", "SQLITE", "Database", "SQLite Database", (".db", ".sqlite", ".sqlite3")),
    # Web/Code
    ("3C3F786D6C", "XML", "Data", "XML Document", (".xml",)),
    ("3C21444F43545950", "HTML", "Web", "HTML Document", (".html", ".htm")),
    ("3C68746D6C", "HTML", "Web", "HTML Document", (".html", ".htm")),
    ("7B", "JSON", "Data", "JSON Data (probable)", (".json",)),
    ("EFBBBF", "UTF8-BOM", "Text", "UTF-8 with BOM", (".txt",)),
    ("FFFE", "UTF16-LE", "Text", "UTF-16 Little Endian", (".txt",)),
    ("FEFF", "UTF16-BE", "Text", "UTF-16 Big Endian", (".txt",)),
    # Fonts
    ("00010000", "TTF", "Font", "TrueType Font", (".ttf",)),
    ("4F54544F", "OTF", "Font", "OpenType Font", (".otf",)),
    ("774F4646", "WOFF", "Font", "Web Open Font Format", (".woff",)),
    ("774F4632", "WOFF2", "Font", "Web Open Font Format 2", (".woff2",)),
    # Other
    ("25215053", "PS", "Document", "PostScript", (".ps", ".eps")),
    ("4344303031", "ISO", "Disk", "ISO Disk Image", (".iso",)),
]

# Extension sets consulted for mismatch detection, keyed by lower-cased type
# name. Types absent from this mapping never report a mismatch.
KNOWN_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    "png": (".png",),
    "jpeg": (".jpg", ".jpeg"),
    "gif": (".gif",),
    "bmp": (".bmp",),
    "pdf": (".pdf",),
    "zip/docx/xlsx": (".zip", ".docx", ".xlsx", ".pptx", ".odt", ".jar", ".apk"),
    "zip": (".zip", ".jar", ".apk"),
    "rar": (".rar",),
    "7z": (".7z",),
    "mp3": (".mp3",),
    "mp4": (".mp4", ".m4v"),
    "mkv/webm": (".mkv", ".webm"),
    "exe/dll": (".exe", ".dll", ".sys"),
    "doc/xls/ppt": (".doc", ".xls", ".ppt"),
}


def builtin_rules() -> List[SignatureRule]:
    """Return fresh rule objects for the built-in catalogue, in match order."""
    return [
        SignatureRule(
            pattern=pattern,
            type_name=type_name,
            category=category,
            description=description,
            known_extensions=extensions,
        )
        for pattern, type_name, category, description, extensions in _SEED
    ]


__all__ = ["KNOWN_EXTENSIONS", "builtin_rules"]
