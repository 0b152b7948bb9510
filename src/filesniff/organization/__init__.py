"""Post-scan organization helpers."""

from .models import CopyOperation, ExtensionFix, OrganizationResult
from .organizer import DEFAULT_FOLDER_NAME, FileOrganizer, suggest_extension_fixes, type_folder_name

__all__ = [
    "CopyOperation",
    "DEFAULT_FOLDER_NAME",
    "ExtensionFix",
    "FileOrganizer",
    "OrganizationResult",
    "suggest_extension_fixes",
    "type_folder_name",
]
