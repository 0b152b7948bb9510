"""Magic-number signature catalogue and lookup."""

from .catalogue import KNOWN_EXTENSIONS, builtin_rules
from .errors import SignatureError, SignatureLoadError, SignatureTableFrozenError
from .loader import SignatureLoader
from .models import SignatureRule
from .table import SignatureTable

__all__ = [
    "KNOWN_EXTENSIONS",
    "SignatureError",
    "SignatureLoadError",
    "SignatureLoader",
    "SignatureRule",
    "SignatureTable",
    "SignatureTableFrozenError",
    "builtin_rules",
]
