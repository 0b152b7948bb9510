"""Signature table errors."""


class SignatureError(Exception):
    """Base exception for signature catalogue operations."""


class SignatureLoadError(SignatureError):
    """Raised when an external signature source yields no usable rules."""


class SignatureTableFrozenError(SignatureError):
    """Raised when rules are appended after scanning has started."""
