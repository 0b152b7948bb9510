"""Signature rule data models."""

from __future__ import annotations

import re
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

WILDCARD = "."
_PATTERN_RE = re.compile(r"^[0-9A-F.]+$")


class SignatureRule(BaseModel):
    """A magic-number rule matched against the start of a file.

    The pattern is a run of nibble tokens: each character is either an
    upper-case hex digit that must match exactly or ``.``, which accepts any
    nibble. Rules conventionally express wildcards as a four-character run
    (``....``) covering two bytes.

    Attributes:
        pattern: Hex nibble pattern matched against the file prefix.
        type_name: Short type label reported for matching files.
        category: Broad category such as ``Image`` or ``Archive``.
        description: Human-readable description of the format.
        known_extensions: Extensions conventionally used for the format.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern: str = Field(min_length=1)
    type_name: str = Field(min_length=1)
    category: str = "Unknown"
    description: str = ""
    known_extensions: Tuple[str, ...] = ()

    @field_validator("pattern", mode="before")
    @classmethod
    def _normalize_pattern(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        normalized = re.sub(r"\s+", "", value).upper()
        if normalized and not _PATTERN_RE.match(normalized):
            raise ValueError(f"pattern {value!r} must contain only hex digits or '.' wildcards")
        return normalized

    @field_validator("known_extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return value
        normalized = []
        for ext in value:
            ext = str(ext).strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return tuple(normalized)

    @property
    def has_wildcard(self) -> bool:
        """Return True when the pattern contains wildcard nibbles."""
        return WILDCARD in self.pattern

    def matches(self, hex_prefix: str) -> bool:
        """Return True when the upper-case hex prefix satisfies this rule.

        A prefix shorter than the pattern never matches, even when the
        uncovered positions are wildcards.
        """
        pattern = self.pattern
        if len(hex_prefix) < len(pattern):
            return False
        if not self.has_wildcard:
            return hex_prefix.startswith(pattern)
        return all(
            expected == WILDCARD or expected == actual
            for expected, actual in zip(pattern, hex_prefix)
        )


__all__ = ["SignatureRule", "WILDCARD"]
