"""Load additional signature rules from JSON or YAML files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping

import yaml
from pydantic import ValidationError

from .errors import SignatureLoadError
from .models import SignatureRule

LOGGER = logging.getLogger(__name__)

# Signature files may use either the short keys or the model field names.
_FIELD_ALIASES = {
    "hex": "pattern",
    "pattern": "pattern",
    "type": "type_name",
    "type_name": "type_name",
    "category": "category",
    "description": "description",
    "extensions": "known_extensions",
    "known_extensions": "known_extensions",
}
_REQUIRED = ("pattern", "type_name", "category", "description")
_NUMERIC_TAGS = {"tag:yaml.org,2002:int", "tag:yaml.org,2002:float"}


class _PatternLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric-looking scalars such as ``00010000`` as strings."""


_PatternLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class SignatureLoader:
    """Parse declarative signature sources into ``SignatureRule`` objects.

    Sources are JSON or YAML documents holding a list of records, or a
    mapping with a ``signatures`` key holding that list. Each record carries
    ``hex`` (or ``pattern``), ``type``, ``category`` and ``description``;
    ``extensions`` is optional. Malformed records are skipped.
    """

    def load(self, path: Path) -> List[SignatureRule]:
        """Read ``path`` and return its well-formed rules.

        Args:
            path: Signature file to read.

        Returns:
            List[SignatureRule]: Rules in file order.

        Raises:
            SignatureLoadError: If the file cannot be read or parsed, or holds
                no well-formed record.
        """
        path = Path(path).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SignatureLoadError(f"Could not read signature file {path}: {exc}") from exc

        rules = self.parse(text, suffix=path.suffix.lower())
        if not rules:
            raise SignatureLoadError(f"No valid signatures found in {path}")
        LOGGER.info("Loaded %d signature(s) from %s.", len(rules), path)
        return rules

    def parse(self, text: str, *, suffix: str = ".json") -> List[SignatureRule]:
        """Parse signature records from raw text.

        Raises:
            SignatureLoadError: If the text is not valid JSON/YAML or has an
                unexpected top-level shape.
        """
        try:
            if suffix in {".yaml", ".yml"}:
                document = yaml.load(text, Loader=_PatternLoader)
            else:
                document = json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise SignatureLoadError(f"Failed to parse signature data: {exc}") from exc

        if isinstance(document, Mapping):
            document = document.get("signatures")
        if not isinstance(document, list):
            raise SignatureLoadError("Signature data must be a list of records.")

        rules: List[SignatureRule] = []
        for index, record in enumerate(document):
            rule = self._build_rule(record)
            if rule is None:
                LOGGER.warning("Skipping malformed signature record #%d.", index)
                continue
            rules.append(rule)
        return rules

    def _build_rule(self, record: Any) -> SignatureRule | None:
        if not isinstance(record, Mapping):
            return None
        fields: dict[str, Any] = {}
        for key, value in record.items():
            target = _FIELD_ALIASES.get(str(key))
            if target is not None:
                fields[target] = value
        if isinstance(fields.get("pattern"), (int, float)) and not isinstance(
            fields["pattern"], bool
        ):
            LOGGER.warning(
                "Signature pattern %r is numeric; quote it so leading zeros survive.",
                fields["pattern"],
            )
            return None
        if any(not isinstance(fields.get(name), str) for name in _REQUIRED):
            return None
        try:
            return SignatureRule.model_validate(fields)
        except ValidationError:
            return None


__all__ = ["SignatureLoader"]
