"""Ordered signature table used by the classifier."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .catalogue import KNOWN_EXTENSIONS, builtin_rules
from .errors import SignatureTableFrozenError
from .models import SignatureRule

LOGGER = logging.getLogger(__name__)


class SignatureTable:
    """Ordered collection of signature rules with first-match-wins lookup.

    The table is appended to during a single setup phase and then frozen.
    Once frozen it is never mutated, so concurrent ``match`` calls from scan
    workers need no locking.
    """

    def __init__(
        self,
        rules: Iterable[SignatureRule] | None = None,
        *,
        known_extensions: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._rules: Tuple[SignatureRule, ...] = tuple(rules or ())
        source = KNOWN_EXTENSIONS if known_extensions is None else known_extensions
        self._known_extensions: Dict[str, Tuple[str, ...]] = {
            key.lower(): tuple(values) for key, values in source.items()
        }
        self._frozen = False

    @classmethod
    def with_builtins(cls) -> "SignatureTable":
        """Return a table seeded with the built-in catalogue."""
        return cls(builtin_rules())

    @property
    def rules(self) -> Tuple[SignatureRule, ...]:
        """Return the rules in match order."""
        return self._rules

    @property
    def frozen(self) -> bool:
        """Return True once the table no longer accepts new rules."""
        return self._frozen

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[SignatureRule]:
        return iter(self._rules)

    def match(self, hex_prefix: str) -> Optional[SignatureRule]:
        """Return the first rule satisfied by ``hex_prefix``, if any.

        Args:
            hex_prefix: Upper-case hex encoding of the leading bytes of a file.

        Returns:
            Optional[SignatureRule]: Matching rule, or None when nothing matches.
        """
        prefix = hex_prefix.upper()
        for rule in self._rules:
            if rule.matches(prefix):
                return rule
        return None

    def match_bytes(self, prefix: bytes) -> Optional[SignatureRule]:
        """Hex-encode ``prefix`` and return the first matching rule."""
        return self.match(prefix.hex().upper())

    def load_additional(self, rules: Iterable[SignatureRule]) -> int:
        """Append rules after every existing entry.

        Args:
            rules: Additional rules, typically produced by ``SignatureLoader``.

        Returns:
            int: Number of rules appended.

        Raises:
            SignatureTableFrozenError: If the table has already been frozen.
        """
        if self._frozen:
            raise SignatureTableFrozenError(
                "Signature table is frozen; load additional rules before scanning."
            )
        added = tuple(rules)
        self._rules = self._rules + added
        for rule in added:
            key = rule.type_name.lower()
            if rule.known_extensions and key not in self._known_extensions:
                self._known_extensions[key] = rule.known_extensions
        LOGGER.debug("Appended %d signature rule(s); table size is now %d.", len(added), len(self))
        return len(added)

    def freeze(self) -> "SignatureTable":
        """Stop accepting new rules and return the table."""
        self._frozen = True
        return self

    def known_extensions(self, type_name: str) -> Tuple[str, ...]:
        """Return the registered extensions for ``type_name`` (empty when unknown)."""
        return self._known_extensions.get(type_name.lower(), ())


__all__ = ["SignatureTable"]
