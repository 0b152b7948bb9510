"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping, Sequence

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import FilesniffConfig

ENV_PREFIX = "FILESNIFF__"


def resolve_with_precedence(
    *,
    defaults: FilesniffConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> FilesniffConfig:
    """Merge configuration sources: defaults < file < environment < CLI.

    Raises:
        ConfigError: If an override is malformed or the merged values fail
            validation.
    """
    merged = defaults.model_dump(mode="python")
    for name, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source is None:
            continue
        merged = _deep_merge(merged, _normalize_mapping(source, source_name=name))

    try:
        return FilesniffConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: FilesniffConfig) -> Dict[str, str]:
    """Flatten the config into `FILESNIFF__SECTION__KEY` environment variable mappings."""
    flat: Dict[str, str] = {}

    def _recurse(prefix: list[str], value: Any) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                _recurse(prefix + [str(key)], child)
            return
        env_key = ENV_PREFIX + "__".join(part.upper() for part in prefix)
        if isinstance(value, list):
            flat[env_key] = yaml.safe_dump(value, default_flow_style=True).strip()
        else:
            flat[env_key] = "null" if value is None else str(value)

    for top_key, child_value in config.model_dump(mode="python").items():
        _recurse([str(top_key)], child_value)
    return flat


def overrides_from_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect nested overrides from `FILESNIFF__`-prefixed environment variables."""
    overrides: dict[str, Any] = {}
    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
        if not path:
            continue
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        assign_nested(overrides, path, value)
    return overrides


def assign_nested(target: dict[str, Any], path: Sequence[str], value: Any) -> None:
    """Assign ``value`` at the nested location named by ``path``.

    Raises:
        ConfigError: If a non-mapping value is encountered along the path.
    """
    node = target
    for segment in path[:-1]:
        existing = node.get(segment)
        if existing is None:
            existing = {}
            node[segment] = existing
        elif not isinstance(existing, dict):
            raise ConfigError(
                f"Cannot assign into '{segment}' because it is not a mapping."
            )
        node = existing
    node[path[-1]] = value


def _normalize_mapping(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    result: dict[str, Any] = {}
    for key, value in dict(source).items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = _normalize_mapping(value, source_name=source_name)
        try:
            existing = _lookup(result, key.split("."))
            if isinstance(existing, dict) and isinstance(value, dict):
                value = _deep_merge(existing, value)
            assign_nested(result, key.split("."), value)
        except ConfigError as exc:
            raise ConfigError(
                f"{source_name.capitalize()} override for {key} conflicts with existing value."
            ) from exc
    return result


def _lookup(node: Mapping[str, Any], path: Sequence[str]) -> Any:
    for segment in path:
        if not isinstance(node, MappingABC) or segment not in node:
            return None
        node = node[segment]
    return node


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        if isinstance(value, MappingABC) and isinstance(merged.get(key), MappingABC):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = [
    "ENV_PREFIX",
    "assign_nested",
    "flatten_for_env",
    "overrides_from_env",
    "resolve_with_precedence",
]
