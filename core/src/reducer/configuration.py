from __future__ import annotations

import hashlib
import json
import os
import re
from collections.abc import Mapping
from copy import deepcopy
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from reducer.contracts import BuildConfig
from reducer.errors import ConfigError

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML (or JSON) mapping from disk."""
    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML/JSON: {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return payload


def load_build_config(path: str | Path) -> BuildConfig:
    payload = resolve_env_vars(load_yaml(path))
    return load_build_config_dict(payload)


def load_build_config_dict(payload: Mapping[str, Any]) -> BuildConfig:
    try:
        return BuildConfig.model_validate(dict(payload))
    except ValidationError as exc:
        raise ConfigError(_format_validation_error("config", exc)) from exc


def resolve_env_vars(payload: Any) -> Any:
    return _resolve_env_vars(payload, path="$")


def _resolve_env_vars(payload: Any, *, path: str) -> Any:
    if isinstance(payload, Mapping):
        return {
            str(key): _resolve_env_vars(value, path=f"{path}.{key}")
            for key, value in payload.items()
        }
    if isinstance(payload, list):
        return [
            _resolve_env_vars(value, path=f"{path}[{index}]") for index, value in enumerate(payload)
        ]
    if isinstance(payload, str):
        return _substitute_env(payload, path=path)
    return payload


def _substitute_env(value: str, *, path: str) -> str:
    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        env_value = os.environ.get(key)
        if env_value is None:
            raise ConfigError(f"Missing environment variable '{key}' at {path}")
        return env_value

    return _ENV_VAR_PATTERN.sub(replace, value)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def apply_dotpath_overrides(
    base: Mapping[str, Any],
    overrides: Mapping[str, Any],
) -> dict[str, Any]:
    target = deepcopy(dict(base))
    for path, value in overrides.items():
        _set_dotpath(target, path, value)
    return target


def _set_dotpath(target: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    if any(not part for part in parts):
        raise ConfigError(f"Invalid override path '{path}'")

    cursor: Any = target
    for part in parts[:-1]:
        cursor = _descend(cursor, part, path=path)
    _assign(cursor, parts[-1], value, path=path)


def _descend(cursor: Any, part: str, *, path: str) -> Any:
    if isinstance(cursor, list):
        return cursor[_list_index(cursor, part, path=path)]
    next_value = cursor.get(part)
    if next_value is None:
        next_value = {}
        cursor[part] = next_value
    if not isinstance(next_value, (dict, list)):
        raise ConfigError(f"Override path '{path}' collides with non-mapping key '{part}'")
    return next_value


def _assign(cursor: Any, part: str, value: Any, *, path: str) -> None:
    if isinstance(cursor, list):
        cursor[_list_index(cursor, part, path=path)] = value
    else:
        cursor[part] = value


def _list_index(cursor: list[Any], part: str, *, path: str) -> int:
    if not part.isdigit() or int(part) >= len(cursor):
        raise ConfigError(f"Override path '{path}' has invalid list index '{part}'")
    return int(part)


def parse_override_args(items: list[str]) -> dict[str, Any]:
    """Parse CLI `key.path=value` items; values are read as YAML scalars."""
    overrides: dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ConfigError(f"Override must look like 'path=value', got '{item}'")
        overrides[key.strip()] = yaml.safe_load(raw) if raw else ""
    return overrides


def stable_hash(payload: Any, *, length: int = 12) -> str:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str).encode(
        "utf-8"
    )
    return hashlib.sha256(encoded).hexdigest()[:length]


def build_id_from_config(payload: Mapping[str, Any]) -> str:
    return f"b-{stable_hash(dict(payload), length=10)}"


def coerce_mapping(payload: Any) -> dict[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return dict(payload)
    if is_dataclass(payload) and not isinstance(payload, type):
        return dict(asdict(payload))
    if hasattr(payload, "model_dump"):
        dumped = payload.model_dump()  # type: ignore[attr-defined]
        if isinstance(dumped, Mapping):
            return dict(dumped)
    raise ConfigError(f"Expected mapping-like value, got {type(payload).__name__}")


def _format_validation_error(prefix: str, exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in error["loc"])
        details.append(f"{prefix}.{loc}: {error['msg']}" if loc else f"{prefix}: {error['msg']}")
    return "; ".join(details)
