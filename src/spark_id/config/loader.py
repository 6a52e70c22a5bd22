"""
spark-id: config file and environment loader.

File: src/spark_id/config/loader.py

Purpose
- Load effective identifier config from defaults, a TOML/YAML file, env vars, and CLI overrides.

What should be included in this file
- Precedence logic: CLI > env (SPARK_ID_) > file > defaults.
- TOML loading via ``tomllib``; YAML loading via PyYAML.
- Deterministic environment variable mapping and coercion.

Functional requirements
- Accept either top-level keys or a ``[spark_id]`` table in the file.
- Reject invalid values through schema validation.
"""

from __future__ import annotations

import json
import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Literal

import yaml

from spark_id.config.schema import (
    CONFIG_KEYS,
    DEFAULT_CONFIG,
    IdConfig,
    default_config,
    validate_overrides,
)
from spark_id.errors import ErrorCode, SparkIdError

DEFAULT_CONFIG_FILE: Final[str] = "spark-id.toml"
ENV_PREFIX: Final[str] = "SPARK_ID_"
FILE_TABLE: Final[str] = "spark_id"

_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})
_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})
_INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"-?[0-9]+")

_ValueKind = Literal["str", "int", "bool", "id"]
_ENV_KINDS: Final[dict[str, _ValueKind]] = {
    "alphabet": "str",
    "entropy_bits": "int",
    "max_prefix_length": "int",
    "separator": "str",
    "case": "str",
    "encoding": "str",
    "timestamp": "bool",
    "machine_id": "id",
}


class ConfigLoadError(SparkIdError):
    """Raised when config cannot be loaded or overrides cannot be coerced."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.CONFIG_LOAD_FAILED)


def load_config(
    config_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> IdConfig:
    """Load effective config with deterministic precedence: CLI > env > file > defaults."""

    resolved_path = _resolve_config_path(config_path)
    explicit_path = config_path is not None
    env_map = dict(os.environ if environ is None else environ)

    file_payload = validate_overrides(_load_file(resolved_path, required=explicit_path))
    env_payload = validate_overrides(_collect_env_overrides(env_map))
    cli_payload = validate_overrides(cli_overrides)

    merged: dict[str, Any] = dict(default_config())
    merged.update(file_payload)
    merged.update(env_payload)
    merged.update(cli_payload)
    return {key: merged[key] for key in CONFIG_KEYS}  # type: ignore[return-value]


def dump_effective_config(config: Mapping[str, object]) -> str:
    """Return deterministic JSON dump of an effective config."""

    payload = {key: config.get(key, DEFAULT_CONFIG[key]) for key in CONFIG_KEYS}  # type: ignore[literal-required]
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / DEFAULT_CONFIG_FILE).resolve()
    return Path(config_path).expanduser().resolve()


def _load_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}

    if path.suffix.lower() in _YAML_SUFFIXES:
        parsed = _read_yaml(path)
    else:
        parsed = _read_toml(path)

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigLoadError(f"config root must be an object: {path}")

    table = parsed.get(FILE_TABLE)
    if table is None:
        return parsed
    if not isinstance(table, dict):
        raise ConfigLoadError(f"[{FILE_TABLE}] must be a table: {path}")
    return table


def _read_toml(path: Path) -> object:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc


def _read_yaml(path: Path) -> object:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key in CONFIG_KEYS:
        env_name = _env_name_for_key(key)
        raw = environ.get(env_name)
        if raw is None:
            continue
        overrides[key] = _coerce_env(raw, _ENV_KINDS[key], env_name, key)
    return overrides


def _coerce_env(raw: str, value_type: _ValueKind, env_name: str, key: str) -> object:
    value = raw.strip()
    if value_type == "str":
        # Separators and alphabets are taken verbatim; whitespace may be significant.
        return raw
    if value_type == "int":
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigLoadError(f"{env_name} -> {key} must be an integer") from exc
    if value_type == "id":
        if _INTEGER_PATTERN.fullmatch(value):
            return int(value)
        return value or None

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(
        f"{env_name} -> {key} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


def _env_name_for_key(key: str) -> str:
    return ENV_PREFIX + key.upper()


__all__ = [
    "ConfigLoadError",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "dump_effective_config",
    "load_config",
]
