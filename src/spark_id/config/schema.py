"""
spark-id: configuration schema and validation.

File: src/spark_id/config/schema.py

Purpose
- Define the fixed default table and structural validation of config overrides.

What should be included in this file
- ``IdConfig`` typed mapping and the ``DEFAULT_CONFIG`` table.
- Validation of partial overrides returning structured issues (key + message).

Functional requirements
- Reject unknown keys, wrong types, and out-of-range values with one aggregated error.
- Leave alphabet length/distinctness to the codec (validated lazily at encode time).
- Treat ``None`` override values as absent.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal, TypedDict

from spark_id.constants import (
    CASE_VALUES,
    DEFAULT_ALPHABET,
    DEFAULT_CASE,
    DEFAULT_ENCODING,
    DEFAULT_ENTROPY_BITS,
    DEFAULT_MAX_PREFIX_LENGTH,
    DEFAULT_SEPARATOR,
    ENCODING_VALUES,
)
from spark_id.errors import ErrorCode, SparkIdError

CaseSetting = Literal["upper", "lower", "mixed"]
EncodingSetting = Literal["base32", "base64", "hex", "custom"]


class IdConfig(TypedDict):
    alphabet: str
    entropy_bits: int
    max_prefix_length: int
    separator: str
    case: CaseSetting
    encoding: EncodingSetting
    # Reserved: accepted and stored, no effect on generation or validation.
    timestamp: bool
    machine_id: str | int | None


class PartialIdConfig(TypedDict, total=False):
    alphabet: str
    entropy_bits: int
    max_prefix_length: int
    separator: str
    case: CaseSetting
    encoding: EncodingSetting
    timestamp: bool
    machine_id: str | int | None


DEFAULT_CONFIG: Final[IdConfig] = {
    "alphabet": DEFAULT_ALPHABET,
    "entropy_bits": DEFAULT_ENTROPY_BITS,
    "max_prefix_length": DEFAULT_MAX_PREFIX_LENGTH,
    "separator": DEFAULT_SEPARATOR,
    "case": DEFAULT_CASE,  # type: ignore[typeddict-item]
    "encoding": DEFAULT_ENCODING,  # type: ignore[typeddict-item]
    "timestamp": False,
    "machine_id": None,
}

CONFIG_KEYS: Final[tuple[str, ...]] = tuple(DEFAULT_CONFIG)


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    key: str
    message: str


class ConfigValidationError(SparkIdError):
    """Raised when a configuration override fails validation."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.key}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}", ErrorCode.INVALID_CONFIG)


def default_config() -> IdConfig:
    """Return a fresh copy of the fixed default table."""

    return copy.deepcopy(DEFAULT_CONFIG)


def validate_overrides(overrides: Mapping[str, object] | None) -> dict[str, Any]:
    """Validate a partial config and return it without ``None`` entries."""

    if overrides is None:
        return {}
    if not isinstance(overrides, Mapping):
        raise ConfigValidationError(
            (ConfigValidationIssue("<root>", f"expected mapping, got {type(overrides).__name__}"),)
        )

    issues: list[ConfigValidationIssue] = []
    out: dict[str, Any] = {}
    for key in sorted(overrides, key=str):
        value = overrides[key]
        if not isinstance(key, str) or key not in DEFAULT_CONFIG:
            issues.append(ConfigValidationIssue(str(key), "unknown field"))
            continue
        if value is None:
            continue
        message = _check_value(key, value)
        if message is not None:
            issues.append(ConfigValidationIssue(key, message))
            continue
        out[key] = value

    if issues:
        raise ConfigValidationError(issues)
    return out


def _check_value(key: str, value: object) -> str | None:
    if key == "alphabet":
        return _expect_str(value, allow_empty=True)
    if key in {"entropy_bits", "max_prefix_length"}:
        return _expect_int(value, minimum=1)
    if key == "separator":
        return _expect_str(value, allow_empty=False)
    if key == "case":
        return _expect_enum(value, CASE_VALUES)
    if key == "encoding":
        return _expect_enum(value, ENCODING_VALUES)
    if key == "timestamp":
        return None if isinstance(value, bool) else f"expected boolean, got {type(value).__name__}"
    if key == "machine_id":
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return f"expected string or integer, got {type(value).__name__}"
        return None
    return "unknown field"


def _expect_str(value: object, *, allow_empty: bool) -> str | None:
    if not isinstance(value, str):
        return f"expected string, got {type(value).__name__}"
    if not allow_empty and not value:
        return "must not be empty"
    return None


def _expect_int(value: object, *, minimum: int) -> str | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return f"expected integer, got {type(value).__name__}"
    if value < minimum:
        return f"must be >= {minimum}"
    return None


def _expect_enum(value: object, allowed_values: tuple[str, ...]) -> str | None:
    if not isinstance(value, str):
        return f"expected string, got {type(value).__name__}"
    if value not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        return f"invalid value {value!r}; expected one of: {expected}"
    return None


__all__ = [
    "CONFIG_KEYS",
    "CaseSetting",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "DEFAULT_CONFIG",
    "EncodingSetting",
    "IdConfig",
    "PartialIdConfig",
    "default_config",
    "validate_overrides",
]
