"""Identifier model: generation, prefix formatting, parsing, and validation."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from spark_id.codec import (
    byte_length_for_entropy,
    encode_base32,
    is_alphabet_member,
    raw_length_bounds,
    validate_alphabet,
)
from spark_id.config.schema import IdConfig
from spark_id.config.store import resolve_config
from spark_id.constants import PREFIX_PATTERN
from spark_id.entropy import RandBytes, read_random_bytes
from spark_id.errors import InvalidIdError, InvalidPrefixError

ConfigOverrides = Mapping[str, object]

INVALID_FORMAT_CODE: Final[str] = "INVALID_FORMAT"
VALIDATION_ERROR_CODE: Final[str] = "VALIDATION_ERROR"


@dataclass(frozen=True, slots=True)
class ParsedId:
    """Components recovered from an identifier string."""

    id: str
    full: str
    prefix: str | None = None

    def has_prefix(self) -> bool:
        return self.prefix is not None

    def to_dict(self) -> dict[str, str]:
        payload = {"id": self.id, "full": self.full}
        if self.prefix is not None:
            payload["prefix"] = self.prefix
        return payload


@dataclass(frozen=True, slots=True)
class IdStats:
    """Collision statistics for a given amount of entropy."""

    entropy_bits: int
    collision_probability: float
    max_ids: int

    def to_dict(self) -> dict[str, int | float]:
        return {
            "entropy_bits": self.entropy_bits,
            "collision_probability": self.collision_probability,
            "max_ids": self.max_ids,
        }


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a non-raising validation call."""

    is_valid: bool
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"is_valid": self.is_valid}
        if self.error is not None:
            payload["error"] = self.error
        if self.code is not None:
            payload["code"] = self.code
        return payload


@dataclass(frozen=True, slots=True, eq=False)
class SecureId:
    """Immutable identifier value.

    Equality and hashing use ``full`` only, so an instance compares equal to its
    own string form. Comparison is exact; no case folding.
    """

    id: str
    full: str
    prefix: str | None = None
    config: IdConfig = field(default_factory=resolve_config, repr=False)

    @classmethod
    def create(
        cls,
        prefix: str | None = None,
        config: ConfigOverrides | None = None,
        *,
        raw_id: str | None = None,
        randbytes: RandBytes | None = None,
    ) -> SecureId:
        """Build an identifier, generating a raw id unless ``raw_id`` is supplied.

        A supplied ``raw_id`` is wrapped as-is; only the prefix is validated.
        """
        resolved = resolve_config(config)
        if prefix is not None:
            _validate_prefix(prefix, resolved)
        formatted_prefix = _format_prefix(prefix, resolved)
        identifier = raw_id or _generate_raw(resolved, randbytes)
        return cls(
            id=identifier,
            full=_compose(formatted_prefix, identifier, resolved),
            prefix=formatted_prefix,
            config=resolved,
        )

    def __str__(self) -> str:
        return self.full

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SecureId):
            return self.full == other.full
        if isinstance(other, str):
            return self.full == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.full)

    def equals(self, other: SecureId | str) -> bool:
        other_full = other if isinstance(other, str) else other.full
        return self.full == other_full

    def has_prefix(self) -> bool:
        return self.prefix is not None

    def get_entropy_bits(self) -> int:
        return self.config["entropy_bits"]

    def get_stats(self) -> IdStats:
        return _stats_for(self.get_entropy_bits())

    def validate(self) -> ValidationResult:
        """Validate ``full`` against the configuration this identifier was built with."""
        valid = is_valid(self.full, self.config)
        if valid:
            return ValidationResult(is_valid=True)
        return ValidationResult(
            is_valid=False,
            error="Invalid ID format",
            code=INVALID_FORMAT_CODE,
        )

    def generate_similar(self, *, randbytes: RandBytes | None = None) -> SecureId:
        """Fresh identifier with the same prefix and configuration."""
        return SecureId.create(self.prefix, self.config, randbytes=randbytes)

    def to_dict(self) -> dict[str, str]:
        payload = {"id": self.id, "full": self.full}
        if self.prefix is not None:
            payload["prefix"] = self.prefix
        return payload


def generate_raw(
    config: ConfigOverrides | None = None,
    *,
    randbytes: RandBytes | None = None,
) -> str:
    """Generate an unprefixed identifier."""
    return _generate_raw(resolve_config(config), randbytes)


def generate(
    prefix: str | None = None,
    config: ConfigOverrides | None = None,
    *,
    randbytes: RandBytes | None = None,
) -> str:
    """Generate ``prefix + separator + raw`` (or just ``raw`` without a prefix)."""
    resolved = resolve_config(config)
    if prefix is not None:
        # Fail before consuming any randomness.
        _validate_prefix(prefix, resolved)
    raw = _generate_raw(resolved, randbytes)
    return _compose(_format_prefix(prefix, resolved), raw, resolved)


def create(
    prefix: str | None = None,
    config: ConfigOverrides | None = None,
    *,
    randbytes: RandBytes | None = None,
) -> SecureId:
    return SecureId.create(prefix, config, randbytes=randbytes)


def parse(id_string: str, config: ConfigOverrides | None = None) -> ParsedId:
    """Split ``id_string`` on the separator and validate its raw segment.

    Raises ``InvalidIdError`` for malformed input and ``InvalidAlphabetError`` when the
    configured alphabet cannot drive the codec.
    """
    if not isinstance(id_string, str):
        raise InvalidIdError(id_string, "ID must be a string")
    if not id_string:
        raise InvalidIdError(id_string, "ID cannot be empty")

    resolved = resolve_config(config)
    validate_alphabet(resolved["alphabet"])
    parts = id_string.split(resolved["separator"])

    if len(parts) == 1:
        raw = parts[0]
        if not _is_valid_raw(raw, resolved):
            raise InvalidIdError(id_string, "Invalid ID format")
        return ParsedId(id=raw, full=raw)

    if len(parts) == 2:
        prefix, raw = parts
        if not _is_valid_raw(raw, resolved):
            raise InvalidIdError(id_string, "Invalid ID format")
        return ParsedId(id=raw, full=id_string, prefix=prefix)

    raise InvalidIdError(id_string, "ID contains too many separators")


def is_valid(id_string: str, config: ConfigOverrides | None = None) -> bool:
    """Never raises; any parse failure reads as ``False``."""
    try:
        parsed = parse(id_string, config)
        return is_valid_raw_id(parsed.id, config)
    except (ValueError, TypeError):
        return False


def is_valid_raw_id(raw_id: str, config: ConfigOverrides | None = None) -> bool:
    if not isinstance(raw_id, str) or not raw_id:
        return False
    try:
        resolved = resolve_config(config)
        validate_alphabet(resolved["alphabet"])
    except (ValueError, TypeError):
        return False
    return _is_valid_raw(raw_id, resolved)


def is_valid_prefix(prefix: str, config: ConfigOverrides | None = None) -> bool:
    try:
        _validate_prefix(prefix, resolve_config(config))
    except (ValueError, TypeError):
        return False
    return True


def validate_prefix(prefix: str, config: ConfigOverrides | None = None) -> None:
    """Raise ``InvalidPrefixError`` unless ``prefix`` is acceptable under ``config``."""
    _validate_prefix(prefix, resolve_config(config))


def get_stats(config: ConfigOverrides | None = None) -> IdStats:
    """Statistics derived from the resolved ``entropy_bits``."""
    return _stats_for(resolve_config(config)["entropy_bits"])


# ------------------------
# Internal helper routines
# ------------------------


def _generate_raw(config: IdConfig, randbytes: RandBytes | None) -> str:
    entropy_bits = config["entropy_bits"]
    data = read_random_bytes(byte_length_for_entropy(entropy_bits), randbytes)
    encoded = encode_base32(data, config["alphabet"])
    _, max_length = raw_length_bounds(entropy_bits)
    return _apply_case(encoded[:max_length], config)


def _apply_case(value: str, config: IdConfig) -> str:
    case = config["case"]
    if case == "lower":
        return value.lower()
    if case == "mixed":
        return value
    return value.upper()


def _format_prefix(prefix: str | None, config: IdConfig) -> str | None:
    if not prefix:
        return None
    return _apply_case(prefix, config)


def _compose(prefix: str | None, raw: str, config: IdConfig) -> str:
    if prefix is None:
        return raw
    return f"{prefix}{config['separator']}{raw}"


def _validate_prefix(prefix: object, config: IdConfig) -> None:
    max_length = config["max_prefix_length"]
    if (
        not isinstance(prefix, str)
        or not prefix
        or len(prefix) > max_length
        or PREFIX_PATTERN.fullmatch(prefix) is None
    ):
        raise InvalidPrefixError(prefix, max_length=max_length)


def _is_valid_raw(raw_id: str, config: IdConfig) -> bool:
    if not raw_id:
        return False
    min_length, max_length = raw_length_bounds(config["entropy_bits"])
    if not min_length <= len(raw_id) <= max_length:
        return False
    return is_alphabet_member(raw_id, config["alphabet"])


def _stats_for(entropy_bits: int) -> IdStats:
    return IdStats(
        entropy_bits=entropy_bits,
        collision_probability=math.ldexp(1.0, -entropy_bits),
        max_ids=2**entropy_bits,
    )


__all__ = [
    "ConfigOverrides",
    "INVALID_FORMAT_CODE",
    "IdStats",
    "ParsedId",
    "SecureId",
    "VALIDATION_ERROR_CODE",
    "ValidationResult",
    "create",
    "generate",
    "generate_raw",
    "get_stats",
    "is_valid",
    "is_valid_prefix",
    "is_valid_raw_id",
    "parse",
    "validate_prefix",
]
