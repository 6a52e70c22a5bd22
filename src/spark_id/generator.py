"""
Bulk and non-raising generation helpers.

This module layers convenience operations over the identifier model:
- bounded bulk generation (`generate_multiple`)
- unique-set generation with a fixed attempt budget (`generate_unique`)
- result-object variants that never raise (`generate_id_safe`, `validate_id`)

Bulk calls resolve configuration once and reuse that snapshot for every
identifier, so a concurrent `configure()` cannot produce a mixed batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from spark_id.codec import validate_alphabet
from spark_id.config.store import resolve_config
from spark_id.constants import MAX_BULK_COUNT, UNIQUE_ATTEMPTS_PER_ID
from spark_id.errors import (
    CountTooLargeError,
    GenerationFailedError,
    InvalidCountError,
    SparkIdError,
)
from spark_id.identifier import (
    INVALID_FORMAT_CODE,
    VALIDATION_ERROR_CODE,
    ValidationResult,
    generate,
    is_valid,
)
from spark_id.observability.logging import get_logger

if TYPE_CHECKING:
    from spark_id.entropy import RandBytes
    from spark_id.identifier import ConfigOverrides

_LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of ``generate_id_safe``."""

    success: bool
    id: str | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"success": self.success}
        if self.id is not None:
            payload["id"] = self.id
        if self.error is not None:
            payload["error"] = self.error
        if self.code is not None:
            payload["code"] = self.code
        return payload


def generate_multiple(
    count: int,
    prefix: str | None = None,
    config: ConfigOverrides | None = None,
    *,
    randbytes: RandBytes | None = None,
) -> list[str]:
    """Generate ``count`` identifiers (1..1000); duplicates are not filtered."""
    _check_count(count)
    snapshot = resolve_config(config)
    ids = [generate(prefix, snapshot, randbytes=randbytes) for _ in range(count)]
    _LOGGER.debug("bulk_generation_completed", requested=count, has_prefix=prefix is not None)
    return ids


def generate_unique(
    count: int,
    prefix: str | None = None,
    config: ConfigOverrides | None = None,
    *,
    randbytes: RandBytes | None = None,
) -> set[str]:
    """Generate ``count`` distinct identifiers within ``count * 10`` attempts.

    Only the attempt budget bounds the request; ``count <= 0`` yields an empty set.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidCountError(count)
    snapshot = resolve_config(config)
    max_attempts = count * UNIQUE_ATTEMPTS_PER_ID

    ids: set[str] = set()
    attempts = 0
    while len(ids) < count and attempts < max_attempts:
        candidate = generate(prefix, snapshot, randbytes=randbytes)
        attempts += 1
        if candidate in ids:
            _LOGGER.debug("unique_generation_collision", attempts=attempts, unique=len(ids))
            continue
        ids.add(candidate)

    if len(ids) < count:
        _LOGGER.warning(
            "unique_generation_exhausted",
            requested=count,
            attempts=attempts,
            unique=len(ids),
            entropy_bits=snapshot["entropy_bits"],
        )
        raise GenerationFailedError(count, attempts=attempts, generated=len(ids))
    return ids


def generate_id_safe(
    prefix: str | None = None,
    config: ConfigOverrides | None = None,
    *,
    randbytes: RandBytes | None = None,
) -> GenerationResult:
    """Like ``generate`` but reports failures in the result instead of raising."""
    try:
        identifier = generate(prefix, config, randbytes=randbytes)
    except SparkIdError as exc:
        return GenerationResult(success=False, error=str(exc), code=exc.code.value)
    except (ValueError, TypeError) as exc:
        return GenerationResult(success=False, error=str(exc) or exc.__class__.__name__)
    return GenerationResult(success=True, id=identifier)


def validate_id(id_string: str, config: ConfigOverrides | None = None) -> ValidationResult:
    """Validate and explain; never raises.

    A configuration that cannot validate anything (bad override, unusable alphabet)
    is reported as ``VALIDATION_ERROR``; a rejected identifier as ``INVALID_FORMAT``.
    """
    try:
        resolved = resolve_config(config)
        validate_alphabet(resolved["alphabet"])
    except SparkIdError as exc:
        return ValidationResult(is_valid=False, error=str(exc), code=VALIDATION_ERROR_CODE)
    if is_valid(id_string, resolved):
        return ValidationResult(is_valid=True)
    return ValidationResult(is_valid=False, error="Invalid ID format", code=INVALID_FORMAT_CODE)


def _check_count(count: object) -> None:
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise InvalidCountError(count)
    if count > MAX_BULK_COUNT:
        raise CountTooLargeError(count, limit=MAX_BULK_COUNT)


__all__ = [
    "GenerationResult",
    "generate_id_safe",
    "generate_multiple",
    "generate_unique",
    "validate_id",
]
