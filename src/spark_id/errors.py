"""Error taxonomy with deterministic machine-readable codes."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error codes surfaced to callers and the CLI."""

    INVALID_PREFIX = "INVALID_PREFIX"
    INVALID_ID = "INVALID_ID"
    INVALID_ALPHABET = "INVALID_ALPHABET"
    INVALID_COUNT = "INVALID_COUNT"
    COUNT_TOO_LARGE = "COUNT_TOO_LARGE"
    GENERATION_FAILED = "GENERATION_FAILED"
    INVALID_CONFIG = "INVALID_CONFIG"
    CONFIG_LOAD_FAILED = "CONFIG_LOAD_FAILED"


class SparkIdError(ValueError):
    """Base error carrying a machine-readable ``code``."""

    def __init__(self, message: str, code: ErrorCode | str) -> None:
        self.code = ErrorCode(code)
        super().__init__(message)


class InvalidPrefixError(SparkIdError):
    """Prefix is empty, too long, or contains characters outside ``[A-Za-z0-9_]``."""

    def __init__(self, prefix: object, *, max_length: int) -> None:
        self.prefix = prefix
        self.max_length = max_length
        super().__init__(
            f"Invalid prefix: {prefix!r}. Prefix must contain only alphanumeric characters "
            f"and underscores, and be between 1-{max_length} characters.",
            ErrorCode.INVALID_PREFIX,
        )


class InvalidIdError(SparkIdError):
    """Identifier string cannot be parsed under the active configuration."""

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.value = value
        self.reason = reason or "ID format is not valid."
        super().__init__(f"Invalid ID: {value!r}. {self.reason}", ErrorCode.INVALID_ID)


class InvalidAlphabetError(SparkIdError):
    """Alphabet cannot drive the 5-bit codec."""

    def __init__(self, length: int, *, duplicates: tuple[str, ...] = ()) -> None:
        self.length = length
        self.duplicates = duplicates
        if duplicates:
            message = (
                "Alphabet must have 32 distinct characters for base32 encoding. "
                f"Duplicated characters: {', '.join(repr(char) for char in duplicates)}."
            )
        else:
            message = (
                "Alphabet must have exactly 32 characters for base32 encoding. "
                f"Got {length} characters."
            )
        super().__init__(message, ErrorCode.INVALID_ALPHABET)


class InvalidCountError(SparkIdError):
    """Bulk generation count is not a positive integer."""

    def __init__(self, count: object) -> None:
        self.count = count
        super().__init__(f"Count must be greater than 0 (got {count!r})", ErrorCode.INVALID_COUNT)


class CountTooLargeError(SparkIdError):
    """Bulk generation count exceeds the per-call limit."""

    def __init__(self, count: int, *, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(
            f"Count cannot exceed {limit} (got {count})",
            ErrorCode.COUNT_TOO_LARGE,
        )


class GenerationFailedError(SparkIdError):
    """Unique-set generation exhausted its attempt budget."""

    def __init__(self, count: int, *, attempts: int, generated: int) -> None:
        self.count = count
        self.attempts = attempts
        self.generated = generated
        super().__init__(
            f"Failed to generate {count} unique IDs after {attempts} attempts "
            f"({generated} unique)",
            ErrorCode.GENERATION_FAILED,
        )


__all__ = [
    "CountTooLargeError",
    "ErrorCode",
    "GenerationFailedError",
    "InvalidAlphabetError",
    "InvalidCountError",
    "InvalidIdError",
    "InvalidPrefixError",
    "SparkIdError",
]
