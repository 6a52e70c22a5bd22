"""Stable constants shared across the codec, identifier model, and CLI."""

from __future__ import annotations

import re
from typing import Final

# Default symbol table: A-Z without I/O, then 2-9. Position in the string is the 5-bit value.
DEFAULT_ALPHABET: Final[str] = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
BASE32_ALPHABET_SIZE: Final[int] = 32
BITS_PER_SYMBOL: Final[int] = 5

DEFAULT_ENTROPY_BITS: Final[int] = 72
DEFAULT_MAX_PREFIX_LENGTH: Final[int] = 20
DEFAULT_SEPARATOR: Final[str] = "_"
DEFAULT_CASE: Final[str] = "upper"
DEFAULT_ENCODING: Final[str] = "base32"

CASE_VALUES: Final[tuple[str, ...]] = ("upper", "lower", "mixed")
ENCODING_VALUES: Final[tuple[str, ...]] = ("base32", "base64", "hex", "custom")

PREFIX_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_]+$")

# Bulk generation limits.
MAX_BULK_COUNT: Final[int] = 1000
UNIQUE_ATTEMPTS_PER_ID: Final[int] = 10

__all__ = [
    "BASE32_ALPHABET_SIZE",
    "BITS_PER_SYMBOL",
    "CASE_VALUES",
    "DEFAULT_ALPHABET",
    "DEFAULT_CASE",
    "DEFAULT_ENCODING",
    "DEFAULT_ENTROPY_BITS",
    "DEFAULT_MAX_PREFIX_LENGTH",
    "DEFAULT_SEPARATOR",
    "ENCODING_VALUES",
    "MAX_BULK_COUNT",
    "PREFIX_PATTERN",
    "UNIQUE_ATTEMPTS_PER_ID",
]
