"""Base-32 bit packing over a configurable 32-symbol alphabet."""

from __future__ import annotations

from collections import Counter
from typing import Final

from spark_id.constants import BASE32_ALPHABET_SIZE, BITS_PER_SYMBOL, DEFAULT_ALPHABET
from spark_id.errors import InvalidAlphabetError

_SYMBOL_MASK: Final[int] = (1 << BITS_PER_SYMBOL) - 1


def validate_alphabet(alphabet: str) -> None:
    """Raise ``InvalidAlphabetError`` unless ``alphabet`` has 32 distinct symbols."""
    if not isinstance(alphabet, str):
        raise InvalidAlphabetError(0)
    if len(alphabet) != BASE32_ALPHABET_SIZE:
        raise InvalidAlphabetError(len(alphabet))
    duplicates = tuple(sorted(char for char, seen in Counter(alphabet).items() if seen > 1))
    if duplicates:
        raise InvalidAlphabetError(len(alphabet), duplicates=duplicates)


def encode_base32(data: bytes, alphabet: str = DEFAULT_ALPHABET) -> str:
    """Encode ``data`` MSB-first, 5 bits per symbol, left-padding the final partial group."""
    validate_alphabet(alphabet)

    accumulator = 0
    bit_count = 0
    symbols: list[str] = []
    for byte in data:
        accumulator = (accumulator << 8) | byte
        bit_count += 8
        while bit_count >= BITS_PER_SYMBOL:
            symbols.append(alphabet[(accumulator >> (bit_count - BITS_PER_SYMBOL)) & _SYMBOL_MASK])
            bit_count -= BITS_PER_SYMBOL
        # Drop consumed high bits so the accumulator stays below 2**12.
        accumulator &= (1 << bit_count) - 1

    if bit_count > 0:
        symbols.append(alphabet[(accumulator << (BITS_PER_SYMBOL - bit_count)) & _SYMBOL_MASK])

    return "".join(symbols)


def encoded_length(byte_count: int) -> int:
    """Number of symbols ``encode_base32`` emits for ``byte_count`` bytes."""
    if byte_count < 0:
        raise ValueError("byte_count must be non-negative")
    return -(-(byte_count * 8) // BITS_PER_SYMBOL)


def byte_length_for_entropy(entropy_bits: int) -> int:
    """Bytes needed to carry ``entropy_bits`` of randomness."""
    return -(-entropy_bits // 8)


def raw_length_bounds(entropy_bits: int) -> tuple[int, int]:
    """Inclusive ``(floor(bits/5), ceil(bits/5))`` bounds for a raw identifier."""
    minimum = entropy_bits // BITS_PER_SYMBOL
    maximum = -(-entropy_bits // BITS_PER_SYMBOL)
    return minimum, maximum


def is_alphabet_member(text: str, alphabet: str) -> bool:
    """True when every character of ``text`` appears in ``alphabet``, ignoring case."""
    folded = frozenset(alphabet.lower())
    return all(char.lower() in folded for char in text)


__all__ = [
    "byte_length_for_entropy",
    "encode_base32",
    "encoded_length",
    "is_alphabet_member",
    "raw_length_bounds",
    "validate_alphabet",
]
