"""Secure random byte source used by identifier generation."""

from __future__ import annotations

import secrets
from collections.abc import Callable

RandBytes = Callable[[int], bytes]


def read_random_bytes(size: int, randbytes: RandBytes | None = None) -> bytes:
    """Return exactly ``size`` bytes from ``randbytes`` or the OS CSPRNG."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValueError(f"size must be an int, got {type(size).__name__}")
    if size <= 0:
        raise ValueError(f"size must be > 0, got {size}")

    provider = secrets.token_bytes if randbytes is None else randbytes
    raw = provider(size)
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise ValueError("randbytes must return a bytes-like object")
    as_bytes = bytes(raw)
    if len(as_bytes) != size:
        raise ValueError(f"randbytes must return exactly {size} bytes, got {len(as_bytes)}")
    return as_bytes


__all__ = ["RandBytes", "read_random_bytes"]
