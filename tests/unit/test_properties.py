"""
spark-id: property tests for codec and identifier round-trips

File: tests/unit/test_properties.py

Purpose
- Check round-trip and membership invariants over generated inputs.

What this test file should cover
- Every identifier produced under a configuration validates and parses under it.
- Encoded output length and alphabet membership for arbitrary bytes.
- Foreign characters never validate.

Non-functional requirements
- Deterministic (derandomized) and fast.
"""

from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from spark_id import codec, identifier
from spark_id.constants import DEFAULT_ALPHABET

_PREFIXES = st.text(
    alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    min_size=1,
    max_size=20,
)
_SEPARATORS = st.sampled_from(["_", "-", ":", ".", "--"])
_CASES = st.sampled_from(["upper", "lower", "mixed"])
_FOREIGN = st.sampled_from(["0", "1", "O", "I", "o", "i", "-", " ", "!", "é"])
_HEALTH_CHECKS = [HealthCheck.function_scoped_fixture]


@given(data=st.binary(max_size=64))
@settings(
    max_examples=100,
    derandomize=True,
    deadline=None,
    suppress_health_check=_HEALTH_CHECKS,
)
def test_property_encoded_length_and_membership(data: bytes) -> None:
    encoded = codec.encode_base32(data)
    assert len(encoded) == codec.encoded_length(len(data))
    assert all(char in DEFAULT_ALPHABET for char in encoded)


@given(
    prefix=_PREFIXES,
    separator=_SEPARATORS,
    case=_CASES,
    entropy_bits=st.integers(min_value=5, max_value=256),
    seed=st.binary(min_size=32, max_size=32),
)
@settings(
    max_examples=100,
    derandomize=True,
    deadline=None,
    suppress_health_check=_HEALTH_CHECKS,
)
def test_property_prefixed_round_trip(
    prefix: str, separator: str, case: str, entropy_bits: int, seed: bytes
) -> None:
    config = {"separator": separator, "case": case, "entropy_bits": entropy_bits}

    def _seeded(size: int) -> bytes:
        return (seed * (size // len(seed) + 1))[:size]

    value = identifier.generate(prefix, config, randbytes=_seeded)
    parsed = identifier.parse(value, config)

    expected_prefix = {"upper": prefix.upper(), "lower": prefix.lower(), "mixed": prefix}[case]
    assert parsed.prefix == expected_prefix
    assert parsed.full == value
    assert identifier.is_valid_raw_id(parsed.id, config)
    assert identifier.is_valid(value, config)


@given(entropy_bits=st.integers(min_value=1, max_value=256), case=_CASES)
@settings(
    max_examples=50,
    derandomize=True,
    deadline=None,
    suppress_health_check=_HEALTH_CHECKS,
)
def test_property_unprefixed_round_trip(entropy_bits: int, case: str) -> None:
    config = {"entropy_bits": entropy_bits, "case": case}
    raw = identifier.generate_raw(config)
    parsed = identifier.parse(raw, config)

    assert parsed.prefix is None
    assert parsed.id == parsed.full == raw
    assert "prefix" not in parsed.to_dict()


@given(position=st.integers(min_value=0, max_value=14), foreign=_FOREIGN)
@settings(
    max_examples=60,
    derandomize=True,
    deadline=None,
    suppress_health_check=_HEALTH_CHECKS,
)
def test_property_foreign_character_is_rejected(position: int, foreign: str) -> None:
    raw = identifier.generate_raw()
    tampered = raw[:position] + foreign + raw[position + 1 :]
    assert not identifier.is_valid(tampered)
    assert not identifier.is_valid("USER_" + tampered)
