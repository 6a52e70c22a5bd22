"""Unit tests for identifier generation, parsing, and validation."""

from __future__ import annotations

import re

import pytest

import spark_id
from spark_id import identifier as ids
from spark_id.config import configure, reset_config
from spark_id.errors import ErrorCode, InvalidAlphabetError, InvalidIdError, InvalidPrefixError


def _zero_bytes(size: int) -> bytes:
    return b"\x00" * size


def _ff_bytes(size: int) -> bytes:
    return b"\xff" * size


def _exploding_bytes(size: int) -> bytes:
    raise AssertionError(f"randomness consumed ({size} bytes)")


@pytest.mark.unit
def test_generate_user_prefix_literal() -> None:
    value = ids.generate("USER")
    assert re.fullmatch(r"USER_[A-Z2-9]{12,15}", value)

    parsed = ids.parse(value)
    assert parsed.prefix == "USER"
    assert parsed.id == value.removeprefix("USER_")
    assert len(parsed.id) <= 15
    assert parsed.full == value


@pytest.mark.unit
def test_generate_with_injected_bytes_is_deterministic() -> None:
    assert ids.generate(randbytes=_zero_bytes) == "A" * 15
    assert ids.generate("ORDER", randbytes=_ff_bytes) == "ORDER_" + "9" * 14 + "2"
    assert ids.generate_raw(randbytes=_zero_bytes) == "A" * 15


@pytest.mark.unit
@pytest.mark.parametrize(
    ("entropy_bits", "length"),
    [(72, 15), (64, 13), (80, 16), (128, 26), (10, 2), (1, 1)],
)
def test_generated_length_is_ceil_of_entropy_over_five(entropy_bits: int, length: int) -> None:
    config = {"entropy_bits": entropy_bits}
    raw = ids.generate_raw(config)
    assert len(raw) == length
    assert ids.is_valid(raw, config)


@pytest.mark.unit
def test_case_modes_apply_to_raw_id_and_prefix() -> None:
    assert ids.generate("User", {"case": "lower"}, randbytes=_zero_bytes) == "user_" + "a" * 15
    assert ids.generate("User", {"case": "upper"}, randbytes=_zero_bytes) == "USER_" + "A" * 15
    assert ids.generate("User", {"case": "mixed"}, randbytes=_zero_bytes) == "User_" + "A" * 15


@pytest.mark.unit
def test_custom_separator_round_trip() -> None:
    value = ids.generate("INV", {"separator": "-"}, randbytes=_zero_bytes)
    assert value == "INV-" + "A" * 15

    parsed = ids.parse(value, {"separator": "-"})
    assert parsed.prefix == "INV"
    assert parsed.id == "A" * 15

    # Under the default separator the dash is a foreign character.
    assert not ids.is_valid(value)


@pytest.mark.unit
@pytest.mark.parametrize(
    "prefix",
    ["", "has-dash", "has space", "émoji", "X" * 21],
)
def test_invalid_prefix_fails_before_consuming_randomness(prefix: str) -> None:
    with pytest.raises(InvalidPrefixError) as excinfo:
        ids.generate(prefix, randbytes=_exploding_bytes)
    assert excinfo.value.code is ErrorCode.INVALID_PREFIX
    assert repr(prefix) in str(excinfo.value)
    assert "1-20 characters" in str(excinfo.value)


@pytest.mark.unit
def test_prefix_length_bound_follows_config() -> None:
    assert ids.is_valid_prefix("X" * 20)
    assert not ids.is_valid_prefix("X" * 21)
    assert ids.is_valid_prefix("X" * 50, {"max_prefix_length": 50})
    ids.validate_prefix("snake_case_9")
    with pytest.raises(InvalidPrefixError, match="1-5 characters"):
        ids.validate_prefix("TOOLONG", {"max_prefix_length": 5})


@pytest.mark.unit
def test_invalid_alphabet_raises_on_generate() -> None:
    with pytest.raises(InvalidAlphabetError):
        ids.generate(config={"alphabet": "ABC"})
    assert not ids.is_valid("ABC", {"alphabet": "ABC", "entropy_bits": 15})


@pytest.mark.unit
def test_parse_without_prefix() -> None:
    parsed = ids.parse("A" * 15)
    assert parsed == ids.ParsedId(id="A" * 15, full="A" * 15)
    assert not parsed.has_prefix()
    assert parsed.to_dict() == {"id": "A" * 15, "full": "A" * 15}


@pytest.mark.unit
def test_parse_does_not_check_prefix_pattern() -> None:
    parsed = ids.parse("we!rd_" + "B" * 14)
    assert parsed.prefix == "we!rd"
    assert parsed.to_dict() == {"id": "B" * 14, "full": "we!rd_" + "B" * 14, "prefix": "we!rd"}


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "reason"),
    [
        ("", "ID cannot be empty"),
        (None, "ID must be a string"),
        (12345, "ID must be a string"),
        ("A_B_C", "too many separators"),
        ("USER_" + "A" * 13, "Invalid ID format"),
        ("USER_" + "A" * 16, "Invalid ID format"),
        ("USER_" + "A" * 14 + "0", "Invalid ID format"),
        ("A" * 14 + "O", "Invalid ID format"),
    ],
)
def test_parse_rejections(value: object, reason: str) -> None:
    with pytest.raises(InvalidIdError, match=reason) as excinfo:
        ids.parse(value)  # type: ignore[arg-type]
    assert excinfo.value.code is ErrorCode.INVALID_ID
    assert excinfo.value.value == value


@pytest.mark.unit
@pytest.mark.parametrize("foreign", ["0", "1", "O", "I", "-", " "])
def test_foreign_characters_are_invalid(foreign: str) -> None:
    valid = "K" * 15
    assert ids.is_valid(valid)
    assert not ids.is_valid(valid[:7] + foreign + valid[8:])


@pytest.mark.unit
def test_validation_is_case_insensitive_and_length_bounded() -> None:
    assert ids.is_valid("user_" + "abcdefghjkmnpq")
    assert ids.is_valid_raw_id("A" * 14)
    assert ids.is_valid_raw_id("a" * 15)
    assert not ids.is_valid_raw_id("A" * 13)
    assert not ids.is_valid_raw_id("A" * 16)
    assert not ids.is_valid_raw_id("")
    assert not ids.is_valid_raw_id(None)  # type: ignore[arg-type]


@pytest.mark.unit
def test_is_valid_never_raises() -> None:
    assert not ids.is_valid(None)  # type: ignore[arg-type]
    assert not ids.is_valid(b"AAAAAAAAAAAAAAA")  # type: ignore[arg-type]
    assert not ids.is_valid("A" * 15, {"entropyBits": 72})
    assert not ids.is_valid_raw_id("A" * 15, {"case": "title"})


@pytest.mark.unit
def test_length_bounds_follow_entropy_bits() -> None:
    config = {"entropy_bits": 128}
    assert ids.is_valid("A" * 25, config)
    assert ids.is_valid("A" * 26, config)
    assert not ids.is_valid("A" * 15, config)


@pytest.mark.unit
def test_global_configuration_and_per_call_override() -> None:
    configure({"separator": "-", "entropy_bits": 80})

    value = ids.generate("ACME", randbytes=_zero_bytes)
    assert value == "ACME-" + "A" * 16
    assert ids.is_valid(value)

    overridden = ids.generate("ACME", {"separator": "."}, randbytes=_zero_bytes)
    assert overridden == "ACME." + "A" * 16

    reset_config()
    reset_config()
    assert ids.generate("ACME", randbytes=_zero_bytes) == "ACME_" + "A" * 15


@pytest.mark.unit
def test_secure_id_create_and_accessors() -> None:
    secure = ids.create("Txn", {"case": "lower"}, randbytes=_zero_bytes)

    assert secure.id == "a" * 15
    assert secure.prefix == "txn"
    assert secure.full == "txn_" + "a" * 15
    assert str(secure) == secure.full
    assert secure.has_prefix()
    assert secure.get_entropy_bits() == 72
    assert secure.to_dict() == {"id": "a" * 15, "full": "txn_" + "a" * 15, "prefix": "txn"}
    assert secure.validate() == ids.ValidationResult(is_valid=True)


@pytest.mark.unit
def test_secure_id_wraps_supplied_raw_id_without_validation() -> None:
    secure = ids.SecureId.create("ORD", raw_id="not-valid!", randbytes=_exploding_bytes)

    assert secure.full == "ORD_not-valid!"
    result = secure.validate()
    assert not result.is_valid
    assert result.error == "Invalid ID format"
    assert result.code == ids.INVALID_FORMAT_CODE
    assert result.to_dict() == {
        "is_valid": False,
        "error": "Invalid ID format",
        "code": "INVALID_FORMAT",
    }

    with pytest.raises(InvalidPrefixError):
        ids.SecureId.create("bad prefix", raw_id="A" * 15)


@pytest.mark.unit
def test_secure_id_without_prefix() -> None:
    secure = ids.create(randbytes=_ff_bytes)
    assert secure.prefix is None
    assert not secure.has_prefix()
    assert secure.full == secure.id == "9" * 14 + "2"
    assert secure.to_dict() == {"id": secure.id, "full": secure.full}


@pytest.mark.unit
def test_secure_id_equality_and_hashing() -> None:
    first = ids.create("USER", randbytes=_zero_bytes)
    second = ids.create("USER", randbytes=_zero_bytes)
    other = ids.create("USER", randbytes=_ff_bytes)

    assert first == second
    assert first == "USER_" + "A" * 15
    assert first.equals(second)
    assert first.equals("USER_" + "A" * 15)
    assert not first.equals(other)
    assert first != other
    assert not first.equals("user_" + "a" * 15)
    assert len({first, second, other}) == 2


@pytest.mark.unit
def test_generate_similar_keeps_prefix_and_config() -> None:
    secure = ids.create("Batch", {"case": "mixed", "entropy_bits": 80}, randbytes=_zero_bytes)
    similar = secure.generate_similar(randbytes=_ff_bytes)

    assert similar.prefix == "Batch"
    assert similar.get_entropy_bits() == 80
    assert similar.full == "Batch_" + "9" * 16
    assert similar != secure


@pytest.mark.unit
def test_stats_reflect_entropy_bits() -> None:
    stats = ids.get_stats()
    assert stats == ids.IdStats(
        entropy_bits=72,
        collision_probability=2.0**-72,
        max_ids=2**72,
    )
    assert ids.get_stats({"entropy_bits": 128}).max_ids == 2**128
    assert ids.create(config={"entropy_bits": 96}).get_stats().entropy_bits == 96
    assert stats.to_dict()["collision_probability"] == pytest.approx(2.117582368135751e-22)


@pytest.mark.unit
def test_reserved_options_are_accepted_and_inert() -> None:
    config = {"timestamp": True, "machine_id": "node-1", "encoding": "hex"}
    assert ids.generate("ID", config, randbytes=_zero_bytes) == "ID_" + "A" * 15


@pytest.mark.unit
def test_package_aliases() -> None:
    assert spark_id.generate_id is ids.generate
    assert spark_id.spark_id is ids.generate
    assert spark_id.create_id is ids.create
    assert spark_id.is_valid_id is ids.is_valid
    assert spark_id.parse_id is ids.parse
    assert spark_id.generate_id("API", randbytes=_zero_bytes) == "API_" + "A" * 15
