"""Unit tests for the process-wide configuration store."""

from __future__ import annotations

import logging
import threading

import pytest

from spark_id.config import (
    DEFAULT_CONFIG,
    ConfigStore,
    ConfigValidationError,
    configure,
    get_config,
    get_default_store,
    reset_config,
    resolve_config,
)


def test_configure_merges_and_get_config_returns_copy() -> None:
    configure({"entropy_bits": 80, "separator": "-"})

    snapshot = get_config()
    assert snapshot["entropy_bits"] == 80
    assert snapshot["separator"] == "-"
    assert snapshot["alphabet"] == DEFAULT_CONFIG["alphabet"]

    snapshot["entropy_bits"] = 1
    assert get_config()["entropy_bits"] == 80


def test_configure_none_restores_fixed_default() -> None:
    configure({"case": "lower", "entropy_bits": 80})
    configure({"case": None})

    snapshot = get_config()
    assert snapshot["case"] == "upper"
    assert snapshot["entropy_bits"] == 80


def test_invalid_configure_leaves_store_untouched() -> None:
    configure({"separator": "-"})
    with pytest.raises(ConfigValidationError):
        configure({"separator": ":", "entropy_bits": -1})
    assert get_config()["separator"] == "-"


def test_reset_is_idempotent() -> None:
    configure({"entropy_bits": 128, "case": "mixed"})
    reset_config()
    first = get_config()
    reset_config()
    assert first == get_config() == DEFAULT_CONFIG


def test_resolve_layers_override_over_store_over_defaults() -> None:
    configure({"entropy_bits": 80, "separator": "-"})

    resolved = resolve_config({"separator": ":", "case": None})
    assert resolved["separator"] == ":"
    assert resolved["entropy_bits"] == 80
    assert resolved["case"] == "upper"

    # Per-call overrides never leak into the store.
    assert get_config()["separator"] == "-"


def test_resolve_rejects_unknown_override_keys() -> None:
    with pytest.raises(ConfigValidationError, match="unknown field"):
        resolve_config({"entropyBits": 80})


def test_independent_store_instances() -> None:
    store = ConfigStore({"entropy_bits": 64})
    assert store.get_config()["entropy_bits"] == 64
    assert get_default_store().get_config()["entropy_bits"] == 72

    store.configure({"case": "lower"})
    assert store.resolve()["case"] == "lower"
    assert resolve_config()["case"] == "upper"


def test_concurrent_configure_and_resolve_see_consistent_snapshots() -> None:
    store = ConfigStore()
    pairs = [(64, "-"), (128, ":")]
    errors: list[str] = []

    def _writer(bits: int, separator: str) -> None:
        for _ in range(200):
            store.configure({"entropy_bits": bits, "separator": separator})

    def _reader() -> None:
        for _ in range(200):
            resolved = store.resolve()
            observed = (resolved["entropy_bits"], resolved["separator"])
            if observed not in pairs and observed != (72, "_"):
                errors.append(repr(observed))

    threads = [threading.Thread(target=_writer, args=pair) for pair in pairs]
    threads.append(threading.Thread(target=_reader))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []


def test_configure_emits_debug_event(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="spark_id.config.store"):
        configure({"entropy_bits": 96})
        reset_config()

    messages = [record.getMessage() for record in caplog.records]
    assert "config_updated" in messages
    assert "config_reset" in messages
    updated = next(record for record in caplog.records if record.getMessage() == "config_updated")
    assert updated.keys == ["entropy_bits"]  # type: ignore[attr-defined]
