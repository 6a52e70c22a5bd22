"""Process-wide configuration store with per-call override resolution."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, cast

from spark_id.config.schema import (
    CONFIG_KEYS,
    DEFAULT_CONFIG,
    IdConfig,
    default_config,
    validate_overrides,
)
from spark_id.observability.logging import get_logger

_LOGGER = get_logger(__name__)


class ConfigStore:
    """Mutable default configuration guarded by a lock.

    Reads return copies; per-call overrides never touch the stored defaults.
    """

    __slots__ = ("_lock", "_values")

    def __init__(self, initial: Mapping[str, object] | None = None) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, Any] = dict(default_config())
        if initial:
            self._values.update(validate_overrides(initial))

    def configure(self, partial: Mapping[str, object]) -> None:
        """Shallow-merge ``partial`` into the stored defaults."""
        # A None value restores that key's fixed default.
        updates = validate_overrides(partial)
        cleared = sorted(key for key, value in partial.items() if value is None)
        with self._lock:
            self._values.update(updates)
            for key in cleared:
                self._values[key] = DEFAULT_CONFIG[key]  # type: ignore[literal-required]
        _LOGGER.debug("config_updated", keys=sorted(updates), cleared=cleared)

    def get_config(self) -> IdConfig:
        """Return a copy of the stored defaults."""
        with self._lock:
            return cast("IdConfig", dict(self._values))

    def reset_config(self) -> None:
        """Restore the fixed default table verbatim."""
        with self._lock:
            self._values = dict(default_config())
        _LOGGER.debug("config_reset")

    def resolve(self, overrides: Mapping[str, object] | None = None) -> IdConfig:
        """Resolve every key independently: override -> stored default -> fixed default."""
        local = validate_overrides(overrides)
        with self._lock:
            stored = dict(self._values)

        resolved: dict[str, Any] = {}
        for key in CONFIG_KEYS:
            value = local.get(key)
            if value is None:
                value = stored.get(key)
            if value is None:
                value = DEFAULT_CONFIG[key]  # type: ignore[literal-required]
            resolved[key] = value
        return cast("IdConfig", resolved)


_DEFAULT_STORE = ConfigStore()


def get_default_store() -> ConfigStore:
    """Return the process-wide store used by the module-level API."""
    return _DEFAULT_STORE


def configure(partial: Mapping[str, object]) -> None:
    _DEFAULT_STORE.configure(partial)


def get_config() -> IdConfig:
    return _DEFAULT_STORE.get_config()


def reset_config() -> None:
    _DEFAULT_STORE.reset_config()


def resolve_config(overrides: Mapping[str, object] | None = None) -> IdConfig:
    return _DEFAULT_STORE.resolve(overrides)


__all__ = [
    "ConfigStore",
    "configure",
    "get_config",
    "get_default_store",
    "reset_config",
    "resolve_config",
]
