"""
spark-id config package public API.

File: src/spark_id/config/__init__.py

Purpose
- Export the default table, the process-wide store, and file/env loading entrypoints.

Functional requirements
- ``configure``/``get_config``/``reset_config`` operate on one shared store.
- Per-call overrides resolve key by key without mutating the store.
"""

from spark_id.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    ConfigLoadError,
    dump_effective_config,
    load_config,
)
from spark_id.config.schema import (
    CONFIG_KEYS,
    DEFAULT_CONFIG,
    CaseSetting,
    ConfigValidationError,
    ConfigValidationIssue,
    EncodingSetting,
    IdConfig,
    PartialIdConfig,
    default_config,
    validate_overrides,
)
from spark_id.config.store import (
    ConfigStore,
    configure,
    get_config,
    get_default_store,
    reset_config,
    resolve_config,
)

__all__ = [
    "CONFIG_KEYS",
    "CaseSetting",
    "ConfigLoadError",
    "ConfigStore",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "EncodingSetting",
    "IdConfig",
    "PartialIdConfig",
    "configure",
    "default_config",
    "dump_effective_config",
    "get_config",
    "get_default_store",
    "load_config",
    "reset_config",
    "resolve_config",
    "validate_overrides",
]
