"""Public observability primitives: structured logging setup and event loggers."""

from spark_id.observability.logging import (
    LoggingConfig,
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "LoggingConfig",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
]
