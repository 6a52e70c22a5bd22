"""Shared pytest fixtures for spark-id tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from spark_id.config import reset_config
from spark_id.observability import shutdown_logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolated_defaults() -> Iterator[None]:
    reset_config()
    yield
    reset_config()
    shutdown_logging()
