"""Module entrypoint for ``python -m spark_id``."""

from __future__ import annotations

from spark_id.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
