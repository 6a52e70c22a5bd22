"""Output rendering for the spark-id CLI.

File: src/spark_id/ui/render.py

Purpose
- Render identifiers and result payloads as text, JSON, CSV, or YAML.

Functional requirements
- Text output prints one identifier per line so it pipes cleanly into shell loops.
- JSON output prints a bare string for a single identifier and a list otherwise.
- CSV output joins identifiers with commas; mappings become a header row plus one value row.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Mapping, Sequence
from typing import Final, Literal

import yaml

OutputFormat = Literal["text", "json", "csv", "yaml"]
OUTPUT_FORMATS: Final[tuple[str, ...]] = ("text", "json", "csv", "yaml")


class CLIRenderer:
    """Thin CLI output renderer bound to one output format."""

    def __init__(self, *, output_format: OutputFormat = "text") -> None:
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"unsupported output format {output_format!r}")
        self.output_format = output_format

    def text(self, line: str) -> None:
        print(line)

    def kv(self, key: str, value: object) -> None:
        print(f"{key}: {value}")

    def ids(self, values: Sequence[str]) -> None:
        """Print generated identifiers in the configured format."""

        items = list(values)
        if self.output_format == "json":
            payload: object = items[0] if len(items) == 1 else items
            print(json.dumps(payload, indent=2, ensure_ascii=False))
        elif self.output_format == "csv":
            print(",".join(items))
        elif self.output_format == "yaml":
            print(yaml.safe_dump(items, default_flow_style=False, sort_keys=False).rstrip("\n"))
        else:
            for item in items:
                print(item)

    def mapping(self, payload: Mapping[str, object]) -> None:
        """Print a flat result mapping (parse output, stats, effective config)."""

        data = dict(payload)
        if self.output_format == "json":
            print(json.dumps(data, indent=2, ensure_ascii=False))
        elif self.output_format == "csv":
            buffer = io.StringIO()
            writer = csv.writer(buffer, lineterminator="\n")
            writer.writerow(list(data))
            writer.writerow(["" if value is None else value for value in data.values()])
            print(buffer.getvalue().rstrip("\n"))
        elif self.output_format == "yaml":
            print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip("\n"))
        else:
            for key, value in data.items():
                self.kv(key, "" if value is None else value)


def create_renderer(*, output_format: str = "text") -> CLIRenderer:
    """Create a renderer for the given output format."""

    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"unsupported output format {output_format!r}")
    return CLIRenderer(output_format=output_format)  # type: ignore[arg-type]


__all__ = ["OUTPUT_FORMATS", "CLIRenderer", "OutputFormat", "create_renderer"]
