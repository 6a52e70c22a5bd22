"""UI package exports for the CLI router and output rendering."""

from spark_id.ui.cli import CLIError, build_parser, run_cli
from spark_id.ui.render import CLIRenderer, create_renderer

__all__ = [
    "CLIError",
    "CLIRenderer",
    "build_parser",
    "create_renderer",
    "run_cli",
]
