"""Command-line interface router for spark-id."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Final

from spark_id.config import (
    ConfigLoadError,
    ConfigValidationError,
    IdConfig,
    dump_effective_config,
    load_config,
)
from spark_id.constants import CASE_VALUES, MAX_BULK_COUNT
from spark_id.errors import InvalidIdError, SparkIdError
from spark_id.generator import generate_multiple, generate_unique, validate_id
from spark_id.identifier import VALIDATION_ERROR_CODE, generate, get_stats, parse
from spark_id.main import REJECTION_CODES, ExitCode
from spark_id.observability import LoggingConfig, setup_logging, shutdown_logging
from spark_id.ui.render import OUTPUT_FORMATS, CLIRenderer, create_renderer

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
EXAMPLE_PREFIXES: Final[tuple[str, ...]] = ("USER", "ORDER", "TXN", "SESSION")


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 1

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router for all supported CLI workflows."""

    parser = argparse.ArgumentParser(
        prog="spark-id",
        description=(
            "spark-id: short, URL-safe, cryptographically random identifiers.\n\n"
            "Common workflows:\n"
            "  spark-id generate -p USER         Generate one prefixed identifier\n"
            "  spark-id generate -c 5 -f json    Generate a batch as JSON\n"
            "  spark-id validate USER_K7QW...    Check an identifier\n"
            "  spark-id parse USER_K7QW...       Split an identifier into parts\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to a TOML or YAML config file (default: ./spark-id.toml if present).",
    )
    common.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level for diagnostics written to stderr (default: WARNING).",
    )
    common.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text).",
    )
    common.add_argument("--separator", default=None, help="Prefix separator override.")
    common.add_argument("--case", choices=CASE_VALUES, default=None, help="Case mode override.")
    common.add_argument(
        "--entropy-bits",
        type=int,
        default=None,
        help="Entropy bits per identifier override.",
    )
    common.add_argument("--alphabet", default=None, help="32-symbol encoding alphabet override.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Generate one or more identifiers",
        description=(
            "Generate identifiers.\n\n"
            "Examples:\n"
            "  spark-id generate\n"
            "  spark-id generate -p ORDER -c 10 -f csv\n"
            "  spark-id generate -c 100 --unique\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    generate_parser.add_argument("-p", "--prefix", default=None, help="Identifier prefix.")
    generate_parser.add_argument(
        "-c",
        "--count",
        type=int,
        default=1,
        help=f"Number of identifiers to generate (1..{MAX_BULK_COUNT}, default: 1).",
    )
    generate_parser.add_argument(
        "--unique",
        action="store_true",
        default=False,
        help="Guarantee the batch contains no duplicates.",
    )
    generate_parser.set_defaults(handler=_cmd_generate)

    validate_parser = subparsers.add_parser(
        "validate",
        parents=[common],
        help="Validate an identifier (exit code 1 when invalid)",
    )
    validate_parser.add_argument("identifier", help="Identifier to validate.")
    validate_parser.set_defaults(handler=_cmd_validate)

    parse_parser = subparsers.add_parser(
        "parse",
        parents=[common],
        help="Split an identifier into prefix and raw id",
    )
    parse_parser.add_argument("identifier", help="Identifier to parse.")
    parse_parser.set_defaults(handler=_cmd_parse)

    stats_parser = subparsers.add_parser(
        "stats",
        parents=[common],
        help="Show collision statistics for the effective configuration",
    )
    stats_parser.set_defaults(handler=_cmd_stats)

    config_parser = subparsers.add_parser(
        "config",
        parents=[common],
        help="Show the effective configuration",
    )
    config_parser.set_defaults(handler=_cmd_config)

    examples_parser = subparsers.add_parser(
        "examples",
        parents=[common],
        help="Show example identifiers for common prefixes",
    )
    examples_parser.set_defaults(handler=_cmd_examples)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return int(ExitCode.USAGE_ERROR)

    setup_logging(LoggingConfig(level=namespace.log_level))
    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    finally:
        shutdown_logging()
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_generate(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    count: int = args.count
    prefix: str | None = args.prefix

    try:
        if args.unique:
            ids = sorted(generate_unique(count, prefix, config))
        elif count == 1:
            ids = [generate(prefix, config)]
        else:
            ids = generate_multiple(count, prefix, config)
    except SparkIdError as exc:
        raise _error_from(exc) from exc

    _get_renderer(args).ids(ids)
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    result = validate_id(args.identifier, config)

    renderer = _get_renderer(args)
    if renderer.output_format == "text":
        renderer.text("valid" if result.is_valid else f"invalid: {result.error}")
    else:
        renderer.mapping(result.to_dict())
    if result.is_valid:
        return int(ExitCode.SUCCESS)
    if result.code == VALIDATION_ERROR_CODE:
        return int(ExitCode.USAGE_ERROR)
    return int(ExitCode.REJECTED)


def _cmd_parse(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    try:
        parsed = parse(args.identifier, config)
    except InvalidIdError as exc:
        raise _error_from(exc) from exc

    payload: dict[str, object] = {"prefix": parsed.prefix, "id": parsed.id, "full": parsed.full}
    _get_renderer(args).mapping(payload)
    return 0


def _cmd_stats(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    _get_renderer(args).mapping(get_stats(config).to_dict())
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    renderer = _get_renderer(args)
    if renderer.output_format == "json":
        renderer.text(dump_effective_config(config))
    else:
        renderer.mapping(dict(config))
    return 0


def _cmd_examples(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    try:
        payload: dict[str, object] = {"(none)": generate(None, config)}
        for prefix in EXAMPLE_PREFIXES:
            payload[prefix] = generate(prefix, config)
    except SparkIdError as exc:
        raise _error_from(exc) from exc
    _get_renderer(args).mapping(payload)
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_renderer(args: argparse.Namespace) -> CLIRenderer:
    return create_renderer(output_format=args.output_format)


def _load_effective_config(args: argparse.Namespace) -> IdConfig:
    try:
        return load_config(args.config_path, cli_overrides=_cli_overrides(args))
    except (ConfigLoadError, ConfigValidationError) as exc:
        raise CLIError(str(exc), exit_code=int(ExitCode.USAGE_ERROR)) from exc


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    candidates = {
        "separator": args.separator,
        "case": args.case,
        "entropy_bits": args.entropy_bits,
        "alphabet": args.alphabet,
    }
    return {key: value for key, value in candidates.items() if value is not None}


def _error_from(exc: SparkIdError) -> CLIError:
    exit_code = ExitCode.REJECTED if exc.code in REJECTION_CODES else ExitCode.USAGE_ERROR
    return CLIError(str(exc), exit_code=int(exit_code))


__all__ = ["CLIError", "build_parser", "run_cli"]
