# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the singerschema command-line interface."""

import argparse
import logging
import sys
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from yachalk import chalk

from singerschema.codec.catalog import encode_catalog
from singerschema.codec.errors import StructuralDecodeError
from singerschema.codec.fields import dump_json
from singerschema.codec.schema import encode_json_schema
from singerschema.codec.streams import decode_lines, read_catalog, read_schema
from singerschema.config import ConfigError, OutputConfig, find_config, load_config
from singerschema.log import configure_logging
from singerschema.model.messages import SchemaMessage
from singerschema.validation.checks import ValidationResult, validate_catalog, validate_schema_message

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the singerschema CLI."""
    parser = argparse.ArgumentParser(
        prog="singerschema",
        description="singerschema: check and normalize Singer schemas, catalogs, and message streams",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .singerschema.yaml file (default: ./.singerschema.yaml if present)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log decoding decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check-schema subcommand
    schema_parser = subparsers.add_parser(
        "check-schema",
        help="Decode a JSON schema document",
        description="Decode a standalone JSON schema document and report structural errors.",
    )
    schema_parser.add_argument("file", help="Path to the schema JSON file")
    schema_parser.add_argument(
        "--normalize",
        action="store_true",
        help="Print the re-encoded schema",
    )

    # check-catalog subcommand
    catalog_parser = subparsers.add_parser(
        "check-catalog",
        help="Decode and check a catalog",
        description="Decode a catalog document and report structural errors and consistency warnings.",
    )
    catalog_parser.add_argument("file", help="Path to the catalog JSON file")
    catalog_parser.add_argument(
        "--normalize",
        action="store_true",
        help="Print the re-encoded catalog",
    )

    # check-messages subcommand
    messages_parser = subparsers.add_parser(
        "check-messages",
        help="Decode a newline-delimited message stream",
        description="Decode every line of a message stream and report each line that fails.",
    )
    messages_parser.add_argument("file", help="Path to the message stream, or '-' for stdin")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        config = load_config(Path(args.config)) if args.config else find_config(Path.cwd())
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "check-schema":
        return _cmd_check_schema(args, config)
    if args.command == "check-catalog":
        return _cmd_check_catalog(args, config)
    if args.command == "check-messages":
        return _cmd_check_messages(args)
    return 0


def _cmd_check_schema(args: argparse.Namespace, config: OutputConfig) -> int:
    """Handle the check-schema subcommand."""
    path = Path(args.file)
    try:
        schema = read_schema(path)
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1
    except StructuralDecodeError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return 1

    if args.normalize:
        print(dump_json(encode_json_schema(schema), indent=config.indent, sort_keys=config.sort_keys))
    else:
        print(chalk.green(f"{path}: schema OK"))
    return 0


def _cmd_check_catalog(args: argparse.Namespace, config: OutputConfig) -> int:
    """Handle the check-catalog subcommand."""
    path = Path(args.file)
    try:
        catalog = read_catalog(path)
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1
    except StructuralDecodeError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return 1

    result = validate_catalog(catalog)
    _print_warnings(result)

    if args.normalize:
        print(dump_json(encode_catalog(catalog), indent=config.indent, sort_keys=config.sort_keys))
    elif result.is_clean:
        print(chalk.green(f"{path}: {len(catalog.streams)} stream(s), no issues found."))
    else:
        print(chalk.yellow(f"{path}: {len(catalog.streams)} stream(s), {len(result.warnings)} warning(s)."))
    return 0


def _cmd_check_messages(args: argparse.Namespace) -> int:
    """Handle the check-messages subcommand."""
    if args.file == "-":
        try:
            return _check_message_lines(sys.stdin, "<stdin>")
        except UnicodeDecodeError as exc:
            print(f"Error: <stdin> is not valid UTF-8: {exc}", file=sys.stderr)
            return 1

    path = Path(args.file)
    try:
        with path.open(encoding="utf-8") as handle:
            return _check_message_lines(handle, str(path))
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"Error: {path} is not valid UTF-8: {exc}", file=sys.stderr)
        return 1


def _check_message_lines(lines: Iterable[str], label: str) -> int:
    """Decode every line, report failures, and print per-type counts."""
    counts: Counter[str] = Counter()
    failures = 0
    for _, result in decode_lines(lines):
        if isinstance(result, StructuralDecodeError):
            print(f"Error: {label}: {result}", file=sys.stderr)
            failures += 1
            continue
        counts[result.type] += 1
        if isinstance(result, SchemaMessage):
            _print_warnings(validate_schema_message(result))

    for message_type, count in sorted(counts.items()):
        print(f"  {message_type}: {count}")

    if failures:
        print(chalk.red(f"{label}: {failures} line(s) failed to decode."))
        return 1
    print(chalk.green(f"{label}: {sum(counts.values())} message(s) decoded."))
    return 0


def _print_warnings(result: ValidationResult) -> None:
    for warning in result.warnings:
        print(f"Warning: {warning.message}")
