# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the wastparse command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from wastparse.parser import ParseError, parse
from wastparse.parser.errors import SourceLocation
from wastparse.workspace.config import CONFIG_FILE_NAME, SuiteConfig, SuiteConfigError, load_suite_config

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the wastparse CLI."""
    parser = argparse.ArgumentParser(
        prog="wastparse",
        description="wastparse: parser for WebAssembly spec-test scripts",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Parse every script of a test suite",
        description="Parse all .wast scripts of a test suite and report the ones that fail.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help=f"Directory containing the suite or its {CONFIG_FILE_NAME} (default: current directory)",
    )

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="List the directives of a script",
        description="Parse a single .wast script and print its directives in order.",
    )
    list_parser.add_argument("file", help="Path to the .wast script")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "list":
        return _cmd_list(args)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config = SuiteConfig()
    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        try:
            config = load_suite_config(config_file)
        except SuiteConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    suite_dir = (directory / config.suite_directory).resolve()
    if not suite_dir.is_dir():
        print(f"Error: suite directory '{suite_dir}' does not exist.", file=sys.stderr)
        return 1

    scripts = sorted(p for p in suite_dir.rglob("*.wast") if not config.is_excluded(p))
    if not scripts:
        print("No .wast files found in the suite.")
        return 0

    print(f"Checking {len(scripts)} script(s)...")
    has_errors = False
    for script in scripts:
        logger.debug("Parsing %s", script)
        try:
            source = script.read_text(encoding="utf-8")
            root = parse(source)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error: {script.relative_to(suite_dir)}: cannot read file: {exc}", file=sys.stderr)
            has_errors = True
            continue
        except ParseError as exc:
            print(f"Error: {script.relative_to(suite_dir)}: {exc}", file=sys.stderr)
            has_errors = True
            continue
        logger.debug("Parsed %d directive(s) from %s", len(root.directives), script)

    if has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    """Handle the list subcommand."""
    path = Path(args.file)

    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1

    try:
        root = parse(source)
    except ParseError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return 1

    for index, directive in enumerate(root.directives):
        location = SourceLocation.from_offset(source, directive.start)
        print(f"{index:4d}  {directive.kind:<18} {location.line}:{location.column}")
    return 0
