#!/usr/bin/env python3
# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, suite parse, and build."""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=wastparse", "--cov-report=term-missing"]),
    ("Sample suite", ["uv", "run", "wastparse", "check", "tests/data/suite"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run the CI steps and report results."""
    arg_parser = argparse.ArgumentParser(description=__doc__)
    arg_parser.add_argument("--skip-build", action="store_true", help="Do not build the distribution")
    args = arg_parser.parse_args()

    steps = [(name, cmd) for name, cmd in STEPS if not (args.skip_build and name == "Build")]
    results = [_run_step(name, cmd) for name, cmd in steps]

    _print_banner("  Summary")
    for name, passed, elapsed in results:
        status = chalk.green("PASS") if passed else chalk.red("FAIL")
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _print_banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    _print_banner(name)
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=pathlib.Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


if __name__ == "__main__":
    sys.exit(main())
