# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the test-suite configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".wastparse.yaml"


class SuiteConfigError(Exception):
    """Raised when a suite configuration file is invalid or cannot be loaded."""


@dataclass
class SuiteConfig:
    """The parsed configuration for a directory of .wast scripts.

    Attributes:
        suite_directory: Directory holding the scripts, relative to the
            directory of the configuration file.
        exclude: Glob patterns matched against script file names; matching
            scripts are skipped.
    """

    suite_directory: str = "."
    exclude: list[str] = field(default_factory=list)

    def is_excluded(self, path: Path) -> bool:
        """Return True if *path*'s file name matches any exclude pattern."""
        return any(path.match(pattern) for pattern in self.exclude)


def load_suite_config(path: Path) -> SuiteConfig:
    """Load and parse a suite configuration file.

    Args:
        path: Path to the `.wastparse.yaml` file.

    Returns:
        A SuiteConfig instance populated from the file.

    Raises:
        SuiteConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SuiteConfigError(f"Suite config file not found: {path}") from None
    except OSError as exc:
        raise SuiteConfigError(f"Cannot read suite config file: {exc}") from exc

    return _parse_suite_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_suite_config(text: str, source_label: str = "<string>") -> SuiteConfig:
    """Parse suite config YAML text into a SuiteConfig.

    An empty document yields the defaults.

    Raises:
        SuiteConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SuiteConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return SuiteConfig()
    if not isinstance(data, dict):
        raise SuiteConfigError(f"{source_label}: suite config must be a YAML mapping")

    for key in data:
        if not isinstance(key, str):
            raise SuiteConfigError(f"{source_label}: field names must be strings, got {key!r}")
    unknown = sorted(set(data) - {"suite-directory", "exclude"})
    if unknown:
        raise SuiteConfigError(f"{source_label}: unknown field '{unknown[0]}'")

    config = SuiteConfig()
    if "suite-directory" in data:
        config.suite_directory = _require_string(data["suite-directory"], "suite-directory", source_label)

    if "exclude" in data:
        raw_exclude = data["exclude"]
        if not isinstance(raw_exclude, list):
            raise SuiteConfigError(f"{source_label}: 'exclude' must be a list")
        config.exclude = [
            _require_string(pattern, f"exclude[{index}]", source_label) for index, pattern in enumerate(raw_exclude)
        ]

    return config


def _require_string(value: object, key: str, source_label: str) -> str:
    if not isinstance(value, str):
        raise SuiteConfigError(f"{source_label}: '{key}' must be a string")
    return value
