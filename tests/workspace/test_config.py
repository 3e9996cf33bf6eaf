# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the suite configuration module."""

from pathlib import Path

import pytest

from wastparse.workspace import (
    CONFIG_FILE_NAME,
    SuiteConfig,
    SuiteConfigError,
    load_suite_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a suite config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    """Both fields are read from the file."""
    content = """\
suite-directory: wasm-testsuite
exclude:
  - inline-module.wast
  - "simd_*.wast"
"""
    config = load_suite_config(_write_config(tmp_path, content))

    assert isinstance(config, SuiteConfig)
    assert config.suite_directory == "wasm-testsuite"
    assert config.exclude == ["inline-module.wast", "simd_*.wast"]


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    """An empty config file yields the default configuration."""
    config = load_suite_config(_write_config(tmp_path, ""))

    assert config.suite_directory == "."
    assert config.exclude == []


def test_exclude_only(tmp_path: Path) -> None:
    """suite-directory is optional."""
    config = load_suite_config(_write_config(tmp_path, "exclude: [a.wast]\n"))

    assert config.suite_directory == "."
    assert config.exclude == ["a.wast"]


def test_is_excluded_matches_file_names() -> None:
    """Exclude patterns are globs over the file name."""
    config = SuiteConfig(exclude=["simd_*.wast", "names.wast"])

    assert config.is_excluded(Path("/suite/simd_lane.wast"))
    assert config.is_excluded(Path("/suite/proposals/names.wast"))
    assert not config.is_excluded(Path("/suite/i32.wast"))


# ###############
# Error Cases
# ###############


def test_missing_file_raises(tmp_path: Path) -> None:
    """A missing config file raises SuiteConfigError."""
    with pytest.raises(SuiteConfigError, match="not found"):
        load_suite_config(tmp_path / CONFIG_FILE_NAME)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """Malformed YAML raises SuiteConfigError."""
    with pytest.raises(SuiteConfigError, match="Invalid YAML"):
        load_suite_config(_write_config(tmp_path, "exclude: [unclosed\n"))


def test_non_mapping_raises(tmp_path: Path) -> None:
    """A top-level list is rejected."""
    with pytest.raises(SuiteConfigError, match="must be a YAML mapping"):
        load_suite_config(_write_config(tmp_path, "- a\n- b\n"))


def test_suite_directory_must_be_string(tmp_path: Path) -> None:
    """A non-string suite-directory is rejected."""
    with pytest.raises(SuiteConfigError, match="'suite-directory' must be a string"):
        load_suite_config(_write_config(tmp_path, "suite-directory: [x]\n"))


def test_exclude_must_be_list(tmp_path: Path) -> None:
    """A scalar exclude is rejected."""
    with pytest.raises(SuiteConfigError, match="'exclude' must be a list"):
        load_suite_config(_write_config(tmp_path, "exclude: a.wast\n"))


def test_exclude_entries_must_be_strings(tmp_path: Path) -> None:
    """Every exclude pattern must be a string."""
    with pytest.raises(SuiteConfigError, match=r"'exclude\[1\]' must be a string"):
        load_suite_config(_write_config(tmp_path, "exclude: [a.wast, 3]\n"))


def test_unknown_field_raises(tmp_path: Path) -> None:
    """Unknown top-level fields are rejected."""
    with pytest.raises(SuiteConfigError, match="unknown field 'build-directory'"):
        load_suite_config(_write_config(tmp_path, "build-directory: out\n"))


def test_non_string_field_name_raises(tmp_path: Path) -> None:
    """Field names that YAML reads as numbers are rejected."""
    with pytest.raises(SuiteConfigError, match="field names must be strings, got 1"):
        load_suite_config(_write_config(tmp_path, "1: a\nbogus: b\n"))
