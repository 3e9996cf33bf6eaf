# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Test-suite configuration for wastparse."""

from wastparse.workspace.config import (
    CONFIG_FILE_NAME,
    SuiteConfig,
    SuiteConfigError,
    load_suite_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "SuiteConfig",
    "SuiteConfigError",
    "load_suite_config",
]
