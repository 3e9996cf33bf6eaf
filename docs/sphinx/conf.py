# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the wastparse API documentation."""

project = "wastparse"
author = "wastparse Contributors"
release = "0.1.0"

extensions: list[str] = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
]

autodoc_member_order = "bysource"
napoleon_google_docstring = True
napoleon_numpy_docstring = False

html_theme = "alabaster"
