# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for singerschema documentation."""

project = "singerschema"
author = "singerschema Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
