# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for catalogs and schema messages (dangling names, breadcrumbs, etc.)."""

from singerschema.validation.checks import (
    ValidationResult,
    ValidationWarning,
    resolve_breadcrumb,
    validate_catalog,
    validate_schema_message,
)

__all__ = [
    "ValidationResult",
    "ValidationWarning",
    "resolve_breadcrumb",
    "validate_catalog",
    "validate_schema_message",
]
