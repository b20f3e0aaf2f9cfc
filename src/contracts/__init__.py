"""Grid contracts: error taxonomy, grid validation and bundle schemas."""

from __future__ import annotations

from .errors import (
    GenerationError,
    GridFormatError,
    SudokuError,
    ValidationIssue,
    ValidationReport,
)
from .schema_validator import SchemaValidationError, validate_bundle
from .validator import assert_valid_grid, validate_grid

__all__ = [
    "GenerationError",
    "GridFormatError",
    "SchemaValidationError",
    "SudokuError",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid_grid",
    "validate_bundle",
    "validate_grid",
]
