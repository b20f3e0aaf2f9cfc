"""JSON Schema validation for exported puzzle bundles."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema


class SchemaValidationError(RuntimeError):
    """Exception raised when a bundle fails validation."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
BUNDLE_SCHEMA = "bundle.schema.json"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a schema shipped next to this module."""

    path = _SCHEMA_ROOT / schema_name
    try:
        return json.loads(path.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise SchemaValidationError("schema-not-found", schema_name) from exc


def _error_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def validate_bundle(bundle: Dict[str, Any]) -> None:
    """Validate ``bundle`` against the bundle schema and its cross-field rules.

    Filled puzzle cells must match the solution and ``hints`` must equal the
    number of filled puzzle cells.
    """

    schema = load_schema(BUNDLE_SCHEMA)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)
    errors = sorted(validator.iter_errors(bundle), key=lambda err: list(err.absolute_path))
    if errors:
        first = errors[0]
        raise SchemaValidationError("schema-invalid", f"{_error_path(first)}: {first.message}")

    puzzle = bundle["puzzle"]
    solution = bundle["solution"]
    for idx, (given, answer) in enumerate(zip(puzzle, solution)):
        if given != "0" and given != answer:
            raise SchemaValidationError("puzzle-mismatch", f"$.puzzle[{idx}]")
    filled = sum(1 for ch in puzzle if ch != "0")
    if bundle["hints"] != filled:
        raise SchemaValidationError("hints-mismatch", f"expected {filled}, got {bundle['hints']}")


__all__ = ["BUNDLE_SCHEMA", "SchemaValidationError", "load_schema", "validate_bundle"]
