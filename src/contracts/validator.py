"""Structural and rule validation for 81-cell Sudoku grids."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .errors import (
    GridFormatError,
    ValidationIssue,
    ValidationReport,
    make_error,
    make_warning,
)

GRID_CELLS = 81


def _units() -> Dict[str, List[List[int]]]:
    rows = [[9 * y + x for x in range(9)] for y in range(9)]
    cols = [[9 * y + x for y in range(9)] for x in range(9)]
    boxes = [
        [9 * ((b // 3) * 3 + i // 3) + (b % 3) * 3 + i % 3 for i in range(9)]
        for b in range(9)
    ]
    return {"row": rows, "col": cols, "box": boxes}


_UNITS = _units()


def _structural_issues(grid: Any) -> List[ValidationIssue]:
    if isinstance(grid, (str, bytes)) or not isinstance(grid, Sequence):
        return [make_error("grid.type", "grid must be a sequence of integers")]
    if len(grid) != GRID_CELLS:
        return [
            make_error(
                "grid.length", f"grid must hold {GRID_CELLS} cells, got {len(grid)}"
            )
        ]
    issues: List[ValidationIssue] = []
    for idx, value in enumerate(grid):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 9:
            issues.append(make_error("cell.range", f"cell value {value!r} outside 0..9", idx))
    return issues


def validate_grid(grid: Sequence[int], *, complete: bool = False) -> ValidationReport:
    """Check ``grid`` for shape, value range and duplicate digits.

    Empty cells (``0``) are allowed unless ``complete`` is set, in which case
    each of them is reported as ``grid.incomplete``.
    """

    errors = _structural_issues(grid)
    warnings: List[ValidationIssue] = []
    if errors:
        return ValidationReport(errors=errors, warnings=warnings)

    for kind, units in _UNITS.items():
        for unit_idx, cells in enumerate(units):
            seen: Dict[int, int] = {}
            for idx in cells:
                value = grid[idx]
                if value == 0:
                    continue
                if value in seen:
                    errors.append(
                        make_error(
                            f"{kind}.duplicate",
                            f"digit {value} repeated in {kind} {unit_idx}",
                            idx,
                        )
                    )
                else:
                    seen[value] = idx

    empties = [idx for idx, value in enumerate(grid) if value == 0]
    if complete:
        for idx in empties:
            errors.append(make_error("grid.incomplete", "cell is empty", idx))
    elif len(empties) == GRID_CELLS:
        warnings.append(make_warning("grid.empty", "grid has no filled cells"))

    return ValidationReport(errors=errors, warnings=warnings)


def assert_valid_grid(grid: Sequence[int]) -> None:
    """Raise :class:`GridFormatError` if ``grid`` is not 81 cells in ``0..9``."""

    issues = _structural_issues(grid)
    if issues:
        first = issues[0]
        raise GridFormatError(f"{first.code}: {first.msg} at {first.path}", issues)


__all__ = ["GRID_CELLS", "assert_valid_grid", "validate_grid"]
