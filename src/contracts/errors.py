"""Error types and grid findings shared by the solver, the generator and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


class SudokuError(Exception):
    """Base class for failures reported by the puzzle pipeline."""


class GenerationError(SudokuError, RuntimeError):
    """The seed grid could not be completed into a solved grid."""

    def __init__(self, message: str, seed: Optional[int | str] = None) -> None:
        super().__init__(message)
        self.seed = seed


class GridFormatError(SudokuError, ValueError):
    """A grid is not 81 integer cells in ``0..9``."""

    def __init__(self, message: str, issues: Sequence["ValidationIssue"] = ()) -> None:
        super().__init__(message)
        self.issues = list(issues)


@dataclass(frozen=True)
class ValidationIssue:
    """One finding about a grid; ``cell`` is the flat index or ``None`` for the whole grid."""

    code: str
    msg: str
    cell: Optional[int] = None
    severity: str = SEVERITY_ERROR

    @property
    def path(self) -> str:
        return "$" if self.cell is None else f"$[{self.cell}]"


@dataclass(frozen=True)
class ValidationReport:
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def codes(self) -> List[str]:
        return [issue.code for issue in self.errors]


def make_error(code: str, msg: str, cell: Optional[int] = None) -> ValidationIssue:
    return ValidationIssue(code=code, msg=msg, cell=cell, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, cell: Optional[int] = None) -> ValidationIssue:
    return ValidationIssue(code=code, msg=msg, cell=cell, severity=SEVERITY_WARN)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "GenerationError",
    "GridFormatError",
    "SudokuError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_warning",
]
