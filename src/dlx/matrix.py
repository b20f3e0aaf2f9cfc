"""Sparse boolean matrix describing an exact-cover problem.

Rows are candidate actions and columns are constraints that must be
satisfied exactly once.  Only the "on" cells are stored; each row keeps its
column indices in ascending order so the cover graph can link row nodes in
column order.
"""

from __future__ import annotations

from bisect import insort
from typing import Dict, Iterable, Iterator, List, Tuple


class ExactCoverMatrix:
    """Boolean ``cells[row][col]`` matrix with sparse row storage."""

    def __init__(self, nrows: int, ncols: int) -> None:
        if nrows < 0 or ncols < 0:
            raise ValueError("matrix dimensions must be non-negative")
        self.nrows = nrows
        self.ncols = ncols
        self._rows: Dict[int, List[int]] = {}
        self._inuse = 0

    @property
    def inuse(self) -> int:
        """Number of cells that are on."""
        return self._inuse

    def _check(self, row: int, col: int) -> None:
        if not 0 <= row < self.nrows:
            raise IndexError(f"row {row} outside [0, {self.nrows})")
        if not 0 <= col < self.ncols:
            raise IndexError(f"column {col} outside [0, {self.ncols})")

    def set(self, row: int, col: int) -> None:
        self._check(row, col)
        cols = self._rows.setdefault(row, [])
        if col in cols:
            return
        insort(cols, col)
        self._inuse += 1

    def add_row(self, row: int, cols: Iterable[int]) -> None:
        for col in cols:
            self.set(row, col)

    def is_set(self, row: int, col: int) -> bool:
        self._check(row, col)
        return col in self._rows.get(row, ())

    def rows(self) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        """Yield ``(row, columns)`` for every non-empty row, top to bottom."""
        for row in sorted(self._rows):
            yield row, tuple(self._rows[row])

    def column_rows(self, col: int) -> List[int]:
        """Row indices with an on cell in ``col``, top to bottom."""
        if not 0 <= col < self.ncols:
            raise IndexError(f"column {col} outside [0, {self.ncols})")
        return [row for row in sorted(self._rows) if col in self._rows[row]]

    def __repr__(self) -> str:
        return f"ExactCoverMatrix(nrows={self.nrows}, ncols={self.ncols}, inuse={self._inuse})"


__all__ = ["ExactCoverMatrix"]
