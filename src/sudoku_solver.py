# sudoku_solver.py
# Translate 9x9 grids to exact-cover matrices, solve them with the DLX
# solver and write the chosen rows back into the grid.

from __future__ import annotations

import random
from typing import List, MutableSequence, Optional, Sequence, Set, Tuple

from contracts.validator import assert_valid_grid, validate_grid
from dlx import NO_ROW, ExactCoverMatrix, SearchMode, Solver

SUDOKU_SIZE = 9
GRID_SIZE = SUDOKU_SIZE * SUDOKU_SIZE

# Exact-cover dimensions: one row per (value, x, y) action, four families of
# 81 constraints (cell filled, row has value, column has value, box has value).
DLX_MAX_ROWS = GRID_SIZE * SUDOKU_SIZE
DLX_MAX_COLS = 4 * GRID_SIZE

# Bits 1..9 set: every digit present.
ALL_DIGITS = (1 << (SUDOKU_SIZE + 1)) - 2

Grid = List[int]


# ---------- Index helpers ----------

def grid_idx(x: int, y: int) -> int:
    return y * SUDOKU_SIZE + x


def grid_x(idx: int) -> int:
    return idx % SUDOKU_SIZE


def grid_y(idx: int) -> int:
    return idx // SUDOKU_SIZE


def sec_idx(x: int, y: int) -> int:
    return (y // 3) * 3 + x // 3


def dlx_row(v: int, x: int, y: int) -> int:
    """Row index for placing digit ``v + 1`` at ``(x, y)``; ``v`` is 0-based."""
    return GRID_SIZE * y + SUDOKU_SIZE * x + v


def dlx_cols(v: int, x: int, y: int) -> Tuple[int, int, int, int]:
    return (
        SUDOKU_SIZE * y + x,
        GRID_SIZE + SUDOKU_SIZE * y + v,
        2 * GRID_SIZE + SUDOKU_SIZE * x + v,
        3 * GRID_SIZE + SUDOKU_SIZE * sec_idx(x, y) + v,
    )


def decode_row(row: int) -> Tuple[int, int, int]:
    """Return ``(value, x, y)`` for a DLX row, ``value`` in ``1..9``."""
    return row % SUDOKU_SIZE + 1, (row // SUDOKU_SIZE) % SUDOKU_SIZE, row // GRID_SIZE


# ---------- Masks and matrix ----------

def get_masks(grid: Sequence[int]) -> Tuple[List[int], List[int], List[int]]:
    """Bitmasks of digits used per row, column and box (bit ``d`` for digit ``d``)."""
    rows = [0] * SUDOKU_SIZE
    cols = [0] * SUDOKU_SIZE
    secs = [0] * SUDOKU_SIZE
    for idx, value in enumerate(grid):
        if value:
            bit = 1 << value
            x, y = grid_x(idx), grid_y(idx)
            rows[y] |= bit
            cols[x] |= bit
            secs[sec_idx(x, y)] |= bit
    return rows, cols, secs


def build_matrix(grid: Sequence[int]) -> ExactCoverMatrix:
    """Exact-cover matrix for the empty cells of ``grid``.

    Filled cells contribute no rows; digits already used in a cell's row,
    column or box are skipped.
    """

    matrix = ExactCoverMatrix(DLX_MAX_ROWS, DLX_MAX_COLS)
    row_masks, col_masks, sec_masks = get_masks(grid)
    for x in range(SUDOKU_SIZE):
        for y in range(SUDOKU_SIZE):
            if grid[grid_idx(x, y)] != 0:
                continue
            net_mask = row_masks[y] | col_masks[x] | sec_masks[sec_idx(x, y)]
            for v in range(SUDOKU_SIZE):
                if net_mask & (1 << (v + 1)) == 0:
                    matrix.add_row(dlx_row(v, x, y), dlx_cols(v, x, y))
    return matrix


def satisfied_columns(grid: Sequence[int]) -> Set[int]:
    """Constraint columns already met by the filled cells of ``grid``."""
    satisfied: Set[int] = set()
    for idx, value in enumerate(grid):
        if value:
            satisfied.update(dlx_cols(value - 1, grid_x(idx), grid_y(idx)))
    return satisfied


def _has_dead_constraint(grid: Sequence[int], matrix: ExactCoverMatrix) -> bool:
    # Zero-count columns are dropped from the search, which is only sound for
    # constraints that a filled cell already meets.
    live = {col for _, cols in matrix.rows() for col in cols}
    satisfied = satisfied_columns(grid)
    return any(col not in live and col not in satisfied for col in range(DLX_MAX_COLS))


def grid_rows(grid: Sequence[int]) -> List[int]:
    """DLX rows selected by the filled cells of ``grid``, in grid order."""
    return [
        dlx_row(value - 1, grid_x(idx), grid_y(idx))
        for idx, value in enumerate(grid)
        if value
    ]


def fill_solution(grid: MutableSequence[int], rows: Sequence[int]) -> None:
    """Write the placements named by ``rows`` into ``grid``; ``-1`` is skipped."""
    for row in rows:
        if row == NO_ROW:
            continue
        value, x, y = decode_row(row)
        grid[grid_idx(x, y)] = value


# ---------- Solving ----------

def _prepare(grid: Sequence[int]) -> Optional[ExactCoverMatrix]:
    assert_valid_grid(grid)
    if not validate_grid(grid).ok:
        return None
    matrix = build_matrix(grid)
    if _has_dead_constraint(grid, matrix):
        return None
    return matrix


def solve(grid: MutableSequence[int], rng: Optional[random.Random] = None) -> bool:
    """Fill ``grid`` in place with one random completion.

    Returns ``False`` and leaves ``grid`` untouched when no completion exists.
    """

    matrix = _prepare(grid)
    if matrix is None:
        return False
    solver = Solver.from_matrix(matrix, rng=rng)
    solution = [NO_ROW] * GRID_SIZE
    solved = solver.run(SearchMode.RANDOM, solution)
    if solved:
        fill_solution(grid, solution)
    return solved


def has_unique_solution(grid: Sequence[int]) -> bool:
    """Return ``True`` if ``grid`` has exactly one completion."""

    matrix = _prepare(grid)
    if matrix is None:
        return False
    solver = Solver.from_matrix(matrix)
    solution = [NO_ROW] * GRID_SIZE
    return solver.run(SearchMode.UNIQUE, solution)


__all__ = [
    "ALL_DIGITS",
    "DLX_MAX_COLS",
    "DLX_MAX_ROWS",
    "GRID_SIZE",
    "Grid",
    "SUDOKU_SIZE",
    "build_matrix",
    "decode_row",
    "dlx_cols",
    "dlx_row",
    "fill_solution",
    "get_masks",
    "grid_idx",
    "grid_rows",
    "grid_x",
    "grid_y",
    "has_unique_solution",
    "satisfied_columns",
    "sec_idx",
    "solve",
]
