# sudoku_generator.py
# Generate a solved grid from a random seed row, strip it down to a puzzle
# with exactly one solution, and optionally hand some hints back.

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import List, MutableSequence, Optional, Sequence, Tuple

from contracts.errors import GenerationError, GridFormatError
from orchestrator.sampling import make_rng, shuffle, shuffled_range
from sudoku_solver import (
    ALL_DIGITS,
    GRID_SIZE,
    SUDOKU_SIZE,
    Grid,
    grid_idx,
    grid_x,
    grid_y,
    has_unique_solution,
    sec_idx,
    solve,
)

_LOGGER = logging.getLogger(__name__)

# ---------- Utils ----------

def grid_copy(g: Sequence[int]) -> Grid:
    return list(g)


def count_hints(g: Sequence[int]) -> int:
    return sum(1 for v in g if v != 0)


def to_string(g: Sequence[int]) -> str:
    return ''.join(str(v or 0) for v in g)


def from_string(s: str) -> Grid:
    s = ''.join(s.split())
    if len(s) != GRID_SIZE:
        raise GridFormatError(f"grid string must hold {GRID_SIZE} cells, got {len(s)}")
    grid = []
    for ch in s:
        if ch in "0.":
            grid.append(0)
        elif ch.isdigit():
            grid.append(int(ch))
        else:
            raise GridFormatError(f"unexpected character {ch!r} in grid string")
    return grid


def print_grid(g: Sequence[int]) -> str:
    lines = []
    for y in range(SUDOKU_SIZE):
        if y % 3 == 0 and y != 0:
            lines.append("------+-------+------")
        row = []
        for x in range(SUDOKU_SIZE):
            if x % 3 == 0 and x != 0:
                row.append("|")
            v = g[grid_idx(x, y)]
            row.append(str(v) if v != 0 else ".")
        lines.append(" ".join(row))
    return "\n".join(lines)

# ---------- Pipeline stages ----------


def seed_grid(rng: random.Random) -> Grid:
    """Empty grid whose first row is a random permutation of 1..9."""
    numbers = shuffled_range(SUDOKU_SIZE, 1, rng)
    grid = [0] * GRID_SIZE
    for x, value in enumerate(numbers):
        grid[grid_idx(x, 0)] = value
    return grid


def remove_deduced_hints(grid: MutableSequence[int], order: Sequence[int]) -> int:
    """Clear hints of a solved grid that the remaining hints force.

    Cells are visited in ``order``.  A hint goes when its row, column and box
    still show every digit between them, i.e. the cell could only hold the
    digit it has.  Returns the number of cleared hints.
    """

    # The grid starts fully solved, so every unit starts with all digits.
    row_masks = [ALL_DIGITS] * SUDOKU_SIZE
    col_masks = [ALL_DIGITS] * SUDOKU_SIZE
    sec_masks = [ALL_DIGITS] * SUDOKU_SIZE

    removed = 0
    for idx in order:
        x, y = grid_x(idx), grid_y(idx)
        sec = sec_idx(x, y)
        used = row_masks[y] | col_masks[x] | sec_masks[sec]
        if used == ALL_DIGITS and grid[idx] != 0:
            keep = ~(1 << grid[idx])
            row_masks[y] &= keep
            col_masks[x] &= keep
            sec_masks[sec] &= keep
            grid[idx] = 0
            removed += 1
    return removed


def remove_non_unique_hints(grid: MutableSequence[int], order: Sequence[int]) -> int:
    """Clear every hint whose removal keeps the solution unique.

    Returns the number of uniqueness checks that were run.
    """

    checks = 0
    for idx in order:
        value = grid[idx]
        if value == 0:
            continue
        grid[idx] = 0
        checks += 1
        if not has_unique_solution(grid):
            grid[idx] = value
    return checks


def add_extra_hints(
    grid: MutableSequence[int],
    solution: Sequence[int],
    num: int,
    rng: random.Random,
) -> int:
    """Copy up to ``num`` random hints from ``solution`` into empty cells."""

    if num <= 0:
        return 0

    hints = [i for i in range(GRID_SIZE) if grid[i] == 0]
    shuffle(hints, rng)

    num = min(num, len(hints))
    for i in hints[:num]:
        grid[i] = solution[i]
    return num

# ---------- Top-level generation ----------


@dataclass
class GenerationResult:
    """A generated puzzle with its solution and bookkeeping."""

    puzzle: Grid
    solution: Grid
    seed: Optional[int | str]
    extra_hints: int
    deduced_removed: int
    uniqueness_checks: int
    elapsed_ms: int

    @property
    def hints(self) -> int:
        return count_hints(self.puzzle)

    def to_bundle(self) -> dict:
        return {
            "seed": self.seed,
            "extra_hints": self.extra_hints,
            "hints": self.hints,
            "puzzle": to_string(self.puzzle),
            "solution": to_string(self.solution),
        }


def generate_puzzle(
    extra_hints: int = 0,
    *,
    seed: Optional[int | str] = None,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """Run the full pipeline and return the puzzle together with statistics.

    All random draws come from ``rng`` (built from ``seed`` when omitted) in a
    fixed order: seed row, solver branch shuffles, removal order and, when
    ``extra_hints`` is positive, the restoration order.

    Raises :class:`GenerationError` if the seed row cannot be completed.
    """

    if rng is None:
        rng = make_rng(seed)
    t0 = time.monotonic()

    # Partially prefill an empty grid to speed up the first solve.
    puzzle = seed_grid(rng)
    if not solve(puzzle, rng):
        _LOGGER.warning("could not generate sudoku puzzle")
        raise GenerationError("could not generate sudoku puzzle", seed=seed)

    solution = grid_copy(puzzle)

    order = shuffled_range(GRID_SIZE, 0, rng)
    deduced = remove_deduced_hints(puzzle, order)
    _LOGGER.debug("removed %d deducible hints, %d left", deduced, count_hints(puzzle))

    checks = remove_non_unique_hints(puzzle, order)
    _LOGGER.debug("ran %d uniqueness checks, %d hints left", checks, count_hints(puzzle))

    added = add_extra_hints(puzzle, solution, extra_hints, rng)
    if added:
        _LOGGER.debug("restored %d extra hints", added)

    elapsed_ms = int((time.monotonic() - t0) * 1000)
    return GenerationResult(
        puzzle=puzzle,
        solution=solution,
        seed=seed,
        extra_hints=max(0, extra_hints),
        deduced_removed=deduced,
        uniqueness_checks=checks,
        elapsed_ms=elapsed_ms,
    )


def generate(
    extra_hints: int = 0,
    *,
    seed: Optional[int | str] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Grid, Grid]:
    """Return ``(puzzle, solution)``; see :func:`generate_puzzle`."""

    result = generate_puzzle(extra_hints, seed=seed, rng=rng)
    return result.puzzle, result.solution


__all__ = [
    "GenerationResult",
    "add_extra_hints",
    "count_hints",
    "from_string",
    "generate",
    "generate_puzzle",
    "grid_copy",
    "print_grid",
    "remove_deduced_hints",
    "remove_non_unique_hints",
    "seed_grid",
    "to_string",
]
