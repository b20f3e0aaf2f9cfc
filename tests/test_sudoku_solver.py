from __future__ import annotations

import pytest

import dlx.solver as solver_module
from contracts.errors import GridFormatError
from contracts.validator import validate_grid
from orchestrator.sampling import make_rng
from sudoku_generator import from_string
from sudoku_solver import (
    ALL_DIGITS,
    build_matrix,
    decode_row,
    dlx_cols,
    dlx_row,
    fill_solution,
    get_masks,
    grid_idx,
    grid_rows,
    has_unique_solution,
    sec_idx,
    solve,
)

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def test_row_encoding_round_trip():
    assert dlx_row(0, 0, 0) == 0
    assert dlx_row(8, 8, 8) == 728
    assert dlx_row(4, 2, 7) == 81 * 7 + 9 * 2 + 4
    assert decode_row(dlx_row(4, 2, 7)) == (5, 2, 7)


def test_constraint_columns():
    assert dlx_cols(0, 0, 0) == (0, 81, 162, 243)
    # Digit 9 at x=5, y=4 sits in the centre box.
    assert sec_idx(5, 4) == 4
    assert dlx_cols(8, 5, 4) == (41, 81 + 44, 162 + 53, 243 + 44)


def test_masks_mark_used_digits():
    grid = from_string(SOLUTION)
    rows, cols, secs = get_masks(grid)
    assert rows == [ALL_DIGITS] * 9
    assert cols == [ALL_DIGITS] * 9
    assert secs == [ALL_DIGITS] * 9

    rows, cols, secs = get_masks(from_string(PUZZLE))
    assert rows[0] == (1 << 5) | (1 << 3) | (1 << 7)
    assert cols[0] == sum(1 << d for d in (5, 6, 8, 4, 7))


def test_matrix_size_tracks_empty_cells():
    assert build_matrix([0] * 81).inuse == 729 * 4
    assert build_matrix(from_string(SOLUTION)).inuse == 0

    matrix = build_matrix(from_string(PUZZLE))
    # Cell (2, 0) can only hold 1, 2 or 4.
    rows = [row for row, _ in matrix.rows() if decode_row(row)[1:] == (2, 0)]
    assert sorted(decode_row(row)[0] for row in rows) == [1, 2, 4]


def test_fill_solution_from_grid_rows():
    solution = from_string(SOLUTION)
    grid = [0] * 81
    fill_solution(grid, grid_rows(solution) + [-1, -1])
    assert grid == solution


def test_solves_known_puzzle():
    grid = from_string(PUZZLE)
    assert has_unique_solution(grid) is True
    assert solve(grid, make_rng(1)) is True
    assert grid == from_string(SOLUTION)


def test_solved_grid_is_its_own_solution():
    grid = from_string(SOLUTION)
    assert solve(grid) is True
    assert grid == from_string(SOLUTION)
    assert has_unique_solution(grid) is True


def test_random_completion_keeps_hints():
    grid = [0] * 81
    seed_row = [4, 8, 1, 6, 2, 9, 3, 7, 5]
    grid[:9] = seed_row

    assert has_unique_solution(grid) is False
    assert solve(grid, make_rng(0)) is True
    assert grid[:9] == seed_row
    assert validate_grid(grid, complete=True).ok


def test_same_rng_same_completion():
    first = [0] * 81
    second = [0] * 81
    first[:9] = second[:9] = [1, 2, 3, 4, 5, 6, 7, 8, 9]
    assert solve(first, make_rng(11)) and solve(second, make_rng(11))
    assert first == second


def test_cell_without_candidates_fails():
    grid = [0] * 81
    grid[:8] = [1, 2, 3, 4, 5, 6, 7, 8]
    grid[grid_idx(8, 1)] = 9
    before = list(grid)

    assert solve(grid, make_rng(0)) is False
    assert grid == before
    assert has_unique_solution(grid) is False


def test_conflicting_hints_fail():
    grid = [0] * 81
    grid[0] = grid[1] = 5
    assert solve(grid) is False
    assert grid[2:] == [0] * 79
    assert has_unique_solution(grid) is False


def test_malformed_grid_rejected():
    with pytest.raises(GridFormatError):
        solve([0] * 80)
    with pytest.raises(GridFormatError):
        has_unique_solution([10] + [0] * 80)


def test_uniqueness_check_draws_no_randomness(monkeypatch) -> None:
    def _no_entropy(seed):
        raise AssertionError("uniqueness checks must not seed a random stream")

    monkeypatch.setattr(solver_module, "make_rng", _no_entropy)
    assert has_unique_solution(from_string(PUZZLE)) is True
