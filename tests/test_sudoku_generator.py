from __future__ import annotations

import random

import pytest

import sudoku_generator
from contracts.errors import GenerationError, GridFormatError
from contracts.schema_validator import validate_bundle
from contracts.validator import validate_grid
from orchestrator.sampling import make_rng
from sudoku_generator import (
    add_extra_hints,
    count_hints,
    from_string,
    generate,
    generate_puzzle,
    print_grid,
    remove_deduced_hints,
    remove_non_unique_hints,
    seed_grid,
    to_string,
)
from sudoku_solver import has_unique_solution

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


class CountingRandom(random.Random):
    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self.draws = 0

    def randrange(self, *args, **kwargs):  # type: ignore[override]
        self.draws += 1
        return super().randrange(*args, **kwargs)


@pytest.fixture(scope="module")
def base_result():
    return generate_puzzle(0, seed=5)


def test_generated_puzzle_is_minimal_and_unique(base_result) -> None:
    puzzle, solution = base_result.puzzle, base_result.solution

    assert validate_grid(solution, complete=True).ok
    assert all(p in (0, s) for p, s in zip(puzzle, solution))
    assert has_unique_solution(puzzle)
    assert 17 <= base_result.hints < 81

    for idx, value in enumerate(puzzle):
        if value:
            puzzle[idx] = 0
            assert not has_unique_solution(puzzle)
            puzzle[idx] = value


def test_same_seed_same_puzzle(base_result) -> None:
    puzzle, solution = generate(0, seed=5)
    assert puzzle == base_result.puzzle
    assert solution == base_result.solution


def test_extra_hints_extend_the_same_puzzle(base_result) -> None:
    result = generate_puzzle(3, seed=5)

    assert result.solution == base_result.solution
    assert result.hints == base_result.hints + 3
    assert all(b in (0, p) for b, p in zip(base_result.puzzle, result.puzzle))


def test_extra_hints_are_clamped() -> None:
    puzzle, solution = generate(1000, seed="clamp")
    assert puzzle == solution


def test_bundle_passes_schema(base_result) -> None:
    bundle = base_result.to_bundle()
    validate_bundle(bundle)
    assert bundle["seed"] == 5
    assert bundle["hints"] == count_hints(base_result.puzzle)


def test_unsolvable_seed_raises(monkeypatch) -> None:
    monkeypatch.setattr(sudoku_generator, "solve", lambda grid, rng=None: False)
    with pytest.raises(GenerationError) as excinfo:
        generate_puzzle(0, seed=1)
    assert excinfo.value.seed == 1


def test_seed_grid_uses_eight_draws() -> None:
    rng = CountingRandom(2)
    grid = seed_grid(rng)

    assert rng.draws == 8
    assert sorted(grid[:9]) == list(range(1, 10))
    assert grid[9:] == [0] * 72


def test_no_extra_hints_draws_nothing() -> None:
    rng = CountingRandom(0)
    grid = from_string(PUZZLE)

    assert add_extra_hints(grid, from_string(SOLUTION), 0, rng) == 0
    assert add_extra_hints(grid, from_string(SOLUTION), -4, rng) == 0
    assert rng.draws == 0
    assert grid == from_string(PUZZLE)


def test_extra_hints_copy_from_solution() -> None:
    grid = from_string(PUZZLE)
    solution = from_string(SOLUTION)

    assert add_extra_hints(grid, solution, 5, make_rng(4)) == 5
    assert count_hints(grid) == 35
    assert all(g in (0, s) for g, s in zip(grid, solution))


def test_deduced_removal_keeps_uniqueness() -> None:
    grid = from_string(SOLUTION)
    removed = remove_deduced_hints(grid, list(range(81)))

    assert removed == 81 - count_hints(grid)
    assert removed > 0
    assert has_unique_solution(grid)


def test_non_unique_removal_checks_every_hint() -> None:
    grid = from_string(PUZZLE)
    checks = remove_non_unique_hints(grid, list(range(81)))

    assert checks == 30
    assert count_hints(grid) <= 30
    assert has_unique_solution(grid)


def test_string_helpers() -> None:
    dotted = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"
    assert from_string(dotted) == from_string(PUZZLE)
    assert to_string(from_string(PUZZLE)) == PUZZLE
    assert from_string(" ".join(PUZZLE)) == from_string(PUZZLE)

    with pytest.raises(GridFormatError):
        from_string(PUZZLE[:-1])
    with pytest.raises(GridFormatError):
        from_string(PUZZLE[:-1] + "x")


def test_print_grid_layout() -> None:
    lines = print_grid(from_string(PUZZLE)).splitlines()

    assert len(lines) == 11
    assert lines[0] == "5 3 . | . 7 . | . . ."
    assert lines[3] == "------+-------+------"
    assert lines[-1] == ". . . | . 8 . | . 7 9"
