"""Structural checks for the dancing-links node arena."""

from __future__ import annotations

import pytest

from dlx import ExactCoverMatrix, NodeArena


def _knuth_matrix() -> ExactCoverMatrix:
    # Columns A..G; the only exact cover is rows {0, 3, 4}.
    matrix = ExactCoverMatrix(6, 7)
    matrix.add_row(0, [2, 4, 5])
    matrix.add_row(1, [0, 3, 6])
    matrix.add_row(2, [1, 2, 5])
    matrix.add_row(3, [0, 3])
    matrix.add_row(4, [1, 6])
    matrix.add_row(5, [3, 4, 6])
    return matrix


def _arena(matrix: ExactCoverMatrix, strict: bool = False) -> NodeArena:
    arena = NodeArena(matrix.inuse + matrix.ncols + 1, matrix.ncols, matrix.nrows)
    arena.build(matrix, strict=strict)
    return arena


def test_build_links_columns_and_counts() -> None:
    matrix = _knuth_matrix()
    arena = _arena(matrix)

    assert list(arena.live_columns()) == list(range(7))
    assert [arena.count[c] for c in range(7)] == [2, 2, 2, 3, 2, 2, 3]
    for col in range(7):
        rows = [arena.rownum[n] for n in arena.column_nodes(col)]
        assert rows == matrix.column_rows(col)
    assert arena.used == matrix.inuse + matrix.ncols + 1


def test_row_nodes_are_circular_in_column_order() -> None:
    arena = _arena(_knuth_matrix())
    first = next(n for n in arena.column_nodes(2) if arena.rownum[n] == 2)

    cols = [arena.column[first]]
    node = arena.right[first]
    while node != first:
        cols.append(arena.column[node])
        node = arena.right[node]
    assert cols == [2, 5, 1]
    assert arena.column[arena.left[first]] == 1


def test_cover_removes_intersecting_rows() -> None:
    arena = _arena(_knuth_matrix())
    arena.cover(0)

    assert 0 not in list(arena.live_columns())
    # Rows 1 and 3 hold column A and leave D and G.
    assert arena.count[3] == 1
    assert arena.count[6] == 2
    assert [arena.rownum[n] for n in arena.column_nodes(3)] == [5]
    # The covered column keeps its own rows.
    assert arena.count[0] == 2


def test_cover_then_uncover_restores_structure() -> None:
    arena = _arena(_knuth_matrix())
    before = arena.snapshot()

    for col in range(7):
        arena.cover(col)
        arena.uncover(col)
        assert arena.snapshot() == before


def test_nested_cover_uncover_restores_structure() -> None:
    arena = _arena(_knuth_matrix())
    before = arena.snapshot()

    arena.cover(0)
    mid = arena.snapshot()
    arena.cover(3)
    arena.cover(6)
    arena.uncover(6)
    arena.uncover(3)
    assert arena.snapshot() == mid
    arena.uncover(0)
    assert arena.snapshot() == before


def test_empty_columns_dropped_unless_strict() -> None:
    matrix = ExactCoverMatrix(2, 3)
    matrix.add_row(0, [0, 1])

    assert list(_arena(matrix).live_columns()) == [0, 1]
    assert list(_arena(matrix, strict=True).live_columns()) == [0, 1, 2]


def test_build_rejects_matrix_larger_than_arena() -> None:
    matrix = _knuth_matrix()
    arena = NodeArena(matrix.ncols + 3, matrix.ncols, matrix.nrows)
    with pytest.raises(ValueError):
        arena.build(matrix)
