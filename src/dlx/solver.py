"""Algorithm X search over a dancing-links graph.

A :class:`Solver` is one session for one exact-cover instance: it owns the
node arena, remembers the matrix it was built from and can be run several
times.  Two search modes are supported:

``SearchMode.RANDOM``
    Stop at the first solution.  Candidate rows are shuffled at every branch
    so different random streams surface different solutions.

``SearchMode.UNIQUE``
    Keep searching after the first solution and stop at the second one.
    :meth:`Solver.run` reports ``True`` only when exactly one solution exists.

"No solution" and "not unique" are ordinary ``False`` results.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import List, MutableSequence, Optional

from orchestrator.log import fatal
from orchestrator.sampling import make_rng, shuffle

from .engine import NO_ROW, NodeArena
from .matrix import ExactCoverMatrix

_LOGGER = logging.getLogger(__name__)


class SearchMode(str, Enum):
    """Termination policy for :meth:`Solver.run`."""

    RANDOM = "random"
    UNIQUE = "unique"


class Solver:
    """Dancing-links exact-cover solver session."""

    def __init__(
        self,
        inuse: int,
        ncols: int,
        nrows: int,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        try:
            self._arena = NodeArena(inuse + ncols + 1, ncols, nrows)
        except MemoryError:
            fatal("failed to allocate memory for solver nodes")
        self._rng = rng
        self.mode = SearchMode.RANDOM
        self.solution_count = 0
        self._solution: MutableSequence[int] = []
        self._matrix: Optional[ExactCoverMatrix] = None
        self._strict = False
        self._dirty = False
        self._first: Optional[List[int]] = None
        self._buffers: List[List[int]] = []

    @classmethod
    def from_matrix(
        cls,
        matrix: ExactCoverMatrix,
        *,
        rng: Optional[random.Random] = None,
        strict: bool = False,
    ) -> "Solver":
        solver = cls(matrix.inuse, matrix.ncols, matrix.nrows, rng=rng)
        solver.init_graph(matrix, strict=strict)
        return solver

    @property
    def arena(self) -> NodeArena:
        return self._arena

    @property
    def rng(self) -> random.Random:
        """Branch shuffle stream; only random mode draws, so it is created on first use."""
        if self._rng is None:
            self._rng = make_rng(None)
        return self._rng

    def init_graph(self, matrix: ExactCoverMatrix, strict: bool = False) -> None:
        """Build the linked graph for ``matrix``."""
        self._arena.build(matrix, strict=strict)
        self._matrix = matrix
        self._strict = strict
        self._dirty = False

    def run(self, mode: SearchMode, solution: MutableSequence[int]) -> bool:
        """Search the graph and store chosen row indices in ``solution``.

        ``solution`` is filled with ``-1`` first; one row index is written per
        search depth.  In random mode the result says whether a solution was
        found, in unique mode whether exactly one exists; unique mode leaves
        the first solution it met in ``solution``.  Unused slots stay ``-1``.
        """

        if self._matrix is None:
            raise RuntimeError("init_graph must be called before run")
        if self._dirty:
            # A successful search returns without unwinding its covers.
            self._arena.build(self._matrix, strict=self._strict)

        self.mode = SearchMode(mode)
        self.solution_count = 0
        self._solution = solution
        for i in range(len(solution)):
            solution[i] = NO_ROW

        self._first = None
        self._dirty = True
        found = self._search(0)
        self._dirty = found
        _LOGGER.debug(
            "dlx run mode=%s found=%s solutions=%d", self.mode.value, found, self.solution_count
        )
        if self.mode is SearchMode.RANDOM:
            if not found:
                for i in range(len(solution)):
                    solution[i] = NO_ROW
            return found

        # Exhaustive backtracking leaves stale rows behind; report the first
        # solution that was found instead.
        first = self._first or [NO_ROW] * len(solution)
        for i, value in enumerate(first):
            solution[i] = value
        return self.solution_count == 1

    def _row_buffer(self, depth: int) -> List[int]:
        while len(self._buffers) <= depth:
            self._buffers.append([])
        buffer = self._buffers[depth]
        buffer.clear()
        return buffer

    def _search(self, k: int) -> bool:
        arena = self._arena
        root = arena.root
        right, left, down = arena.right, arena.left, arena.down
        count, column = arena.count, arena.column

        if right[root] == root:
            # Every constraint is satisfied.  Distinct row sets are distinct
            # solutions, so a second hit proves ambiguity.
            solution = self._solution
            for i in range(k, len(solution)):
                solution[i] = NO_ROW
            self.solution_count += 1
            if self.solution_count == 1:
                self._first = list(solution)
            return self.mode is SearchMode.RANDOM or self.solution_count > 1

        # Fewest remaining rows first; ties go to the leftmost column.
        col = right[root]
        best = count[col]
        c = right[col]
        while c != root:
            if count[c] < best:
                col = c
                best = count[c]
            c = right[c]

        arena.cover(col)

        if count[col] > 0:
            rows = self._row_buffer(k)
            row = down[col]
            while row != col:
                rows.append(row)
                row = down[row]

            if self.mode is SearchMode.RANDOM:
                shuffle(rows, self.rng)

            if k >= len(self._solution):
                raise ValueError(
                    f"solution buffer of size {len(self._solution)} is too small for depth {k + 1}"
                )

            for row in rows:
                self._solution[k] = arena.rownum[row]

                node = right[row]
                while node != row:
                    arena.cover(column[node])
                    node = right[node]

                if self._search(k + 1):
                    return True

                node = left[row]
                while node != row:
                    arena.uncover(column[node])
                    node = left[node]

        arena.uncover(col)
        return False


__all__ = ["SearchMode", "Solver"]
