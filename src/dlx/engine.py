"""Toroidal dancing-links graph stored in an index-addressed node arena.

Every node lives in parallel lists; the "pointers" of a node are indices into
those lists.  Column headers occupy indices ``0..ncols-1``, the root sentinel
sits at ``ncols`` and row nodes follow.  ``cover`` and ``uncover`` only rewire
indices, nothing is copied or freed.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .matrix import ExactCoverMatrix

NO_ROW = -1


class NodeArena:
    """Fixed-capacity node storage plus the cover/uncover primitives."""

    __slots__ = (
        "capacity",
        "ncols",
        "nrows",
        "root",
        "used",
        "left",
        "right",
        "up",
        "down",
        "column",
        "count",
        "rownum",
    )

    def __init__(self, capacity: int, ncols: int, nrows: int) -> None:
        if capacity < ncols + 1:
            raise ValueError("arena must hold every column header plus the root")
        self.capacity = capacity
        self.ncols = ncols
        self.nrows = nrows
        self.root = ncols
        self.used = 0
        self.left: List[int] = [0] * capacity
        self.right: List[int] = [0] * capacity
        self.up: List[int] = [0] * capacity
        self.down: List[int] = [0] * capacity
        self.column: List[int] = [0] * capacity
        # Live row count for headers; unused on row nodes.
        self.count: List[int] = [0] * capacity
        self.rownum: List[int] = [NO_ROW] * capacity

    def build(self, matrix: ExactCoverMatrix, strict: bool = False) -> None:
        """Link headers and row nodes for ``matrix``.

        With ``strict`` disabled, columns that end up with no rows are taken
        out of the header list so the search never selects them.
        """

        if matrix.ncols != self.ncols or matrix.nrows > self.nrows:
            raise ValueError("matrix does not match the arena dimensions")
        if matrix.inuse + self.ncols + 1 > self.capacity:
            raise ValueError(
                f"matrix holds {matrix.inuse} cells but the arena only fits "
                f"{self.capacity - self.ncols - 1}"
            )

        left, right, up, down = self.left, self.right, self.up, self.down
        column, count, rownum = self.column, self.count, self.rownum
        root = self.root

        prev = root
        for col in range(self.ncols):
            left[col] = prev
            right[prev] = col
            up[col] = down[col] = col
            column[col] = col
            count[col] = 0
            rownum[col] = NO_ROW
            prev = col
        right[prev] = root
        left[root] = prev
        up[root] = down[root] = column[root] = root
        count[root] = 0
        rownum[root] = NO_ROW

        node = root + 1
        for row, cols in matrix.rows():
            first = -1
            for col in cols:
                column[node] = col
                rownum[node] = row
                # Append at the bottom of the column list.
                last = up[col]
                up[node] = last
                down[node] = col
                down[last] = node
                up[col] = node
                count[col] += 1
                if first < 0:
                    first = node
                    left[node] = right[node] = node
                else:
                    tail = left[first]
                    left[node] = tail
                    right[node] = first
                    right[tail] = node
                    left[first] = node
                node += 1
        self.used = node

        if not strict:
            for col in range(self.ncols):
                if count[col] == 0:
                    right[left[col]] = right[col]
                    left[right[col]] = left[col]

    def cover(self, col: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        column, count = self.column, self.count

        right[left[col]] = right[col]
        left[right[col]] = left[col]

        row = down[col]
        while row != col:
            node = right[row]
            while node != row:
                down[up[node]] = down[node]
                up[down[node]] = up[node]
                count[column[node]] -= 1
                node = right[node]
            row = down[row]

    def uncover(self, col: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        column, count = self.column, self.count

        # Bottom to top, right to left: the exact reverse of cover.
        row = up[col]
        while row != col:
            node = left[row]
            while node != row:
                down[up[node]] = node
                up[down[node]] = node
                count[column[node]] += 1
                node = left[node]
            row = up[row]

        right[left[col]] = col
        left[right[col]] = col

    def live_columns(self) -> Iterator[int]:
        """Iterate the header list from the root."""
        col = self.right[self.root]
        while col != self.root:
            yield col
            col = self.right[col]

    def column_nodes(self, col: int) -> Iterator[int]:
        node = self.down[col]
        while node != col:
            yield node
            node = self.down[node]

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Return the link and count state of every used node."""
        used = self.used
        return (
            tuple(self.left[:used]),
            tuple(self.right[:used]),
            tuple(self.up[:used]),
            tuple(self.down[:used]),
            tuple(self.count[:used]),
        )


__all__ = ["NO_ROW", "NodeArena"]
