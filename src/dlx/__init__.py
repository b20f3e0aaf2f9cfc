"""Dancing-links exact-cover solver."""

from __future__ import annotations

from .engine import NO_ROW, NodeArena
from .matrix import ExactCoverMatrix
from .solver import SearchMode, Solver

__all__ = [
    "ExactCoverMatrix",
    "NO_ROW",
    "NodeArena",
    "SearchMode",
    "Solver",
]
