"""Propagation and scanning Sudoku solver for 9x9 and 16x16 grids."""

from .core import SudokuBoard, FormatError, Unsolvable, SearchAborted, verify_complete
from .solvers import ScanSolver, solve

__all__ = [
    "SudokuBoard",
    "FormatError",
    "Unsolvable",
    "SearchAborted",
    "verify_complete",
    "ScanSolver",
    "solve",
]
