"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard, SolveCounters
from .cell import Cell
from .exceptions import SudokuError, FormatError, Unsolvable, SearchAborted
from .validator import (
    is_valid_placement, is_valid_board, verify_complete,
    propagation_consistent, validate_solution,
)

__all__ = [
    "SudokuBoard",
    "SolveCounters",
    "Cell",
    "SudokuError",
    "FormatError",
    "Unsolvable",
    "SearchAborted",
    "is_valid_placement",
    "is_valid_board",
    "verify_complete",
    "propagation_consistent",
    "validate_solution",
]
