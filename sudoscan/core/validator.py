"""Validation utilities for Sudoku puzzles."""

from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING

from .board import block_view
from .cell import bit

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """True if value is a symbol of the board and no peer of (row, col) holds it."""
    if not 1 <= value <= board.size:
        return False
    return all(board.get(r, c) != value for r, c in board.get_peers(row, col))


def is_valid_board(board: SudokuBoard) -> bool:
    """
    Check if the entire board state is valid (no conflicts).

    Args:
        board: The Sudoku board to validate.

    Returns:
        True if no constraints are violated.
    """
    return board.is_valid()


def verify_complete(board: SudokuBoard) -> bool:
    """
    Check that every row, column and block holds each symbol exactly once.

    Blank cells make the check fail. This is independent of any solver
    state, so it can be used on externally supplied grids as well.
    """
    expected = np.arange(1, board.size + 1)
    for view in (board.values, board.values.T, block_view(board.values, board.order)):
        if not np.array_equal(np.sort(view, axis=1), np.broadcast_to(expected, view.shape)):
            return False
    return True


def propagation_consistent(board: SudokuBoard) -> bool:
    """
    Check that no utilized cell's value is still possible in one of its peers.

    Cells fixed since the last propagation sweep are not utilized yet and
    are skipped.
    """
    for row, col in np.argwhere(board.utilized):
        value_bit = bit(board.get(row, col))
        for peer_row, peer_col in board.get_peers(int(row), int(col)):
            if board.masks[peer_row, peer_col] & value_bit:
                return False
    return True


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    if puzzle.order != solution.order:
        return False

    clues = puzzle.values != 0
    if not np.array_equal(puzzle.values[clues], solution.values[clues]):
        return False

    return verify_complete(solution)
