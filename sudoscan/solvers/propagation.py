"""Constraint propagation and naked-single detection over a board."""

from __future__ import annotations
from typing import Optional, Tuple

from ..core.board import SudokuBoard
from ..core.exceptions import Unsolvable


def constrain_fix_scout(board: SudokuBoard, row: int, col: int) -> int:
    """
    Propagate or inspect a single cell.

    A fixed cell whose value has not been used yet has that value removed
    from all of its peers. An unfixed cell left with a single possibility
    is fixed to it; it will be propagated on a later sweep.

    Returns:
        0 if the cell is fixed and already utilized, 1 if the cell was
        propagated or has just been fixed, otherwise the number of
        possibilities the unfixed cell still has.

    Raises:
        Unsolvable: The cell has no possibility left, or a peer holds
            the same fixed value.
    """
    if not board.is_empty(row, col):
        if board.utilized[row, col]:
            return 0
        board.eliminate_from_peers(row, col)
        return 1

    count = board.possibility_count(row, col)
    if count == 0:
        raise Unsolvable(f"No possibility left at ({row}, {col})")
    if count == 1:
        board.fix(row, col, board.possibilities(row, col)[0])
    return count


def propagation_pass(board: SudokuBoard) -> Tuple[int, Optional[Tuple[int, int]]]:
    """
    Run constrain_fix_scout over every cell, row by row.

    Returns:
        (usefulness, target): the number of cells that propagated or got
        fixed, and the unfixed cell with the fewest possibilities (first
        one wins ties), or None if no cell is undetermined.
    """
    usefulness = 0
    target = None
    fewest = board.size + 1

    for row in range(board.size):
        for col in range(board.size):
            result = constrain_fix_scout(board, row, col)
            if result == 1:
                usefulness += 1
            elif 1 < result < fewest:
                fewest = result
                target = (row, col)

    return usefulness, target
