"""Hidden-single scanning over rows, columns and blocks."""

from __future__ import annotations
import numpy as np

from ..core.board import SudokuBoard, Unit
from ..core.cell import bit
from ..core.exceptions import Unsolvable


def scan_fix_unit(board: SudokuBoard, unit: Unit, value: int) -> bool:
    """
    Place a value in a unit if exactly one cell can still hold it.

    Args:
        board: The board to scan.
        unit: (rows, cols) index arrays of the unit.
        value: Symbol to look for.

    Returns:
        True if a cell was fixed.

    Raises:
        Unsolvable: The value is not placed in the unit and no cell can
            hold it.
    """
    rows, cols = unit
    if (board.values[rows, cols] == value).any():
        return False

    candidates = np.flatnonzero(board.masks[rows, cols] & bit(value))
    if len(candidates) == 0:
        raise Unsolvable(f"No cell left for {value} in unit starting at ({rows[0]}, {cols[0]})")
    if len(candidates) > 1:
        return False

    position = candidates[0]
    board.fix(int(rows[position]), int(cols[position]), value)
    return True


def scan_fix(board: SudokuBoard) -> int:
    """
    Scan every unit for every symbol and fix forced placements.

    Returns:
        Number of cells fixed in this pass.
    """
    fixed = 0
    units = board.units()
    for value in range(1, board.size + 1):
        for unit in units:
            if scan_fix_unit(board, unit, value):
                fixed += 1
    return fixed
