"""Sudoku board representation with per-cell possibility tracking."""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple, Optional, Set
import numpy as np

from .cell import (
    Cell, bit, full_mask, count_bits, mask_values,
    symbol_to_value, value_to_symbol,
)
from .exceptions import FormatError, Unsolvable


# Grid length -> order, for orders whose symbols fit in 0-9 plus a-z
ORDERS_BY_LENGTH = {order ** 4: order for order in (2, 3, 4, 5)}

Unit = Tuple[np.ndarray, np.ndarray]


@dataclass(frozen=True)
class SolveCounters:
    """Cost counters carried by a board through a solve."""
    propagation_passes: int = 0
    scan_passes: int = 0
    branches: int = 0


@lru_cache(maxsize=None)
def unit_indices(order: int) -> Tuple[Unit, ...]:
    """
    Index arrays for every unit of a board of the given order.

    Rows and columns are interleaved (row 0, column 0, row 1, ...) and
    followed by the blocks in row-major block order. Each unit is a
    (rows, cols) pair usable for fancy indexing.
    """
    size = order * order
    line = np.arange(size)
    units: List[Unit] = []
    for i in range(size):
        units.append((np.full(size, i), line))
        units.append((line, np.full(size, i)))
    for box_row in range(0, size, order):
        for box_col in range(0, size, order):
            rows, cols = np.divmod(line, order)
            units.append((rows + box_row, cols + box_col))
    return tuple(units)


def block_view(grid: np.ndarray, order: int) -> np.ndarray:
    """Rearrange a grid so that each row holds one block, row-major."""
    size = order * order
    return grid.reshape(order, order, order, order).transpose(0, 2, 1, 3).reshape(size, size)


class SudokuBoard:
    """
    A Sudoku board of order K: K² x K² cells in K x K blocks.

    Each cell carries a value (0 when unset), a bit set of the symbols it
    may still take, and a flag recording whether its value has already
    been eliminated from its peers. The board also carries the solve
    counters, which are copied along with the cells on fork and absorb.
    """

    def __init__(self, order: int = 3, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            order: Block side length (3 for 9x9, 4 for 16x16).
            grid: Optional initial values, 0 for blank. If None, creates
                  an empty board.
        """
        if order not in ORDERS_BY_LENGTH.values():
            raise ValueError(f"Order must be between 2 and 5, got {order}")

        self.order = order
        self.box_size = order
        self.size = order * order

        if grid is not None:
            grid = np.asarray(grid)
            if not np.issubdtype(grid.dtype, np.integer):
                raise FormatError(f"Grid values must be integers, got dtype {grid.dtype}")
            if grid.shape != (self.size, self.size):
                raise FormatError(f"Grid shape must be ({self.size}, {self.size}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > self.size:
                raise FormatError(f"Values must be 0-{self.size}")
            self.values = grid.astype(np.int32)
        else:
            self.values = np.zeros((self.size, self.size), dtype=np.int32)

        self.masks = np.where(
            self.values == 0, full_mask(self.size), np.left_shift(1, self.values)
        ).astype(np.int64)
        self.utilized = np.zeros((self.size, self.size), dtype=bool)

        self._propagation_passes = 0
        self._scan_passes = 0
        self._branches = 0

    # Copying

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board, counters included."""
        new_board = SudokuBoard(self.order)
        new_board.absorb(self)
        return new_board

    def fork(self) -> SudokuBoard:
        """Copy the board for a speculative branch, counting the branch."""
        clone = self.copy()
        clone._branches += 1
        return clone

    def absorb(self, other: SudokuBoard) -> None:
        """Overwrite this board's cells and counters with another's."""
        if other.order != self.order:
            raise ValueError(f"Cannot absorb an order-{other.order} board into order {self.order}")
        self.values = other.values.copy()
        self.masks = other.masks.copy()
        self.utilized = other.utilized.copy()
        self._propagation_passes = other._propagation_passes
        self._scan_passes = other._scan_passes
        self._branches = other._branches

    # Counters

    @property
    def counters(self) -> SolveCounters:
        return SolveCounters(self._propagation_passes, self._scan_passes, self._branches)

    def record_pass(self) -> None:
        """Count one propagation sweep and the scan pass that follows it."""
        self._propagation_passes += 1
        self._scan_passes += 1

    def solve_report(self) -> str:
        """Summarise the cost of the solve that produced this board."""
        counters = self.counters
        return '\n'.join([
            f"Extra boards (branches): {counters.branches}",
            f"Propagation passes: {counters.propagation_passes}",
            f"Scan passes: {counters.scan_passes}",
        ])

    # Cell access

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.values[row, col])

    def is_empty(self, row: int, col: int) -> bool:
        return self.values[row, col] == 0

    def cell(self, row: int, col: int) -> Cell:
        """Snapshot of the cell at (row, col)."""
        return Cell(
            value=self.get(row, col),
            possibilities=frozenset(self.possibilities(row, col)),
            utilized=bool(self.utilized[row, col]),
        )

    def possibilities(self, row: int, col: int) -> List[int]:
        """Symbols still possible at (row, col), in increasing order."""
        return mask_values(self.masks[row, col], self.size)

    def possibility_count(self, row: int, col: int) -> int:
        return count_bits(self.masks[row, col])

    def fix(self, row: int, col: int, value: int) -> None:
        """Set a cell's value and prune its possibilities to that value."""
        self.values[row, col] = value
        self.masks[row, col] = bit(value)

    def eliminate_from_peers(self, row: int, col: int) -> None:
        """
        Remove a fixed cell's value from every peer and mark it utilized.

        Raises:
            Unsolvable: A peer already holds the same value.
        """
        value = self.get(row, col)
        k = self.box_size
        box_row = (row // k) * k
        box_col = (col // k) * k
        box = (slice(box_row, box_row + k), slice(box_col, box_col + k))

        if ((self.values[row, :] == value).sum() > 1
                or (self.values[:, col] == value).sum() > 1
                or (self.values[box] == value).sum() > 1):
            raise Unsolvable(f"Value {value} at ({row}, {col}) is repeated in a peer")

        own = self.masks[row, col]
        clear = ~bit(value)
        self.masks[row, :] &= clear
        self.masks[:, col] &= clear
        self.masks[box] &= clear
        self.masks[row, col] = own
        self.utilized[row, col] = True

    # Units and peers

    def units(self) -> Tuple[Unit, ...]:
        """All rows, columns and blocks, in scanning order."""
        return unit_indices(self.order)

    def get_peers(self, row: int, col: int) -> Set[Tuple[int, int]]:
        """
        Get all peer cell positions (those in same row, column, or box).

        Returns:
            Set of (r, c) tuples, excluding (row, col) itself.
        """
        peers = set()
        for i in range(self.size):
            peers.add((row, i))
            peers.add((i, col))

        box_row = (row // self.box_size) * self.box_size
        box_col = (col // self.box_size) * self.box_size
        for i in range(self.box_size):
            for j in range(self.box_size):
                peers.add((box_row + i, box_col + j))

        peers.remove((row, col))
        return peers

    # Whole-board queries

    def count_empty(self) -> int:
        return int(np.sum(self.values == 0))

    def count_filled(self) -> int:
        return int(np.sum(self.values != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check that no unit holds the same value twice.
        Blank cells are ignored, so partial boards can be valid.
        """
        for view in (self.values, self.values.T, block_view(self.values, self.order)):
            for unit in view:
                non_zero = unit[unit != 0]
                if len(non_zero) != len(set(non_zero.tolist())):
                    return False
        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    # Conversion

    def to_string(self) -> str:
        """Row-major string, '0' for blanks and a-g for 10-16."""
        return ''.join(value_to_symbol(int(v)) for v in self.values.flat)

    @classmethod
    def from_string(cls, s: str, order: Optional[int] = None) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: Row-major string of order**4 symbols. 0 or . for empty,
               1-9 for values, a-g for 10-16.
            order: Board order. Inferred from the length when omitted.

        Raises:
            FormatError: Wrong length or a symbol outside the alphabet.
        """
        if order is None:
            order = ORDERS_BY_LENGTH.get(len(s))
            if order is None:
                raise FormatError(f"Cannot infer board order from length {len(s)}")
        elif order not in ORDERS_BY_LENGTH.values():
            raise FormatError(f"Unsupported board order {order}")

        size = order * order
        if len(s) != size * size:
            raise FormatError(f"String length must be {size * size}, got {len(s)}")

        grid = np.zeros(size * size, dtype=np.int32)
        for idx, c in enumerate(s):
            value = symbol_to_value(c)
            if value < 0 or value > size:
                raise FormatError(f"Invalid symbol {c!r} at position {idx}")
            grid[idx] = value

        return cls(order, grid.reshape(size, size))

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuBoard:
        """Create a board from a 2D list."""
        arr = np.array(data)
        order = int(round(np.sqrt(arr.shape[0])))
        if order * order != arr.shape[0]:
            raise FormatError(f"Row count must be a perfect square, got {arr.shape[0]}")
        if order not in ORDERS_BY_LENGTH.values():
            raise FormatError(f"Unsupported board of {arr.shape[0]} rows")
        return cls(order, arr)

    def render(self) -> str:
        """Plain grid: values separated by spaces, blocks by an extra space."""
        lines = []
        for row in range(self.size):
            line = ''
            for col in range(self.size):
                if col % self.box_size == 0:
                    line += ' '
                value = self.get(row, col)
                line += '  ' if value == 0 else value_to_symbol(value) + ' '
            lines.append(line)
        return '\n'.join(lines)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (self.box_size * 2 + 1)) + '+') * self.box_size

        for i in range(self.size):
            if i % self.box_size == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                val = self.get(i, j)
                row_str += ' .' if val == 0 else f' {value_to_symbol(val)}'
                if (j + 1) % self.box_size == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(order={self.order}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return self.order == other.order and np.array_equal(self.values, other.values)

    def __hash__(self) -> int:
        return hash(self.to_string())
