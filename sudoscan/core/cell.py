"""Possibility bit sets and the per-cell view of a board."""

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, List


def bit(value: int) -> int:
    """Bit representing a single symbol."""
    return 1 << value


def full_mask(size: int) -> int:
    """Bit set holding every symbol 1..size."""
    return ((1 << (size + 1)) - 1) & ~1


def count_bits(mask: int) -> int:
    """Number of symbols left in a bit set."""
    return bin(int(mask)).count("1")


def mask_values(mask: int, size: int) -> List[int]:
    """Symbols present in a bit set, in increasing order."""
    mask = int(mask)
    return [n for n in range(1, size + 1) if mask >> n & 1]


def symbol_to_value(char: str) -> int:
    """
    Convert a grid character to its value.

    '0' and '.' are blanks, digits map to themselves and letters map to
    10 and up ('a' = 10). Returns -1 for anything else.
    """
    if char in ('0', '.'):
        return 0
    # ASCII only; str.isdigit() is also true for '²' and non-Latin digits
    if '1' <= char <= '9':
        return ord(char) - ord('0')
    lower = char.lower()
    if len(lower) == 1 and 'a' <= lower <= 'z':
        return ord(lower) - ord('a') + 10
    return -1


def value_to_symbol(value: int) -> str:
    """Convert a value to its grid character, '0' for blank."""
    if value <= 9:
        return str(value)
    return chr(ord('a') + value - 10)


@dataclass(frozen=True)
class Cell:
    """
    Snapshot of one cell.

    Attributes:
        value: Fixed value, 0 if unset.
        possibilities: Symbols not yet ruled out for this cell.
        utilized: True once the fixed value has been eliminated from peers.
    """
    value: int
    possibilities: FrozenSet[int]
    utilized: bool = False

    @property
    def is_fixed(self) -> bool:
        return self.value != 0
