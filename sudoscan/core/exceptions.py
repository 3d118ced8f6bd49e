"""Exceptions raised by the Sudoku engine."""


class SudokuError(Exception):
    """Base class for all errors raised by sudoscan."""


class FormatError(SudokuError, ValueError):
    """Input grid has the wrong length or contains an invalid symbol."""


class Unsolvable(SudokuError):
    """A cell or unit has no valid candidate left."""


class SearchAborted(SudokuError):
    """The search hit its configured depth or time limit."""
