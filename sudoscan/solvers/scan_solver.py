"""Propagation and scanning solver with backtracking on board copies."""

from __future__ import annotations
import logging
import time
from typing import NamedTuple, Optional, Tuple, Union

from .base_solver import BaseSolver
from .propagation import propagation_pass
from .scanner import scan_fix
from ..core.board import SudokuBoard
from ..core.exceptions import Unsolvable, SearchAborted
from ..core.validator import verify_complete

log = logging.getLogger(__name__)


class Solved(NamedTuple):
    """The board reached a complete, valid state."""
    board: SudokuBoard


class Failed(NamedTuple):
    """The board led to a contradiction."""
    reason: str


SolveOutcome = Union[Solved, Failed]


class ScanSolver(BaseSolver):
    """
    Deterministic solver that only guesses when logic stalls.

    Each iteration sweeps the board once with constrain_fix_scout
    (propagating fixed values and fixing naked singles) and then scans
    every row, column and block for hidden singles. When neither step
    makes progress on an incomplete board, the undetermined cell with the
    fewest possibilities is branched on: each candidate is tried in
    increasing order on a forked copy of the board, and the first copy
    that solves is absorbed back.

    Counters on the board follow the winning path only; the solver's
    stats count every fork and every failed candidate.
    """

    name = "Propagate+Scan"

    def __init__(self, max_depth: Optional[int] = None, time_limit: Optional[float] = None):
        """
        Initialize the solver.

        Args:
            max_depth: Maximum number of nested branches, None for no limit.
            time_limit: Maximum wall time in seconds, None for no limit.
        """
        super().__init__()
        self.max_depth = max_depth
        self.time_limit = time_limit
        self._deadline: Optional[float] = None

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        return self.solve_in_place(board)

    def solve_in_place(self, board: SudokuBoard) -> SudokuBoard:
        """
        Solve a board, mutating it into its solved state.

        A board that already verifies complete is returned untouched.

        Raises:
            Unsolvable: The puzzle has no solution.
            SearchAborted: The depth or time limit was reached.
        """
        if verify_complete(board):
            log.debug("Board is already complete")
            return board

        self.reset_stats()
        self._deadline = None
        if self.time_limit is not None:
            self._deadline = time.perf_counter() + self.time_limit

        outcome = self.search(board)
        if isinstance(outcome, Failed):
            log.info("Puzzle is unsolvable: %s", outcome.reason)
            raise Unsolvable(outcome.reason)

        log.info("Solved after %d propagation passes with %d extra boards",
                 board.counters.propagation_passes, board.counters.branches)
        return board

    def search(self, board: SudokuBoard, depth: int = 0) -> SolveOutcome:
        """
        Run the solve loop on a board, branching when needed.

        Contradictions are returned as Failed rather than raised, so
        callers can move on to their next candidate.
        """
        try:
            while True:
                self._check_clock()
                usefulness, target = propagation_pass(board)
                board.record_pass()
                self.stats.iterations += 1

                if scan_fix(board) == 0 and usefulness == 0:
                    if verify_complete(board):
                        return Solved(board)
                    return self._branch(board, target, depth)
        except Unsolvable as e:
            return Failed(str(e))

    def _branch(
        self,
        board: SudokuBoard,
        target: Optional[Tuple[int, int]],
        depth: int
    ) -> SolveOutcome:
        """Try each candidate of the target cell on its own board copy."""
        if target is None:
            return Failed("No undetermined cell to branch on")
        if self.max_depth is not None and depth >= self.max_depth:
            raise SearchAborted(f"Branch depth limit of {self.max_depth} reached")

        row, col = target
        for value in board.possibilities(row, col):
            self._check_clock()
            clone = board.fork()
            clone.fix(row, col, value)
            self.stats.nodes_explored += 1
            log.debug("Depth %d: trying %d at (%d, %d)", depth + 1, value, row, col)

            outcome = self.search(clone, depth + 1)
            if isinstance(outcome, Solved):
                board.absorb(outcome.board)
                return Solved(board)

            log.debug("Depth %d: %d at (%d, %d) failed: %s",
                      depth + 1, value, row, col, outcome.reason)
            self.stats.backtracks += 1

        return Failed(f"Every candidate at ({row}, {col}) failed")

    def _check_clock(self) -> None:
        if self._deadline is not None and time.perf_counter() >= self._deadline:
            raise SearchAborted(f"Time limit of {self.time_limit}s exceeded")


def solve(board: SudokuBoard, **kwargs) -> SudokuBoard:
    """Solve a board in place with a fresh ScanSolver."""
    return ScanSolver(**kwargs).solve_in_place(board)
