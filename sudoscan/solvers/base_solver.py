"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import time
import tracemalloc

from ..core.board import SudokuBoard
from ..core.exceptions import SudokuError
from ..core.validator import verify_complete


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics, over every board visited
    backtracks: int = 0
    nodes_explored: int = 0

    # Board counters along the winning path
    propagation_passes: int = 0
    scan_passes: int = 0
    branches: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "propagation_passes": self.propagation_passes,
            "scan_passes": self.scan_passes,
            "branches": self.branches,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a copy of a puzzle with timing and memory tracking.

        Unsolvable puzzles and aborted searches do not raise; the error is
        recorded in stats.extra["error"] and None is returned.

        Args:
            board: The puzzle to solve. It is not modified.

        Returns:
            Tuple of (solution or None, stats).
        """
        self.reset_stats()

        tracemalloc.start()
        start_time = time.perf_counter()

        try:
            solution = self._solve(board.copy())
        except SudokuError as e:
            self.stats.extra["error"] = str(e)
            solution = None
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        if solution is not None:
            self.stats.solved = verify_complete(solution)
            counters = solution.counters
            self.stats.propagation_passes = counters.propagation_passes
            self.stats.scan_passes = counters.scan_passes
            self.stats.branches = counters.branches

        return solution, self.stats

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A copy of the puzzle to solve (can be modified).

        Returns:
            The solved board, or None if no solution found.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
