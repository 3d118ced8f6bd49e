"""Benchmarking framework for measuring solve cost over puzzle sets."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..solvers import BaseSolver, ScanSolver

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from solving a single puzzle."""
    puzzle_id: int
    order: int
    clues: int
    solved: bool
    time_seconds: float
    memory_bytes: int
    propagation_passes: int
    scan_passes: int
    branches: int
    nodes_explored: int
    backtracks: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "order": self.order,
            "clues": self.clues,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "propagation_passes": self.propagation_passes,
            "scan_passes": self.scan_passes,
            "branches": self.branches,
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            **self.extra
        }


def load_puzzles(path: str, order: Optional[int] = None) -> List[SudokuBoard]:
    """
    Read puzzles from a text file, one puzzle string per line.

    Blank lines and lines starting with '#' are skipped.

    Raises:
        FormatError: A line is not a valid puzzle.
    """
    puzzles = []
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            puzzles.append(SudokuBoard.from_string(line, order))
    return puzzles


class Benchmark:
    """
    Runs a solver over a set of puzzles and collects cost metrics.

    The solver's own stats supply timing and memory; the solved board's
    counters supply propagation passes, scan passes and branch depth.
    """

    def __init__(
        self,
        puzzles: List[SudokuBoard],
        solver: Optional[BaseSolver] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: Puzzles to solve. They are not modified.
            solver: Solver to measure (default: a ScanSolver with no limits).
        """
        self.puzzles = puzzles
        self.solver = solver or ScanSolver()
        self.results: List[BenchmarkResult] = []

    @classmethod
    def from_file(cls, path: str, order: Optional[int] = None, **kwargs) -> Benchmark:
        """Create a benchmark over the puzzles in a file."""
        return cls(load_puzzles(path, order), **kwargs)

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Solve every puzzle once.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []

        for puzzle_id, puzzle in enumerate(tqdm(self.puzzles, desc="Benchmarking",
                                                disable=not show_progress)):
            self.results.append(self._run_single(puzzle, puzzle_id))

        return self.results

    def _run_single(self, puzzle: SudokuBoard, puzzle_id: int) -> BenchmarkResult:
        """Run the solver on a single puzzle."""
        solution, stats = self.solver.solve(puzzle)
        if not stats.solved:
            log.info("Puzzle %d not solved: %s", puzzle_id, stats.extra.get("error", "unknown"))

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            order=puzzle.order,
            clues=puzzle.count_filled(),
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            propagation_passes=stats.propagation_passes,
            scan_passes=stats.scan_passes,
            branches=stats.branches,
            nodes_explored=stats.nodes_explored,
            backtracks=stats.backtracks,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results),
            "algorithm": self.solver.name,
            "results_by_order": {}
        }

        for order in sorted(set(r.order for r in self.results)):
            order_results = [r for r in self.results if r.order == order]
            solved = [r for r in order_results if r.solved]
            times = [r.time_seconds for r in order_results]
            memory = [r.memory_bytes for r in order_results]

            summary["results_by_order"][order] = {
                "accuracy": len(solved) / len(order_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                "avg_propagation_passes": (
                    sum(r.propagation_passes for r in solved) / len(solved) if solved else 0
                ),
                "avg_branches": sum(r.branches for r in solved) / len(solved) if solved else 0,
                "total_forks": sum(r.nodes_explored for r in order_results),
                "total_solved": len(solved),
                "total_tested": len(order_results)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and the summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
