"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .propagation import constrain_fix_scout, propagation_pass
from .scanner import scan_fix, scan_fix_unit
from .scan_solver import ScanSolver, Solved, Failed, SolveOutcome, solve

__all__ = [
    "BaseSolver",
    "SolverStats",
    "constrain_fix_scout",
    "propagation_pass",
    "scan_fix",
    "scan_fix_unit",
    "ScanSolver",
    "Solved",
    "Failed",
    "SolveOutcome",
    "solve",
]
