"""Benchmark module for measuring solver cost."""

from .benchmark import Benchmark, BenchmarkResult, load_puzzles
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "load_puzzles", "Visualizer"]
