"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for solve-cost benchmark results.

    Plots timing and the board counters (propagation passes, branches,
    forks) per puzzle.
    """

    COLORS = {
        "propagation_passes": "#3498db",  # Blue
        "branches": "#e74c3c",            # Red
        "nodes_explored": "#f39c12",      # Orange
        "time": "#2ecc71",                # Green
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_per_puzzle(),
            self.plot_counters(),
            self.plot_branches_vs_time(),
            self.plot_time_distribution(),
        ]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_per_puzzle(self) -> str:
        """Create bar chart of solve time for each puzzle."""
        fig, ax = plt.subplots(figsize=(10, 6))

        ids = [r.puzzle_id for r in self.results]
        times = [r.time_seconds for r in self.results]
        colors = [self.COLORS["time"] if r.solved else "#95a5a6" for r in self.results]

        ax.bar([str(i) for i in ids], times, color=colors, edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time by Puzzle', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_per_puzzle.png")

    def plot_counters(self) -> str:
        """Create grouped bar chart of the solve counters for each puzzle."""
        fig, ax = plt.subplots(figsize=(12, 6))

        metrics = ["propagation_passes", "branches", "nodes_explored"]
        labels = {"propagation_passes": "Propagation passes",
                  "branches": "Branch depth",
                  "nodes_explored": "Boards forked"}
        x = np.arange(len(self.results))
        width = 0.8 / len(metrics)

        for i, metric in enumerate(metrics):
            values = [max(getattr(r, metric), 1) for r in self.results]
            offset = (i - len(metrics) / 2 + 0.5) * width
            ax.bar(x + offset, values, width,
                   label=labels[metric],
                   color=self.COLORS[metric],
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Count (Log Scale)', fontsize=12)
        ax.set_title('Solve Counters by Puzzle', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([str(r.puzzle_id) for r in self.results])
        ax.legend(bbox_to_anchor=(1.05, 1), loc='upper left')

        # Forks can exceed passes by orders of magnitude
        ax.set_yscale('log')

        return self._save("solve_counters.png")

    def plot_branches_vs_time(self) -> str:
        """Scatter plot of boards forked against solve time."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sns.scatterplot(
            x=[r.nodes_explored for r in self.results],
            y=[r.time_seconds for r in self.results],
            hue=[f"{r.order ** 2}x{r.order ** 2}" for r in self.results],
            ax=ax,
        )

        ax.set_xlabel('Boards forked', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Search Effort vs Solve Time', fontsize=14, fontweight='bold')

        return self._save("branches_vs_time.png")

    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution per board size."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sns.boxplot(
            x=[f"{r.order ** 2}x{r.order ** 2}" for r in self.results],
            y=[r.time_seconds for r in self.results],
            ax=ax,
        )

        ax.set_xlabel('Board size', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution', fontsize=14, fontweight='bold')

        return self._save("time_distribution.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Puzzle | Size | Clues | Solved | Time | Propagation passes | Branch depth | Forks |",
            "|--------|------|-------|--------|------|--------------------|--------------|-------|"
        ]

        for r in self.results:
            size = r.order ** 2
            lines.append(
                f"| {r.puzzle_id} | {size}x{size} | {r.clues} | {'yes' if r.solved else 'no'} "
                f"| {r.time_seconds:.4f}s | {r.propagation_passes:,} | {r.branches:,} "
                f"| {r.nodes_explored:,} |"
            )

        if self.results:
            solved = sum(1 for r in self.results if r.solved)
            avg_time = np.mean([r.time_seconds for r in self.results])
            lines.append("")
            lines.append(f"Solved {solved}/{len(self.results)}, average time {avg_time:.4f}s")

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
