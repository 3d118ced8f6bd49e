"""Command-line interface for the Sudoku solver."""

import argparse
import logging
import sys

from .core.board import SudokuBoard
from .core.exceptions import FormatError, Unsolvable, SearchAborted
from .core.validator import verify_complete, validate_solution
from .solvers import ScanSolver


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Propagation and scanning Sudoku solver for 9x9 and 16x16 grids",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a 9x9 puzzle and show solve counters
  python -m sudoscan.cli solve --puzzle "530070000600195000..." --verbose

  # Check a finished grid against its puzzle
  python -m sudoscan.cli verify --grid "534678912..." --puzzle "530070000..."

  # Benchmark every puzzle in a file
  python -m sudoscan.cli benchmark --file puzzles.txt --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    source = solve_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--puzzle", "-p", type=str,
        help="Puzzle string (81 or 256 chars, 0 for empty cells, a-g for 10-16)"
    )
    source.add_argument(
        "--file", "-f", type=str,
        help="File holding the puzzle string"
    )
    solve_parser.add_argument(
        "--order", "-k", type=int, default=None,
        help="Board order (3 for 9x9, 4 for 16x16; default: inferred)"
    )
    solve_parser.add_argument(
        "--max-depth", type=int, default=None,
        help="Maximum branch nesting depth (default: unlimited)"
    )
    solve_parser.add_argument(
        "--time-limit", type=float, default=None,
        help="Maximum solve time in seconds (default: unlimited)"
    )
    solve_parser.add_argument(
        "--plain", action="store_true",
        help="Print the grid without box rules"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show solve statistics and debug logging"
    )

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Check a completed grid")
    verify_parser.add_argument(
        "--grid", "-g", type=str, required=True,
        help="Completed grid string"
    )
    verify_parser.add_argument(
        "--puzzle", "-p", type=str, default=None,
        help="Original puzzle whose clues the grid must keep"
    )
    verify_parser.add_argument(
        "--order", "-k", type=int, default=None,
        help="Board order (default: inferred)"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Measure solve cost over a puzzle file")
    bench_parser.add_argument(
        "--file", "-f", type=str, required=True,
        help="Puzzle file, one puzzle string per line"
    )
    bench_parser.add_argument(
        "--order", "-k", type=int, default=None,
        help="Board order (default: inferred per line)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--time-limit", type=float, default=None,
        help="Maximum solve time per puzzle in seconds (default: unlimited)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "verify":
        cmd_verify(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _read_puzzle(args) -> str:
    if args.puzzle is not None:
        return args.puzzle.strip()
    with open(args.file) as f:
        return "".join(f.read().split())


def cmd_solve(args):
    """Handle the solve command."""
    try:
        board = SudokuBoard.from_string(_read_puzzle(args), args.order)
    except FormatError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"Error reading puzzle file: {e}")
        sys.exit(1)

    show = board.render if args.plain else board.__str__
    print("Input puzzle:")
    print(show())
    print()

    solver = ScanSolver(max_depth=args.max_depth, time_limit=args.time_limit)
    try:
        solver.solve_in_place(board)
    except Unsolvable:
        print("✗ Puzzle has no solution")
        sys.exit(1)
    except SearchAborted as e:
        print(f"✗ Search aborted: {e}")
        sys.exit(1)

    print("✓ Solved")
    print(show())
    if args.verbose:
        print()
        print(board.solve_report())
        print(f"Boards forked: {solver.stats.nodes_explored:,}")
        print(f"Failed branches: {solver.stats.backtracks:,}")


def cmd_verify(args):
    """Handle the verify command."""
    try:
        grid = SudokuBoard.from_string(args.grid.strip(), args.order)
        puzzle = None
        if args.puzzle is not None:
            puzzle = SudokuBoard.from_string(args.puzzle.strip(), args.order)
    except FormatError as e:
        print(f"Error parsing grid: {e}")
        sys.exit(1)

    if puzzle is not None:
        ok = validate_solution(puzzle, grid)
    else:
        ok = verify_complete(grid)

    if ok:
        print("✓ Grid is complete and valid")
    else:
        print("✗ Grid is not a valid solution")
        sys.exit(1)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    # Plotting libraries are only needed here
    from .benchmark import Benchmark
    from .benchmark.visualizer import Visualizer

    try:
        benchmark = Benchmark.from_file(
            args.file, args.order, solver=ScanSolver(time_limit=args.time_limit)
        )
    except (FormatError, OSError) as e:
        print(f"Error reading puzzles: {e}")
        sys.exit(1)

    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(benchmark.puzzles)}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for order, stats in summary["results_by_order"].items():
        size = order * order
        print(f"\n{size}x{size}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")
        print(f"  Avg Propagation Passes: {stats['avg_propagation_passes']:.1f}")
        print(f"  Avg Branch Depth: {stats['avg_branches']:.1f}")
        print(f"  Boards Forked: {stats['total_forks']:,}")

    benchmark.save_results(args.output)

    if not args.no_charts and results:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
