"""Unit tests for the propagation and scanning solver."""

import tracemalloc

import pytest
from sudoscan.core.board import SudokuBoard, SolveCounters
from sudoscan.core.cell import value_to_symbol
from sudoscan.core.exceptions import Unsolvable, SearchAborted
from sudoscan.core.validator import verify_complete, validate_solution
from sudoscan.solvers import ScanSolver, Solved, Failed, solve


# A known solvable puzzle (medium difficulty)
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

# The solution to the test puzzle
TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

HARD_PUZZLE = "000000000000003085001020000000507000004000100090000000500009007070040000300000008"


def patterned_16x16(blank) -> str:
    """Build a 16x16 puzzle from a valid pattern grid, blanking cells where blank(r, c)."""
    chars = []
    for r in range(16):
        for c in range(16):
            value = (4 * (r % 4) + r // 4 + c) % 16 + 1
            chars.append("0" if blank(r, c) else value_to_symbol(value))
    return "".join(chars)


class TestScanSolver:
    """Tests for ScanSolver.solve_in_place."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        ScanSolver().solve_in_place(board)

        assert verify_complete(board)
        assert board.to_string() == TEST_SOLUTION

    def test_easy_puzzle_needs_no_branching(self):
        """Test that propagation and scanning alone finish an easy puzzle."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solver = ScanSolver()
        solver.solve_in_place(board)

        assert board.counters.branches == 0
        assert solver.stats.nodes_explored == 0
        assert board.counters.propagation_passes == board.counters.scan_passes
        assert board.counters.propagation_passes == solver.stats.iterations

    def test_empty_board_counters(self):
        """Test the cost of solving the empty 9x9 board."""
        board = SudokuBoard()
        solver = ScanSolver()
        solver.solve_in_place(board)

        assert verify_complete(board)
        assert board.counters == SolveCounters(
            propagation_passes=114, scan_passes=114, branches=47
        )
        # Failed candidates fork boards too
        assert solver.stats.nodes_explored >= 47
        assert solver.stats.nodes_explored == 47 + solver.stats.backtracks

    def test_solve_twice_is_noop(self):
        """Test that solving a solved board changes nothing."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solver = ScanSolver()
        solver.solve_in_place(board)
        values = board.values.copy()
        counters = board.counters

        solver.solve_in_place(board)

        assert (board.values == values).all()
        assert board.counters == counters
        assert verify_complete(board)

    def test_hard_puzzle(self):
        """Test a puzzle that needs branching."""
        puzzle = SudokuBoard.from_string(HARD_PUZZLE)
        board = puzzle.copy()
        solver = ScanSolver()
        solver.solve_in_place(board)

        assert validate_solution(puzzle, board)
        assert board.counters.branches > 0
        assert solver.stats.nodes_explored >= board.counters.branches

    def test_duplicate_in_row_is_unsolvable(self):
        """Test that two 5s in a row fail without branching."""
        board = SudokuBoard.from_string("55" + TEST_PUZZLE[2:])
        solver = ScanSolver()

        with pytest.raises(Unsolvable):
            solver.solve_in_place(board)
        assert solver.stats.nodes_explored == 0
        assert board.counters.branches == 0

    def test_duplicate_in_block_is_unsolvable(self):
        """Test that two 5s in one block fail without branching."""
        board = SudokuBoard.from_string("5" + "0" * 9 + "5" + "0" * 70)
        solver = ScanSolver()

        with pytest.raises(Unsolvable):
            solver.solve_in_place(board)
        assert solver.stats.nodes_explored == 0

    def test_forced_contradiction_is_unsolvable(self):
        """Test a cell whose only candidate clashes with its column."""
        board = SudokuBoard.from_string("123456780" + "000000009" + "0" * 63)
        solver = ScanSolver()

        with pytest.raises(Unsolvable):
            solver.solve_in_place(board)
        assert solver.stats.nodes_explored == 0

    def test_search_returns_failed(self):
        """Test that search reports contradictions as a Failed result."""
        board = SudokuBoard.from_string("55" + "0" * 79)
        outcome = ScanSolver().search(board)

        assert isinstance(outcome, Failed)
        assert "5" in outcome.reason

    def test_search_returns_solved(self):
        """Test that search returns the solved board."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        outcome = ScanSolver().search(board)

        assert isinstance(outcome, Solved)
        assert outcome.board is board

    def test_depth_limit(self):
        """Test that the depth limit aborts a search that must branch."""
        board = SudokuBoard()
        with pytest.raises(SearchAborted):
            ScanSolver(max_depth=0).solve_in_place(board)

    def test_depth_limit_not_hit_without_branching(self):
        """Test that an easy puzzle solves under a zero depth limit."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        ScanSolver(max_depth=0).solve_in_place(board)
        assert board.to_string() == TEST_SOLUTION

    def test_time_limit(self):
        """Test that an exhausted time budget aborts the search."""
        board = SudokuBoard()
        with pytest.raises(SearchAborted):
            ScanSolver(time_limit=0).solve_in_place(board)

    def test_solve_helper(self):
        """Test the module-level solve function."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        assert solve(board) is board
        assert board.is_solved()


class TestSixteenBySixteen:
    """Tests for 16x16 boards."""

    def test_letters_parse_and_solve(self):
        """Test a 256-character puzzle using a-g solves to a valid grid."""
        text = patterned_16x16(lambda r, c: (r * 5 + c * 3) % 7 < 3)
        assert len(text) == 256
        assert "g" in text

        puzzle = SudokuBoard.from_string(text)
        assert puzzle.order == 4

        board = puzzle.copy()
        ScanSolver().solve_in_place(board)

        assert verify_complete(board)
        assert validate_solution(puzzle, board)

    def test_one_blank_per_row(self):
        """Test that a nearly full grid is finished by propagation alone."""
        full = patterned_16x16(lambda r, c: False)
        text = patterned_16x16(lambda r, c: c == r)
        board = SudokuBoard.from_string(text)
        ScanSolver().solve_in_place(board)

        assert board.to_string() == full
        assert board.counters.branches == 0

    def test_duplicate_letter_is_unsolvable(self):
        """Test that a repeated 16 in a row is caught."""
        board = SudokuBoard.from_string("gg" + "0" * 254)
        with pytest.raises(Unsolvable):
            ScanSolver().solve_in_place(board)


class TestSolverStats:
    """Tests for BaseSolver.solve bookkeeping."""

    def test_stats_collected(self):
        """Test that stats mirror the solved board's counters."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solver = ScanSolver()

        solution, stats = solver.solve(board)

        assert stats.solved
        assert stats.time_seconds > 0
        assert stats.iterations > 0
        assert stats.propagation_passes == solution.counters.propagation_passes
        assert stats.branches == solution.counters.branches
        assert stats.to_dict()["algorithm"] == ScanSolver.name

    def test_original_board_untouched(self):
        """Test that solve works on a copy."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solution, stats = ScanSolver().solve(board)

        assert board.to_string() == TEST_PUZZLE
        assert solution.to_string() == TEST_SOLUTION

    def test_unsolvable_recorded(self):
        """Test that an unsolvable puzzle is reported in stats, not raised."""
        board = SudokuBoard.from_string("55" + TEST_PUZZLE[2:])
        solution, stats = ScanSolver().solve(board)

        assert solution is None
        assert not stats.solved
        assert "error" in stats.extra

    def test_memory_tracing_stops_on_unexpected_error(self):
        """Test that tracemalloc is stopped when a solve raises."""

        class BrokenSolver(ScanSolver):
            def _solve(self, board):
                raise RuntimeError("boom")

        solver = BrokenSolver()
        with pytest.raises(RuntimeError):
            solver.solve(SudokuBoard.from_string(TEST_PUZZLE))

        assert not tracemalloc.is_tracing()
        assert solver.stats.time_seconds > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
