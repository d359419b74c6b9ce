import unittest

from cryptogram.core.exceptions import PuzzleConfigError, UnsolvablePuzzleError
from cryptogram.core.models import Cell, RowSolution
from cryptogram.data.layout import parse_layout
from cryptogram.data.vienna import VIENNA_SOLUTIONS, vienna_puzzle
from cryptogram.engine.grid import GridConfig, PuzzleGrid
from cryptogram.engine.solver import solve_assignment
from cryptogram.engine.validator import PuzzleValidator


class SolveAssignmentTests(unittest.TestCase):
    def test_vienna_assignment(self) -> None:
        grid = vienna_puzzle().build_grid()
        solution = solve_assignment(grid, VIENNA_SOLUTIONS)
        self.assertEqual(
            solution.assignment,
            {"1": "R", "2": "A", "3": "N", "4": "K", "5": "I", "6": "T", "7": "E", "8": "O", "9": "L"},
        )
        self.assertEqual(solution.independent[(0, 3)], "G")
        self.assertEqual(solution.independent[(3, 3)], "M")
        self.assertEqual(len(solution.independent), 10)

    def test_letter_for_each_cell_kind(self) -> None:
        grid = PuzzleGrid(parse_layout(["1 * _ 1"]))
        solution = solve_assignment(grid, [RowSolution(0, 0, "ABCA")])
        self.assertEqual([solution.letter_for(cell) for cell in grid], ["A", "B", "C", "A"])

    def test_group_with_two_letters_is_unsolvable(self) -> None:
        grid = PuzzleGrid(parse_layout(["1 1"]))
        with self.assertRaises(UnsolvablePuzzleError):
            solve_assignment(grid, [RowSolution(0, 0, "AB")])

    def test_distinct_groups_rule(self) -> None:
        grid = PuzzleGrid(parse_layout(["1 2"]))
        with self.assertRaises(UnsolvablePuzzleError):
            solve_assignment(grid, [RowSolution(0, 0, "AA")])
        relaxed = solve_assignment(grid, [RowSolution(0, 0, "AA")], distinct_groups=False)
        self.assertEqual(relaxed.assignment, {"1": "A", "2": "A"})

    def test_positions_without_cells_are_ignored(self) -> None:
        grid = PuzzleGrid(GridConfig(height=1, width=2, cells=[Cell(0, 0)]))
        solution = solve_assignment(grid, [RowSolution(0, 0, "ABC")])
        self.assertEqual(solution.independent, {(0, 0): "A"})

    def test_uncovered_group_has_no_letter(self) -> None:
        grid = PuzzleGrid(parse_layout(["1 _", "2 2"]))
        solution = solve_assignment(grid, [RowSolution(0, 0, "XY")])
        self.assertIsNone(solution.letter_for(grid.require(1, 0)))


class ValidatorTests(unittest.TestCase):
    def test_vienna_is_valid(self) -> None:
        config = vienna_puzzle()
        result = PuzzleValidator().validate(config.build_grid(), config.solutions)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_reports_span_leaving_grid(self) -> None:
        grid = PuzzleGrid(parse_layout(["_ _"]))
        result = PuzzleValidator().validate(grid, [RowSolution(0, 1, "AB")])
        self.assertFalse(result.ok)
        self.assertIn("leaves the grid", result.messages[0])

    def test_reports_absent_cell(self) -> None:
        grid = PuzzleGrid(parse_layout(["_ . _"]))
        result = PuzzleValidator().validate(grid, [RowSolution(0, 0, "ABC")])
        self.assertIn("absent cell", result.messages[0])

    def test_reports_overlap_conflict(self) -> None:
        grid = PuzzleGrid(parse_layout(["_ _ _"]))
        result = PuzzleValidator().validate(
            grid, [RowSolution(0, 0, "AB"), RowSolution(0, 1, "CD")]
        )
        self.assertFalse(result.ok)
        self.assertTrue(any("Conflicting" in message for message in result.messages))

    def test_reports_inconsistent_group(self) -> None:
        grid = PuzzleGrid(parse_layout(["1 1"]))
        result = PuzzleValidator().validate(grid, [RowSolution(0, 0, "AB")])
        self.assertFalse(result.ok)

    def test_ensure_valid_raises(self) -> None:
        grid = PuzzleGrid(parse_layout(["1 2"]))
        with self.assertRaises(PuzzleConfigError):
            PuzzleValidator().ensure_valid(grid, [RowSolution(0, 0, "AA")])
        PuzzleValidator(distinct_groups=False).ensure_valid(grid, [RowSolution(0, 0, "AA")])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
