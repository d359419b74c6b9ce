import unittest

from cryptogram.core.constants import Bounds, CellKind, Direction
from cryptogram.core.exceptions import PuzzleConfigError, UnknownCellError
from cryptogram.core.models import Cell, RowSolution
from cryptogram.engine.grid import GridConfig, PuzzleGrid


class CellModelTests(unittest.TestCase):
    def test_kinds(self) -> None:
        self.assertEqual(Cell(0, 0).kind, CellKind.BLANK)
        self.assertEqual(Cell(0, 0, "accent").kind, CellKind.ACCENT)
        self.assertEqual(Cell(0, 0, "7").kind, CellKind.GROUP)
        self.assertTrue(Cell(0, 0, "7").is_grouped)
        self.assertFalse(Cell(0, 0, "accent").is_grouped)

    def test_group_token_is_stored_as_text(self) -> None:
        cell = Cell(0, 0, 3)
        self.assertEqual(cell.group_id, "3")
        self.assertEqual(cell, Cell(0, 0, "3"))
        self.assertTrue(cell.is_grouped)

    def test_row_solution_uppercases_and_lists_positions(self) -> None:
        solution = RowSolution(2, 3, "bier")
        self.assertEqual(solution.answer, "BIER")
        self.assertEqual(solution.length, 4)
        self.assertEqual(solution.positions, [(2, 3), (2, 4), (2, 5), (2, 6)])


class GridConstructionTests(unittest.TestCase):
    def test_cells_are_indexed_in_reading_order(self) -> None:
        grid = PuzzleGrid(GridConfig(height=2, width=2, cells=[Cell(1, 0, "1"), Cell(0, 1, "1")]))
        self.assertEqual([cell.position for cell in grid], [(0, 1), (1, 0)])
        self.assertEqual([cell.position for cell in grid.group_members("1")], [(0, 1), (1, 0)])
        self.assertEqual(len(grid), 2)
        self.assertIn((1, 0), grid)

    def test_numeric_group_tokens_become_strings(self) -> None:
        grid = PuzzleGrid(GridConfig(height=1, width=2, cells=[Cell(0, 0, 3), Cell(0, 1, 3)]))
        self.assertEqual(grid.group_ids, ["3"])
        self.assertEqual(grid.require(0, 1).group_id, "3")

    def test_blank_and_accent_cells_have_no_group(self) -> None:
        grid = PuzzleGrid(GridConfig(height=1, width=2, cells=[Cell(0, 0), Cell(0, 1, "accent")]))
        self.assertEqual(grid.group_ids, [])
        self.assertEqual(grid.group_members("blank"), ())

    def test_cell_outside_bounds_rejected(self) -> None:
        with self.assertRaises(PuzzleConfigError):
            PuzzleGrid(GridConfig(height=1, width=1, cells=[Cell(0, 1)]))

    def test_duplicate_cell_rejected(self) -> None:
        with self.assertRaises(PuzzleConfigError):
            PuzzleGrid(GridConfig(height=1, width=1, cells=[Cell(0, 0), Cell(0, 0, "1")]))

    def test_non_positive_size_rejected(self) -> None:
        with self.assertRaises(PuzzleConfigError):
            PuzzleGrid(GridConfig(height=0, width=3))

    def test_require_missing_cell(self) -> None:
        grid = PuzzleGrid(GridConfig(height=1, width=2, cells=[Cell(0, 0)]))
        self.assertIsNone(grid.cell(0, 1))
        with self.assertRaises(UnknownCellError):
            grid.require(0, 1)


class BoundsTests(unittest.TestCase):
    def test_walk_stops_at_the_edge(self) -> None:
        bounds = Bounds(rows=3, cols=4)
        self.assertEqual(list(bounds.walk(1, 1, Direction.RIGHT)), [(1, 2), (1, 3)])
        self.assertEqual(list(bounds.walk(1, 1, Direction.UP)), [(0, 1)])
        self.assertEqual(list(bounds.walk(2, 0, Direction.DOWN)), [])
        self.assertEqual(list(bounds.walk(0, 3, Direction.LEFT)), [(0, 2), (0, 1), (0, 0)])

    def test_contains(self) -> None:
        bounds = Bounds(rows=2, cols=2)
        self.assertTrue(bounds.contains(1, 1))
        self.assertFalse(bounds.contains(2, 0))
        self.assertFalse(bounds.contains(0, -1))


class GridNavigationTests(unittest.TestCase):
    def setUp(self) -> None:
        # . A . B
        # C . . D
        cells = [Cell(0, 1), Cell(0, 3), Cell(1, 0), Cell(1, 3)]
        self.grid = PuzzleGrid(GridConfig(height=2, width=4, cells=cells))

    def test_next_in_row_skips_gaps(self) -> None:
        self.assertEqual(self.grid.next_in_row(self.grid.require(0, 1)), self.grid.require(0, 3))
        self.assertIsNone(self.grid.next_in_row(self.grid.require(0, 3)))

    def test_step_in_every_direction(self) -> None:
        d = self.grid.require(1, 3)
        self.assertEqual(self.grid.step(d, Direction.UP), self.grid.require(0, 3))
        self.assertEqual(self.grid.step(d, Direction.LEFT), self.grid.require(1, 0))
        self.assertIsNone(self.grid.step(d, Direction.DOWN))
        self.assertIsNone(self.grid.step(d, Direction.RIGHT))

    def test_row_cells(self) -> None:
        self.assertEqual([cell.col for cell in self.grid.row_cells(1)], [0, 3])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
