"""Grid representation and navigation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import Bounds, Direction
from ..core.exceptions import PuzzleConfigError, UnknownCellError
from ..core.models import Cell
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Static layout of a puzzle grid."""

    height: int
    width: int
    cells: List[Cell] = field(default_factory=list)

    def bounds(self) -> Bounds:
        return Bounds(rows=self.height, cols=self.width)


class PuzzleGrid:
    """Immutable cell layout with group and neighbourhood lookups.

    Positions inside the bounds that hold no cell are structurally absent:
    they accept no letters and are skipped by navigation.
    """

    def __init__(self, config: GridConfig) -> None:
        if config.height <= 0 or config.width <= 0:
            raise PuzzleConfigError(
                f"Grid dimensions must be positive, got {config.height}x{config.width}"
            )
        self.config = config
        self.bounds = config.bounds()
        self._cells: Dict[Tuple[int, int], Cell] = {}
        self._groups: Dict[str, List[Cell]] = {}

        for cell in sorted(config.cells, key=lambda item: (item.row, item.col)):
            if not self.bounds.contains(cell.row, cell.col):
                raise PuzzleConfigError(f"Cell outside grid bounds: {cell.position}")
            if cell.position in self._cells:
                raise PuzzleConfigError(f"Duplicate cell at {cell.position}")
            self._cells[cell.position] = cell
            if cell.is_grouped:
                self._groups.setdefault(cell.group_id, []).append(cell)

        LOGGER.debug(
            "Grid %sx%s with %s letter cells in %s groups",
            self.bounds.rows,
            self.bounds.cols,
            len(self._cells),
            len(self._groups),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())

    def __contains__(self, position: object) -> bool:
        return position in self._cells

    def cell(self, row: int, col: int) -> Optional[Cell]:
        return self._cells.get((row, col))

    def require(self, row: int, col: int) -> Cell:
        cell = self._cells.get((row, col))
        if cell is None:
            raise UnknownCellError(f"No letter cell at ({row},{col})")
        return cell

    @property
    def cells(self) -> List[Cell]:
        """Letter cells in reading order."""
        return list(self._cells.values())

    @property
    def group_ids(self) -> List[str]:
        return list(self._groups)

    def group_members(self, group_id: str) -> Sequence[Cell]:
        return tuple(self._groups.get(group_id, ()))

    def row_cells(self, row: int) -> List[Cell]:
        return [cell for cell in self._cells.values() if cell.row == row]

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        """Return the nearest letter cell from ``cell`` towards ``direction``.

        Absent positions are skipped; the walk stops at the grid edge.
        """

        for position in self.bounds.walk(cell.row, cell.col, direction):
            found = self._cells.get(position)
            if found is not None:
                return found
        return None

    def next_in_row(self, cell: Cell) -> Optional[Cell]:
        return self.step(cell, Direction.RIGHT)
