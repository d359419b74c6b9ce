"""Pretty-print helpers for cryptogram grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable, Optional

from ..core.constants import CellKind
from ..core.models import Cell

if TYPE_CHECKING:
    from ..engine.grid import PuzzleGrid
    from ..engine.puzzle import PuzzleEngine
    from ..engine.solver import PuzzleSolution


ABSENT_SYMBOL = "#"
PLACEHOLDERS = {
    CellKind.BLANK: "_",
    CellKind.ACCENT: "*",
}


def cell_symbol(cell: Optional[Cell], value: str = "") -> str:
    if cell is None:
        return ABSENT_SYMBOL
    if value:
        return value
    return PLACEHOLDERS.get(cell.kind, cell.group_id)


def _format(grid: PuzzleGrid, value_of: Callable[[Cell], str], marks=frozenset()) -> str:
    width = grid.bounds.cols
    header_cells = [f"{c:>3}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (4 * width - 1))
    for r in range(grid.bounds.rows):
        symbols = []
        for c in range(width):
            cell = grid.cell(r, c)
            symbols.append(cell_symbol(cell, value_of(cell) if cell is not None else ""))
        suffix = "  ok" if r in marks else ""
        lines.append(f"{r:>2} | " + " ".join(f"{symbol:>3}" for symbol in symbols) + suffix)
    return "\n".join(lines)


def format_grid(engine: PuzzleEngine) -> str:
    """Render the current board; solved rows are marked ``ok``."""

    return _format(engine.grid, engine.value, marks=engine.correct_rows)


def format_solution(grid: PuzzleGrid, solution: PuzzleSolution) -> str:
    return _format(grid, lambda cell: solution.letter_for(cell) or "")


def format_progress(engine: PuzzleEngine) -> str:
    filled, total = engine.progress()
    percent = (filled / total * 100) if total else 100.0
    return f"Progress: {filled}/{total} ({percent:.0f}%)"


def pretty_print_grid(engine: PuzzleEngine, *, label: str | None = None, stream=None) -> None:
    """Print the board and progress line in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(engine), file=stream)
    print(format_progress(engine), file=stream)
