"""Shared-letter cryptogram puzzle engine for the Vienna trip pages.

This package exposes the public API surface via:

- ``cryptogram.engine.puzzle.PuzzleEngine``: session state, row checks and completion.
- ``cryptogram.engine.grid.PuzzleGrid``: the fixed cell layout.
- ``cryptogram.data.layout`` helpers: layout parsing and JSON puzzle files.
- ``cryptogram.data.vienna.vienna_puzzle``: the built-in puzzle.
"""

from .core.models import Cell, RowSolution
from .engine.grid import GridConfig, PuzzleGrid
from .engine.puzzle import BasePuzzleListener, PuzzleEngine, PuzzleListener
from .data.layout import PuzzleConfig, load_puzzle
from .data.vienna import vienna_puzzle

__all__ = [
    "Cell",
    "RowSolution",
    "GridConfig",
    "PuzzleGrid",
    "PuzzleEngine",
    "PuzzleListener",
    "BasePuzzleListener",
    "PuzzleConfig",
    "load_puzzle",
    "vienna_puzzle",
]

__version__ = "0.1.0"
