"""Shared constants and enumerations for the cryptogram engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

BLANK_GROUP = "blank"
ACCENT_GROUP = "accent"


class CellKind(str, Enum):
    """How a letter-accepting cell stores its value."""

    BLANK = "BLANK"
    ACCENT = "ACCENT"
    GROUP = "GROUP"


class CompletionState(str, Enum):
    """Puzzle session states. ``SOLVED`` is terminal."""

    IN_PROGRESS = "IN_PROGRESS"
    SOLVED = "SOLVED"


class Direction(str, Enum):
    """Arrow-key navigation directions."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"
    UP = "UP"
    DOWN = "DOWN"


STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
}


@dataclass(frozen=True)
class Bounds:
    """Grid rectangle with containment checks and directional walks."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def walk(self, row: int, col: int, direction: Direction) -> Iterator[Tuple[int, int]]:
        """Yield positions after ``(row, col)`` towards ``direction``, up to the edge."""

        dr, dc = STEPS[direction]
        row, col = row + dr, col + dc
        while self.contains(row, col):
            yield row, col
            row, col = row + dr, col + dc
