"""The Vienna trip cryptogram."""

from __future__ import annotations

from typing import List, Tuple

from ..core.models import RowSolution
from .layout import PuzzleConfig, parse_layout

# Each row hides one highlighted letter: G + RAAN, KI + S + TEN, ...
VIENNA_SOLUTIONS: List[RowSolution] = [
    RowSolution(0, 3, "GRAAN"),
    RowSolution(1, 2, "KISTEN"),
    RowSolution(2, 1, "KOSTEN"),
    RowSolution(3, 0, "ELEMENT"),
    RowSolution(4, 1, "SALON"),
    RowSolution(5, 2, "KLAAR"),
    RowSolution(6, 1, "BIER"),
]

VIENNA_ACCENTS: List[Tuple[int, int]] = [
    (0, 3),
    (1, 4),
    (2, 3),
    (3, 4),
    (4, 3),
    (5, 4),
    (6, 3),
]

VIENNA_LAYOUT: List[str] = [
    ". . . * 1 2 2 3",
    ". . 4 5 * 6 7 3",
    ". 4 8 * 6 7 3 .",
    "7 9 7 _ * 3 6 .",
    ". _ 2 * 8 3 . .",
    ". . 4 9 * 2 1 .",
    ". _ 5 * 1 . . .",
]

VIENNA_REDIRECT = "vienna.html"


def vienna_puzzle() -> PuzzleConfig:
    return PuzzleConfig(
        title="Vienna",
        grid=parse_layout(VIENNA_LAYOUT),
        solutions=list(VIENNA_SOLUTIONS),
        redirect=VIENNA_REDIRECT,
    )
