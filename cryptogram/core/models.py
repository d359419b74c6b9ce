"""Data models supporting the cryptogram engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .constants import ACCENT_GROUP, BLANK_GROUP, CellKind


@dataclass(frozen=True)
class Cell:
    """A letter-accepting grid position.

    Cells sharing a ``group_id`` other than ``"blank"`` or ``"accent"`` always
    display the same letter. The displayed value itself lives in the engine.
    """

    row: int
    col: int
    group_id: str = BLANK_GROUP

    def __post_init__(self) -> None:
        if not isinstance(self.group_id, str):
            object.__setattr__(self, "group_id", str(self.group_id))

    @property
    def kind(self) -> CellKind:
        if self.group_id == BLANK_GROUP:
            return CellKind.BLANK
        if self.group_id == ACCENT_GROUP:
            return CellKind.ACCENT
        return CellKind.GROUP

    @property
    def is_grouped(self) -> bool:
        return self.kind == CellKind.GROUP

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class RowSolution:
    """Expected answer for a contiguous run of cells in one row."""

    row: int
    start_col: int
    answer: str
    _positions: Tuple[Tuple[int, int], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        answer = self.answer.upper()
        object.__setattr__(self, "answer", answer)
        object.__setattr__(
            self,
            "_positions",
            tuple((self.row, self.start_col + i) for i in range(len(answer))),
        )

    @property
    def length(self) -> int:
        return len(self.answer)

    @property
    def positions(self) -> List[Tuple[int, int]]:
        return list(self._positions)
