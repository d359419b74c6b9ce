"""Puzzle session state: letter assignment, row checks and completion."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Protocol, Sequence, Set, Tuple

from ..core.constants import CompletionState, Direction
from ..core.exceptions import InvalidCharacterError
from ..core.models import Cell, RowSolution
from ..utils.logger import get_logger
from .grid import PuzzleGrid
from .solver import PuzzleSolution, solve_assignment


LOGGER = get_logger(__name__)

LETTER_RE = re.compile(r"[A-Z]")


def normalize_letter(raw_char: str) -> str:
    """Return ``raw_char`` as an uppercase letter, or ``""`` for a deletion."""

    if not raw_char:
        return ""
    letter = raw_char.upper()
    if not LETTER_RE.fullmatch(letter):
        raise InvalidCharacterError(f"Not a letter: {raw_char!r}")
    return letter


class PuzzleListener(Protocol):
    """Render-surface callbacks fired by :class:`PuzzleEngine`."""

    def on_value_changed(self, cell: Cell, value: str) -> None:
        ...

    def on_row_correctness_changed(self, row: int, is_correct: bool) -> None:
        ...

    def on_progress_changed(self, filled: int, total: int) -> None:
        ...

    def on_target_changed(self, cell: Cell) -> None:
        ...

    def on_solved(self) -> None:
        ...


class BasePuzzleListener:
    """No-op listener; subclass and override the callbacks you need."""

    def on_value_changed(self, cell: Cell, value: str) -> None:
        pass

    def on_row_correctness_changed(self, row: int, is_correct: bool) -> None:
        pass

    def on_progress_changed(self, filled: int, total: int) -> None:
        pass

    def on_target_changed(self, cell: Cell) -> None:
        pass

    def on_solved(self) -> None:
        pass


class PuzzleEngine:
    """Shared-letter grid with synchronized groups and row verification.

    Grouped cells have no storage of their own: their value is a projection
    of ``assignment``. Blank and accent cells keep independent values.
    """

    def __init__(
        self,
        grid: PuzzleGrid,
        solutions: Sequence[RowSolution],
        listeners: Optional[Sequence[PuzzleListener]] = None,
        distinct_groups: bool = True,
    ) -> None:
        self.grid = grid
        self.solutions: Tuple[RowSolution, ...] = tuple(solutions)
        self.listeners: List[PuzzleListener] = list(listeners or [])
        self.distinct_groups = distinct_groups
        self.assignment: Dict[str, str] = {}
        self._independent: Dict[Tuple[int, int], str] = {}
        self.correct_rows: Set[int] = set()
        self.target: Optional[Cell] = None
        self.state = CompletionState.IN_PROGRESS
        self._total = len(grid)
        self._solution: Optional[PuzzleSolution] = None

    def add_listener(self, listener: PuzzleListener) -> None:
        self.listeners.append(listener)

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------
    def on_cell_edited(self, cell_id: Tuple[int, int], raw_char: str) -> bool:
        row, col = cell_id
        return self.set_cell_input(self.grid.require(row, col), raw_char)

    def set_cell_input(self, cell: Cell, raw_char: str) -> bool:
        """Apply one keystroke to ``cell``. Returns False if it was rejected.

        ``cell`` is looked up by position, so the grid decides its group. A
        rejected keystroke clears a blank or accent cell; a grouped cell keeps
        showing its group letter, which stays unchanged (empty if unset).
        """

        cell = self._resolve(cell)
        try:
            letter = normalize_letter(raw_char)
        except InvalidCharacterError as exc:
            LOGGER.debug("Rejected input at (%s,%s): %s", cell.row, cell.col, exc)
            self._revert(cell)
            self._after_mutation()
            return False

        LOGGER.debug("Input %r at (%s,%s) group=%s", letter, cell.row, cell.col, cell.group_id)
        if cell.is_grouped:
            if letter:
                self.assignment[cell.group_id] = letter
            else:
                self.assignment.pop(cell.group_id, None)
            for member in self.grid.group_members(cell.group_id):
                self._emit_value(member)
        else:
            if letter:
                self._independent[cell.position] = letter
            else:
                self._independent.pop(cell.position, None)
            self._emit_value(cell)

        if letter:
            self.navigate_after_input(cell)
        self._after_mutation()
        return True

    def _resolve(self, cell: Cell) -> Cell:
        return self.grid.require(cell.row, cell.col)

    def _revert(self, cell: Cell) -> None:
        # Grouped cells fall back to the unchanged group letter.
        if not cell.is_grouped:
            self._independent.pop(cell.position, None)
        self._emit_value(cell)

    def _after_mutation(self) -> None:
        previous = self.correct_rows
        self.correct_rows = self.check_answers()
        for row in sorted(previous ^ self.correct_rows):
            is_correct = row in self.correct_rows
            for listener in self.listeners:
                listener.on_row_correctness_changed(row, is_correct)

        filled, total = self.progress()
        for listener in self.listeners:
            listener.on_progress_changed(filled, total)
        self._check_completion(filled, total)

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------
    def value(self, cell: Cell) -> str:
        cell = self.grid.cell(cell.row, cell.col) or cell
        if cell.is_grouped:
            return self.assignment.get(cell.group_id, "")
        return self._independent.get(cell.position, "")

    def display(self) -> Dict[Tuple[int, int], str]:
        return {cell.position: self.value(cell) for cell in self.grid}

    def _emit_value(self, cell: Cell) -> None:
        value = self.value(cell)
        for listener in self.listeners:
            listener.on_value_changed(cell, value)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def check_answers(self) -> Set[int]:
        """Return the rows whose every solution currently matches."""

        correct: Set[int] = set()
        failed: Set[int] = set()
        for solution in self.solutions:
            if self._solution_matches(solution):
                correct.add(solution.row)
            else:
                failed.add(solution.row)
        return correct - failed

    def _solution_matches(self, solution: RowSolution) -> bool:
        for index, (row, col) in enumerate(solution.positions):
            cell = self.grid.cell(row, col)
            if cell is None:
                return False
            if self.value(cell) != solution.answer[index]:
                return False
        return True

    def progress(self) -> Tuple[int, int]:
        filled = sum(1 for cell in self.grid if self.value(cell))
        return filled, self._total

    @property
    def is_solved(self) -> bool:
        return self.state == CompletionState.SOLVED

    def _check_completion(self, filled: int, total: int) -> None:
        if self.is_solved or filled != total:
            return
        required = {solution.row for solution in self.solutions}
        if not required <= self.correct_rows:
            return
        self.state = CompletionState.SOLVED
        LOGGER.info("Puzzle solved (%s cells, %s rows)", total, len(required))
        for listener in self.listeners:
            listener.on_solved()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def navigate_after_input(self, cell: Cell) -> Optional[Cell]:
        return self._retarget(self.grid.next_in_row(cell))

    def navigate(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        return self._retarget(self.grid.step(self._resolve(cell), direction))

    def _retarget(self, cell: Optional[Cell]) -> Optional[Cell]:
        if cell is None:
            return None
        self.target = cell
        for listener in self.listeners:
            listener.on_target_changed(cell)
        return cell

    # ------------------------------------------------------------------
    # Hints
    # ------------------------------------------------------------------
    @property
    def solution(self) -> PuzzleSolution:
        if self._solution is None:
            self._solution = solve_assignment(
                self.grid, self.solutions, distinct_groups=self.distinct_groups
            )
        return self._solution

    def hint(self, cell: Cell) -> bool:
        """Enter the solved letter for ``cell``; False if no answer covers it."""

        cell = self._resolve(cell)
        letter = self.solution.letter_for(cell)
        if letter is None:
            return False
        LOGGER.info("Hint for (%s,%s): %s", cell.row, cell.col, letter)
        return self.set_cell_input(cell, letter)
