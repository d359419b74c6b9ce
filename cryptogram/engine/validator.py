"""Deterministic checks over a puzzle grid and its solution table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..core.exceptions import PuzzleConfigError, UnsolvablePuzzleError
from ..core.models import RowSolution
from ..utils.logger import get_logger
from .grid import PuzzleGrid
from .solver import solve_assignment


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)


class PuzzleValidator:
    """Reports solution rows that can never be correct or contradict each other."""

    def __init__(self, distinct_groups: bool = True) -> None:
        self.distinct_groups = distinct_groups

    def validate(self, grid: PuzzleGrid, solutions: Sequence[RowSolution]) -> ValidationResult:
        messages: List[str] = []
        messages.extend(self._check_spans(grid, solutions))
        messages.extend(self._check_overlaps(solutions))
        if not messages:
            try:
                solve_assignment(grid, solutions, distinct_groups=self.distinct_groups)
            except UnsolvablePuzzleError as exc:
                messages.append(str(exc))
        for message in messages:
            LOGGER.warning("Puzzle validation: %s", message)
        return ValidationResult(ok=not messages, messages=messages)

    def ensure_valid(self, grid: PuzzleGrid, solutions: Sequence[RowSolution]) -> None:
        result = self.validate(grid, solutions)
        if not result.ok:
            raise PuzzleConfigError("; ".join(result.messages))

    @staticmethod
    def _check_spans(grid: PuzzleGrid, solutions: Sequence[RowSolution]) -> List[str]:
        messages: List[str] = []
        for solution in solutions:
            if not solution.answer:
                messages.append(f"Empty answer for row {solution.row}")
                continue
            for row, col in solution.positions:
                if not grid.bounds.contains(row, col):
                    messages.append(
                        f"Answer {solution.answer} for row {solution.row} leaves the grid at ({row},{col})"
                    )
                    break
                if grid.cell(row, col) is None:
                    messages.append(
                        f"Answer {solution.answer} for row {solution.row} crosses an absent cell at ({row},{col})"
                    )
                    break
        return messages

    @staticmethod
    def _check_overlaps(solutions: Sequence[RowSolution]) -> List[str]:
        messages: List[str] = []
        claimed: Dict[Tuple[int, int], str] = {}
        for solution in solutions:
            for index, position in enumerate(solution.positions):
                letter = solution.answer[index]
                existing = claimed.setdefault(position, letter)
                if existing != letter:
                    messages.append(
                        f"Conflicting answers at {position}: {existing} vs {letter}"
                    )
        return messages
