"""CP-SAT derivation of the solved letter assignment using OR-Tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import ALPHABET
from ..core.exceptions import UnsolvablePuzzleError
from ..core.models import Cell, RowSolution
from ..utils.logger import get_logger
from .grid import PuzzleGrid

LOGGER = get_logger(__name__)


@dataclass
class PuzzleSolution:
    """Letters that make every row of the solution table correct."""

    assignment: Dict[str, str] = field(default_factory=dict)
    independent: Dict[Tuple[int, int], str] = field(default_factory=dict)

    def letter_for(self, cell: Cell) -> Optional[str]:
        if cell.is_grouped:
            return self.assignment.get(cell.group_id)
        return self.independent.get(cell.position)


def solve_assignment(
    grid: PuzzleGrid,
    solutions: Sequence[RowSolution],
    distinct_groups: bool = True,
    timeout: float = 5.0,
) -> PuzzleSolution:
    """Find the letter of every group and independent cell covered by ``solutions``.

    Args:
        grid: Fixed puzzle layout.
        solutions: Row answers. Positions without a letter cell are ignored.
        distinct_groups: Require different groups to hold different letters,
            the usual cryptogram rule ("same number, same letter").
        timeout: Solver time limit in seconds.

    Raises:
        UnsolvablePuzzleError: the answers demand two letters for one group,
            or break the distinct-groups rule.
    """
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: one 0..25 variable per group and per independent cell
    # ------------------------------------------------------------------
    group_vars: Dict[str, cp_model.IntVar] = {}
    independent_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}

    for solution in solutions:
        for index, (row, col) in enumerate(solution.positions):
            cell = grid.cell(row, col)
            if cell is None:
                continue
            if cell.is_grouped:
                var = group_vars.get(cell.group_id)
                if var is None:
                    var = model.new_int_var(0, 25, f"G_{cell.group_id}")
                    group_vars[cell.group_id] = var
            else:
                var = independent_vars.get(cell.position)
                if var is None:
                    var = model.new_int_var(0, 25, f"I_{row}_{col}")
                    independent_vars[cell.position] = var

            # ------------------------------------------------------------------
            # Step 2: each answer letter pins its variable
            # ------------------------------------------------------------------
            letter = solution.answer[index]
            if letter not in ALPHABET:
                raise UnsolvablePuzzleError(
                    f"Answer {solution.answer!r} for row {solution.row} contains {letter!r}"
                )
            model.add(var == ALPHABET.index(letter))

    # ------------------------------------------------------------------
    # Step 3: cryptogram uniqueness
    # ------------------------------------------------------------------
    if distinct_groups and len(group_vars) > 1:
        model.add_all_different(list(group_vars.values()))

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout

    LOGGER.debug(
        "CP-SAT: %d group vars, %d independent vars",
        len(group_vars),
        len(independent_vars),
    )
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no assignment found (status=%s)", solver.status_name(status))
        raise UnsolvablePuzzleError(
            f"Solution table has no consistent letter assignment ({solver.status_name(status)})"
        )

    return PuzzleSolution(
        assignment={gid: ALPHABET[solver.value(var)] for gid, var in group_vars.items()},
        independent={pos: ALPHABET[solver.value(var)] for pos, var in independent_vars.items()},
    )
