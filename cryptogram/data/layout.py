"""Puzzle definitions: layout text, auto-numbering and JSON puzzle files.

Layout rows are whitespace-separated tokens, one per column:

- ``.`` structurally absent position
- ``_`` blank cell (independent letter)
- ``*`` accent cell (independent letter, highlighted)
- anything else: a group token; equal tokens share one letter
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import ACCENT_GROUP, ALPHABET, BLANK_GROUP
from ..core.exceptions import PuzzleConfigError
from ..core.models import Cell, RowSolution
from ..engine.grid import GridConfig, PuzzleGrid
from ..engine.puzzle import PuzzleEngine, PuzzleListener
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

ABSENT_TOKEN = "."
BLANK_TOKEN = "_"
ACCENT_TOKEN = "*"


@dataclass
class PuzzleConfig:
    """Everything needed to start a puzzle session."""

    title: str
    grid: GridConfig
    solutions: List[RowSolution] = field(default_factory=list)
    redirect: Optional[str] = None
    distinct_groups: bool = True

    def build_grid(self) -> PuzzleGrid:
        return PuzzleGrid(self.grid)

    def create_engine(self, listeners: Optional[Sequence[PuzzleListener]] = None) -> PuzzleEngine:
        return PuzzleEngine(
            self.build_grid(),
            self.solutions,
            listeners=listeners,
            distinct_groups=self.distinct_groups,
        )


def parse_layout(rows: Sequence[str]) -> GridConfig:
    """Build a :class:`GridConfig` from layout text rows."""

    if not rows:
        raise PuzzleConfigError("Layout has no rows")
    if any(not isinstance(row, str) for row in rows):
        raise PuzzleConfigError("Layout rows must be strings")
    tokenized = [row.split() for row in rows]
    width = max(len(tokens) for tokens in tokenized)
    if width == 0:
        raise PuzzleConfigError("Layout has no columns")

    cells: List[Cell] = []
    for r, tokens in enumerate(tokenized):
        for c, token in enumerate(tokens):
            if token == ABSENT_TOKEN:
                continue
            if token == BLANK_TOKEN:
                group_id = BLANK_GROUP
            elif token == ACCENT_TOKEN:
                group_id = ACCENT_GROUP
            else:
                group_id = token
            cells.append(Cell(r, c, group_id))
    return GridConfig(height=len(tokenized), width=width, cells=cells)


def format_layout(config: GridConfig) -> List[str]:
    """Inverse of :func:`parse_layout`."""

    tokens = [[ABSENT_TOKEN] * config.width for _ in range(config.height)]
    for cell in config.cells:
        if cell.group_id == BLANK_GROUP:
            token = BLANK_TOKEN
        elif cell.group_id == ACCENT_GROUP:
            token = ACCENT_TOKEN
        else:
            token = str(cell.group_id)
        tokens[cell.row][cell.col] = token
    return [" ".join(row) for row in tokens]


def layout_from_solutions(
    solutions: Sequence[RowSolution],
    accents: Iterable[Tuple[int, int]] = (),
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> GridConfig:
    """Derive a cryptogram layout from the answers themselves.

    Every answer position becomes a cell. Accent positions stay independent;
    the remaining cells are grouped by letter and numbered ``1, 2, ...`` in
    reading order. Letters seen only once become blank cells.
    """

    letters: Dict[Tuple[int, int], str] = {}
    for solution in solutions:
        for index, position in enumerate(solution.positions):
            letter = solution.answer[index]
            existing = letters.setdefault(position, letter)
            if existing != letter:
                raise PuzzleConfigError(
                    f"Answers disagree at {position}: {existing} vs {letter}"
                )

    accent_set = set(accents)
    missing = accent_set - set(letters)
    if missing:
        raise PuzzleConfigError(f"Accent positions outside every answer: {sorted(missing)}")

    height = height if height is not None else max((r for r, _ in letters), default=-1) + 1
    width = width if width is not None else max((c for _, c in letters), default=-1) + 1
    outside = [pos for pos in letters if not (0 <= pos[0] < height and 0 <= pos[1] < width)]
    for position in outside:
        LOGGER.warning("Answer position %s lies outside the %sx%s grid", position, height, width)
        del letters[position]

    ordered = sorted(letters)
    counts = Counter(letters[pos] for pos in ordered if pos not in accent_set)
    numbering: Dict[str, str] = {}
    cells: List[Cell] = []
    for position in ordered:
        letter = letters[position]
        if position in accent_set:
            group_id = ACCENT_GROUP
        elif counts[letter] < 2:
            group_id = BLANK_GROUP
        else:
            group_id = numbering.setdefault(letter, str(len(numbering) + 1))
        cells.append(Cell(position[0], position[1], group_id))
    return GridConfig(height=height, width=width, cells=cells)


# ----------------------------------------------------------------------
# JSON puzzle files
# ----------------------------------------------------------------------
def parse_solutions(entries: Iterable[Any]) -> List[RowSolution]:
    solutions: List[RowSolution] = []
    for entry in entries:
        try:
            if isinstance(entry, Mapping):
                row, start_col, answer = entry["row"], entry["start_col"], entry["answer"]
            else:
                row, start_col, answer = entry
        except (KeyError, TypeError, ValueError) as exc:
            raise PuzzleConfigError(f"Malformed solution entry {entry!r}") from exc
        if not isinstance(row, int) or not isinstance(start_col, int):
            raise PuzzleConfigError(f"Solution coordinates must be integers: {entry!r}")
        if not isinstance(answer, str) or not answer or any(ch not in ALPHABET for ch in answer.upper()):
            raise PuzzleConfigError(f"Answer must be letters A-Z: {answer!r}")
        solutions.append(RowSolution(row, start_col, answer))
    return solutions


def _list_field(doc: Mapping[str, Any], key: str) -> List[Any]:
    value = doc.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise PuzzleConfigError(f"\"{key}\" must be a list, got {type(value).__name__}")
    return value


def _size_field(doc: Mapping[str, Any], key: str) -> Optional[int]:
    value = doc.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise PuzzleConfigError(f"\"{key}\" must be a positive integer, got {value!r}")
    return value


def _parse_accents(entries: Iterable[Any]) -> List[Tuple[int, int]]:
    accents: List[Tuple[int, int]] = []
    for entry in entries:
        if (
            not isinstance(entry, (list, tuple))
            or len(entry) != 2
            or not all(isinstance(value, int) and not isinstance(value, bool) for value in entry)
        ):
            raise PuzzleConfigError(f"Accent must be a [row, col] pair: {entry!r}")
        accents.append((entry[0], entry[1]))
    return accents


def _redirect_field(doc: Mapping[str, Any]) -> Optional[str]:
    value = doc.get("redirect")
    if value is not None and not isinstance(value, str):
        raise PuzzleConfigError(f"\"redirect\" must be a string, got {value!r}")
    return value


def puzzle_from_dict(doc: Mapping[str, Any]) -> PuzzleConfig:
    """Build a :class:`PuzzleConfig` from a decoded puzzle document."""

    solutions = parse_solutions(_list_field(doc, "solutions"))
    if "layout" in doc:
        grid = parse_layout(_list_field(doc, "layout"))
    elif solutions:
        grid = layout_from_solutions(
            solutions,
            accents=_parse_accents(_list_field(doc, "accents")),
            width=_size_field(doc, "width"),
            height=_size_field(doc, "height"),
        )
    else:
        raise PuzzleConfigError("Puzzle needs a layout or a solution table")

    return PuzzleConfig(
        title=str(doc.get("title") or "Untitled puzzle"),
        grid=grid,
        solutions=solutions,
        redirect=_redirect_field(doc),
        distinct_groups=bool(doc.get("distinct_groups", True)),
    )


def load_puzzle(path: Path | str) -> PuzzleConfig:
    """Read a JSON puzzle file."""

    path = Path(path)
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise PuzzleConfigError(f"Cannot read puzzle file {path}: {exc}") from exc
    if not isinstance(doc, dict):
        raise PuzzleConfigError(f"Puzzle file {path} must contain a JSON object")

    config = puzzle_from_dict(doc)
    LOGGER.info(
        "Loaded puzzle %r from %s (%s cells, %s answers)",
        config.title,
        path.name,
        len(config.grid.cells),
        len(config.solutions),
    )
    return config


def puzzle_to_dict(config: PuzzleConfig) -> Dict[str, Any]:
    return {
        "title": config.title,
        "redirect": config.redirect,
        "distinct_groups": config.distinct_groups,
        "layout": format_layout(config.grid),
        "solutions": [[s.row, s.start_col, s.answer] for s in config.solutions],
    }
