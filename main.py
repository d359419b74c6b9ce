"""CLI entrypoint: play a cryptogram puzzle in the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from cryptogram.core.exceptions import PuzzleConfigError, UnknownCellError, UnsolvablePuzzleError
from cryptogram.data.layout import PuzzleConfig, load_puzzle
from cryptogram.data.vienna import vienna_puzzle
from cryptogram.engine.puzzle import BasePuzzleListener, PuzzleEngine
from cryptogram.engine.validator import PuzzleValidator
from cryptogram.utils.logger import configure_logging
from cryptogram.utils.pretty import format_solution, pretty_print_grid

HELP_TEXT = """Commands:
  <row> <col> <letter>   enter a letter (same numbers = same letters)
  <row> <col> -          clear a cell
  hint <row> <col>       reveal the letter of one cell
  show                   print the board
  quit                   leave the puzzle"""


class TerminalListener(BasePuzzleListener):
    """Reports row results and the win to the terminal."""

    def __init__(self, stream: TextIO, redirect: Optional[str] = None) -> None:
        self.stream = stream
        self.redirect = redirect

    def on_row_correctness_changed(self, row: int, is_correct: bool) -> None:
        if is_correct:
            print(f"Row {row} is correct!", file=self.stream)

    def on_solved(self) -> None:
        print("Congratulations, the puzzle is solved!", file=self.stream)
        if self.redirect:
            print(f"Next stop: {self.redirect}", file=self.stream)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve the Vienna cryptogram (or any JSON puzzle) in the terminal",
    )
    parser.add_argument(
        "--puzzle",
        type=Path,
        metavar="FILE",
        help="JSON puzzle file (defaults to the built-in Vienna puzzle)",
    )
    parser.add_argument(
        "--reveal",
        action="store_true",
        help="Print the solved grid and exit",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the puzzle definition and exit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def run_session(engine: PuzzleEngine, stdin: TextIO, stdout: TextIO) -> None:
    """Read commands until the puzzle is solved, ``quit`` or end of input."""

    pretty_print_grid(engine, stream=stdout)
    print(HELP_TEXT, file=stdout)
    for line in stdin:
        parts = line.split()
        if not parts:
            continue
        command = parts[0].lower()
        if command in {"quit", "exit"}:
            break
        if command == "help":
            print(HELP_TEXT, file=stdout)
            continue
        if command == "show":
            pretty_print_grid(engine, stream=stdout)
            continue

        try:
            if command == "hint" and len(parts) == 3:
                cell = engine.grid.require(int(parts[1]), int(parts[2]))
                if not engine.hint(cell):
                    print("No answer covers that cell.", file=stdout)
            elif len(parts) == 3:
                row, col = int(parts[0]), int(parts[1])
                raw = "" if parts[2] == "-" else parts[2]
                if not engine.on_cell_edited((row, col), raw):
                    print("Only single letters A-Z are accepted.", file=stdout)
            else:
                print(f"Unknown command: {line.strip()}", file=stdout)
                continue
        except ValueError:
            print(f"Unknown command: {line.strip()}", file=stdout)
            continue
        except (UnknownCellError, UnsolvablePuzzleError) as exc:
            print(str(exc), file=stdout)
            continue

        pretty_print_grid(engine, stream=stdout)
        if engine.is_solved:
            break


def main(
    argv: List[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        config: PuzzleConfig = load_puzzle(args.puzzle) if args.puzzle else vienna_puzzle()
        grid = config.build_grid()
    except PuzzleConfigError as exc:
        parser.error(str(exc))

    if args.check:
        result = PuzzleValidator(distinct_groups=config.distinct_groups).validate(
            grid, config.solutions
        )
        if result.ok:
            print(f"{config.title}: OK", file=stdout)
            return 0
        for message in result.messages:
            print(f"{config.title}: {message}", file=stdout)
        return 1

    listener = TerminalListener(stdout, redirect=config.redirect)
    engine = PuzzleEngine(
        grid, config.solutions, listeners=[listener], distinct_groups=config.distinct_groups
    )
    if args.reveal:
        try:
            print(format_solution(grid, engine.solution), file=stdout)
        except UnsolvablePuzzleError as exc:
            print(str(exc), file=stdout)
            return 1
        return 0

    print(config.title, file=stdout)
    run_session(engine, stdin, stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
