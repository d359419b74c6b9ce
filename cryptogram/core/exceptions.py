"""Custom exception hierarchy for the cryptogram engine."""


class PuzzleError(Exception):
    """Base exception for puzzle failures."""


class InvalidCharacterError(PuzzleError):
    """Raised when a keystroke is not a single A-Z letter."""


class UnknownCellError(PuzzleError):
    """Raised when an input targets a position without a letter cell."""


class PuzzleConfigError(PuzzleError):
    """Raised when a layout, puzzle file or solution table is malformed."""


class UnsolvablePuzzleError(PuzzleError):
    """Raised when no letter assignment satisfies the solution table."""
