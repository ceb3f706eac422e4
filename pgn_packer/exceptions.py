# pgn_packer_project/pgn_packer/exceptions.py
"""
Defines custom exceptions for the PGN Packer application.

Centralizing exceptions here avoids circular dependencies when different
modules need to catch exceptions defined by other components.
"""
from typing import Optional


# --- General ---
class PgnPackerError(Exception):
    """Base class for all application-specific errors."""
    pass


# --- Game Parsing Errors ---
class GameParseError(PgnPackerError):
    """
    Base class for errors that make a game unusable.

    Carries the 1-based input line number when the framer knows it.
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class MalformedHeaderError(GameParseError):
    """A known header tag carries a value that cannot be parsed."""
    pass


class MalformedMoveError(GameParseError):
    """A movetext token matches the move grammar but holds an unknown symbol."""
    pass


class MalformedAnnotationError(GameParseError):
    """A clock or evaluation comment holds a value outside its storage range."""
    pass


class FramingError(GameParseError):
    """The line structure of the input does not delimit a game correctly."""
    pass


# --- Input Errors ---
class PgnInputError(PgnPackerError):
    """Error encountered while opening or reading a PGN input file."""
    pass


# --- Output Errors ---
class OutputError(PgnPackerError):
    """Base class for errors encountered while writing converted games."""
    pass


class ChunkWriteError(OutputError):
    """Specific error for failures while writing an output chunk file."""
    pass
