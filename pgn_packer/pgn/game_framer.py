# pgn_packer_project/pgn_packer/pgn/game_framer.py
"""
Game Framer: the line-oriented state machine that cuts a PGN text stream
into games.

Each game is a block of `[Tag "value"]` lines, a blank line, exactly one
movetext line and a trailing blank line. The framer consumes all raw lines
of a game before interpreting them, so when a header or move turns out to
be malformed the stream is already positioned at the next game.
"""
import logging
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from pgn_packer.config import settings
from pgn_packer.exceptions import FramingError, GameParseError
from pgn_packer.movetext.movetext_parser import parse_movetext
from pgn_packer.pgn.header_interpreter import HeaderInterpreter
from pgn_packer.types import GameHeader, GameRecord

logger = logging.getLogger(settings.APP_NAME + ".GameFramer")

HEADER_PREFIX = "["


class FramerState(Enum):
    READING_HEADERS = "reading_headers"
    READING_MOVETEXT = "reading_movetext"
    EXPECTING_TRAILING_BLANK = "expecting_trailing_blank"
    DONE = "done"


class GameFramer:
    """
    Reads games one at a time from an iterable of text lines.

    Usage:
        with open_pgn(path) as lines:
            for record in GameFramer(lines):
                sink.write(record)

    `read_next_game()` returns None once the input ends cleanly between
    games; every later call keeps returning None.
    """

    def __init__(self, lines: Iterable[str], header_interpreter: Optional[HeaderInterpreter] = None):
        self._lines: Iterator[str] = iter(lines)
        self._header_interpreter = header_interpreter or HeaderInterpreter()
        self.state: FramerState = FramerState.READING_HEADERS
        self.line_number: int = 0
        self.games_framed: int = 0
        logger.debug("GameFramer initialized.")

    def __iter__(self) -> Iterator[GameRecord]:
        while (record := self.read_next_game()) is not None:
            yield record

    def _next_line(self) -> Optional[str]:
        """Returns the next stripped line, or None at end of input."""
        line = next(self._lines, None)
        if line is None:
            return None
        self.line_number += 1
        return line.strip()

    def _frame_game(self) -> Optional[Tuple[List[Tuple[int, str]], Tuple[int, str]]]:
        """
        Runs the state machine over the raw lines of one game.

        Returns:
            The numbered header lines and the numbered movetext line, or None
            if the input ended cleanly before the game started.

        Raises:
            FramingError: If a line breaks the game structure or the input
                          ends in the middle of a game.
        """
        header_lines: List[Tuple[int, str]] = []
        movetext: Optional[Tuple[int, str]] = None

        while True:
            if self.state is FramerState.READING_HEADERS:
                line = self._next_line()
                if line is None:
                    if header_lines:
                        raise FramingError("Input ended inside a header block", self.line_number)
                    self.state = FramerState.DONE
                    return None
                if line == "":
                    self.state = FramerState.READING_MOVETEXT
                elif line.startswith(HEADER_PREFIX) and len(line) > 1:
                    header_lines.append((self.line_number, line))
                else:
                    raise FramingError(f"Expected a header or blank line, got {line!r}", self.line_number)

            elif self.state is FramerState.READING_MOVETEXT:
                line = self._next_line()
                if line is None:
                    raise FramingError("Input ended before the movetext line", self.line_number)
                movetext = (self.line_number, line)
                self.state = FramerState.EXPECTING_TRAILING_BLANK

            elif self.state is FramerState.EXPECTING_TRAILING_BLANK:
                line = self._next_line()
                if line is None:
                    raise FramingError("Input ended before the blank line closing the game", self.line_number)
                if line != "":
                    raise FramingError(f"Expected a blank line after the movetext, got {line!r}", self.line_number)
                self.state = FramerState.READING_HEADERS
                return header_lines, movetext

            else:
                return None

    def read_next_game(self) -> Optional[GameRecord]:
        """
        Frames and interprets the next game.

        Returns:
            The completed GameRecord, or None when there are no more games.

        Raises:
            FramingError: On a structural problem in the input.
            MalformedHeaderError, MalformedMoveError, MalformedAnnotationError:
                If the game's content cannot be parsed. The framer has already
                moved past the game, so reading can continue if the caller
                chooses to skip it.
        """
        framed = self._frame_game()
        if framed is None:
            return None
        header_lines, (movetext_line_number, movetext_line) = framed

        line_number = 0
        try:
            header = GameHeader()
            for line_number, line in header_lines:
                self._header_interpreter.read_header(header, line)
            line_number = movetext_line_number
            movetext = parse_movetext(movetext_line)
        except GameParseError as e:
            if e.line_number is None:
                e.line_number = line_number
            raise

        self.games_framed += 1
        return GameRecord.from_parts(header, movetext)
