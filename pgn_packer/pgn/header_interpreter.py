# pgn_packer_project/pgn_packer/pgn/header_interpreter.py
"""
Header Field Interpreter.

Maps `[FieldName "value"]` lines onto a typed GameHeader. Known fields are
parsed strictly: a value that does not fit its expected shape or storage
width raises MalformedHeaderError, so a game is never emitted with a
half-filled header. Unknown field names are ignored.
"""
import logging
import re
from typing import Callable, Dict, Final, Tuple

from pgn_packer.config import settings
from pgn_packer.exceptions import MalformedHeaderError
from pgn_packer.types import GameHeader, GameResult, Termination

logger = logging.getLogger(settings.APP_NAME + ".HeaderInterpreter")

HEADER_PATTERN: Final[re.Pattern] = re.compile(r'^\[(\w+) "(.*)"\]$')
ECO_PATTERN: Final[re.Pattern] = re.compile(r"([A-E])([0-9]{2})")
INTEGER_PATTERN: Final[re.Pattern] = re.compile(r"[+-]?[0-9]+")

UNKNOWN_VALUE: Final[str] = "?"
UNTIMED_VALUE: Final[str] = "-"

# Storage ranges of the output columns.
U8: Final[Tuple[int, int]] = (0, 0xFF)
U16: Final[Tuple[int, int]] = (0, 0xFFFF)
I16: Final[Tuple[int, int]] = (-0x8000, 0x7FFF)

RESULTS: Final[Dict[str, GameResult]] = {
    "1-0": GameResult.WHITE_WIN,
    "0-1": GameResult.BLACK_WIN,
    "1/2-1/2": GameResult.DRAW,
    "*": GameResult.UNFINISHED,
}

TERMINATIONS: Final[Dict[str, Termination]] = {
    "Normal": Termination.NORMAL,
    "Time forfeit": Termination.TIME_FORFEIT,
    "Abandoned": Termination.ABANDONED,
    "Rules infraction": Termination.RULES_INFRACTION,
    "Unterminated": Termination.UNTERMINATED,
}


def _parse_int(field_name: str, value: str, bounds: Tuple[int, int]) -> int:
    """Parses an integer header value and checks it against its storage range."""
    if not INTEGER_PATTERN.fullmatch(value):
        raise MalformedHeaderError(f"{field_name}: expected an integer, got {value!r}")
    number = int(value)
    low, high = bounds
    if not low <= number <= high:
        raise MalformedHeaderError(f"{field_name}: {number} is outside [{low}, {high}]")
    return number


class HeaderInterpreter:
    """Applies header lines to a GameHeader, one line at a time."""

    def __init__(self):
        self._setters: Dict[str, Callable[[GameHeader, str], None]] = {
            "UTCDate": self._set_date,
            "TimeControl": self._set_time_control,
            "WhiteElo": self._set_white_rating,
            "BlackElo": self._set_black_rating,
            "WhiteRatingDiff": self._set_white_rating_diff,
            "BlackRatingDiff": self._set_black_rating_diff,
            "ECO": self._set_eco,
            "Result": self._set_result,
            "Termination": self._set_termination,
            "Site": self._set_site,
            "White": self._set_white,
            "Black": self._set_black,
        }
        logger.debug("HeaderInterpreter initialized.")

    def read_header(self, header: GameHeader, line: str) -> None:
        """
        Parses one header line into `header`.

        Args:
            header: The header under construction; updated in place.
            line: A stripped line starting with '['.

        Raises:
            MalformedHeaderError: If the line is not `[Name "value"]` shaped
                                  or a known field's value cannot be parsed.
        """
        match = HEADER_PATTERN.match(line)
        if not match:
            raise MalformedHeaderError(f"Unrecognized header line: {line!r}")
        field_name, value = match.groups()

        setter = self._setters.get(field_name)
        if setter is None:
            return
        setter(header, value)

    # --- Field Setters ---
    def _set_date(self, header: GameHeader, value: str) -> None:
        parts = value.split(".")
        if len(parts) != 3:
            raise MalformedHeaderError(f"UTCDate: expected YYYY.MM.DD, got {value!r}")
        header.year = _parse_int("UTCDate", parts[0], U16)
        header.month = _parse_int("UTCDate", parts[1], U8)
        header.day = _parse_int("UTCDate", parts[2], U8)

    def _set_time_control(self, header: GameHeader, value: str) -> None:
        if value == UNTIMED_VALUE:
            header.time_control_main = 0
            header.time_control_increment = 0
            return
        parts = value.split("+")
        if len(parts) != 2:
            raise MalformedHeaderError(f"TimeControl: expected MAIN+INCREMENT, got {value!r}")
        header.time_control_main = _parse_int("TimeControl", parts[0], U16)
        header.time_control_increment = _parse_int("TimeControl", parts[1], U8)

    def _set_white_rating(self, header: GameHeader, value: str) -> None:
        header.white_rating = 0 if value == UNKNOWN_VALUE else _parse_int("WhiteElo", value, U16)

    def _set_black_rating(self, header: GameHeader, value: str) -> None:
        header.black_rating = 0 if value == UNKNOWN_VALUE else _parse_int("BlackElo", value, U16)

    def _set_white_rating_diff(self, header: GameHeader, value: str) -> None:
        header.white_rating_diff = _parse_int("WhiteRatingDiff", value, I16)

    def _set_black_rating_diff(self, header: GameHeader, value: str) -> None:
        header.black_rating_diff = _parse_int("BlackRatingDiff", value, I16)

    def _set_eco(self, header: GameHeader, value: str) -> None:
        if value == UNKNOWN_VALUE:
            header.eco_category = 0
            header.eco_subcategory = 0
            return
        match = ECO_PATTERN.fullmatch(value)
        if not match:
            raise MalformedHeaderError(f"ECO: expected a letter and two digits, got {value!r}")
        header.eco_category = ord(match.group(1))
        header.eco_subcategory = int(match.group(2))

    def _set_result(self, header: GameHeader, value: str) -> None:
        try:
            header.result = RESULTS[value]
        except KeyError:
            raise MalformedHeaderError(f"Unknown result: {value!r}") from None

    def _set_termination(self, header: GameHeader, value: str) -> None:
        try:
            header.termination = TERMINATIONS[value]
        except KeyError:
            raise MalformedHeaderError(f"Unknown termination: {value!r}") from None

    def _set_site(self, header: GameHeader, value: str) -> None:
        header.site = value

    def _set_white(self, header: GameHeader, value: str) -> None:
        header.white = value

    def _set_black(self, header: GameHeader, value: str) -> None:
        header.black = value
