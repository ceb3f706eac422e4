# pgn_packer_project/pgn_packer/movetext/coordinates.py
"""
Coordinate Codec: maps square components to the 4-bit codes used in the
packed square word.

Code 0 means "component not given"; files a..h and ranks 1..8 map to 1..8.
The letter tables come from python-chess so the two never disagree.
"""
import re
from typing import Dict, Final, Tuple

import chess

from pgn_packer.exceptions import MalformedMoveError

NONE_CODE: Final[int] = 0

FILE_CODES: Final[Dict[str, int]] = {name: i + 1 for i, name in enumerate(chess.FILE_NAMES)}
RANK_CODES: Final[Dict[str, int]] = {name: i + 1 for i, name in enumerate(chess.RANK_NAMES)}

# A square fragment is at most one non-digit followed by at most one digit.
_SQUARE_SHAPE = re.compile(r"^(\D?)(\d?)$", re.ASCII)


def _encode_component(component: str, table: Dict[str, int], kind: str) -> int:
    if component == "":
        return NONE_CODE
    code = table.get(component)
    if code is None:
        raise MalformedMoveError(f"Unrecognized {kind}: {component!r}")
    return code


def encode_file(component: str) -> int:
    """Encodes a file letter ('a'..'h') or '' as 1..8 or 0."""
    return _encode_component(component, FILE_CODES, "file")


def encode_rank(component: str) -> int:
    """Encodes a rank digit ('1'..'8') or '' as 1..8 or 0."""
    return _encode_component(component, RANK_CODES, "rank")


def split_square(text: str) -> Tuple[int, int]:
    """
    Decomposes a square fragment into (file_code, rank_code).

    Accepts '', a lone file ('e'), a lone rank ('4') or a full square ('e4').

    Raises:
        MalformedMoveError: If the fragment is not shaped like a square or
                            holds a file/rank outside the board.
    """
    match = _SQUARE_SHAPE.match(text)
    if not match:
        raise MalformedMoveError(f"Unrecognized square: {text!r}")
    return encode_file(match.group(1)), encode_rank(match.group(2))


def decode_file(code: int) -> str:
    """Inverse of `encode_file`; returns '' for the absent code."""
    if code == NONE_CODE:
        return ""
    return chess.FILE_NAMES[code - 1]


def decode_rank(code: int) -> str:
    """Inverse of `encode_rank`; returns '' for the absent code."""
    if code == NONE_CODE:
        return ""
    return chess.RANK_NAMES[code - 1]

