# pgn_packer_project/pgn_packer/movetext/grammar.py
"""
Move Grammar Parser.

Recognizes the SAN subset written by the Lichess exporter and decomposes a
single movetext token into a `CastlingMove`, a `StandardMove`, or
`NotAMove`. Tokens that fit neither pattern (move numbers, results,
ellipses) are not errors; tokens that fit a pattern but break one of its
structural rules are.
"""
import logging
import re
from typing import Dict, Final, Optional

import chess

from pgn_packer.config import settings
from pgn_packer.exceptions import MalformedMoveError
from pgn_packer.types import (
    Annotation,
    CastlingMove,
    CheckState,
    NotAMove,
    ParsedMove,
    Piece,
    StandardMove,
)

logger = logging.getLogger(settings.APP_NAME + ".MoveGrammar")

# --- Token Patterns ---
# piece, disambiguation, capture, destination, promotion marker,
# promotion piece, check suffix, glyph
MOVE_PATTERN: Final[re.Pattern] = re.compile(
    r"^([NBRQK]?)([a-h1-9]{0,4})(x?)([a-h1-9]{2})(=?)([NBRQK]?)([+#]?)([?!]{0,2})$"
)
CASTLING_PATTERN: Final[re.Pattern] = re.compile(r"^(O-O(?:-O)?)([+#]?)([?!]{0,2})$")

KINGSIDE_CASTLING: Final[str] = "O-O"

# --- Symbol Tables ---
PIECE_LETTERS: Final[Dict[str, Piece]] = {
    chess.piece_symbol(piece_type).upper(): Piece(piece_type)
    for piece_type in chess.PIECE_TYPES
    if piece_type != chess.PAWN
}

CHECK_SUFFIXES: Final[Dict[str, CheckState]] = {
    "": CheckState.NONE,
    "+": CheckState.CHECK,
    "#": CheckState.MATE,
}

ANNOTATION_GLYPHS: Final[Dict[str, Annotation]] = {
    "": Annotation.NONE,
    "!": Annotation.GOOD,
    "?": Annotation.MISTAKE,
    "!!": Annotation.BRILLIANT,
    "??": Annotation.BLUNDER,
    "!?": Annotation.SPECULATIVE,
    "?!": Annotation.DUBIOUS,
}


def piece_from_letter(letter: str) -> Piece:
    """Maps a SAN piece letter to a Piece; the empty letter is a pawn."""
    if letter == "":
        return Piece.PAWN
    try:
        return PIECE_LETTERS[letter]
    except KeyError:
        raise MalformedMoveError(f"Unrecognized piece: {letter!r}") from None


def promotion_from_letter(letter: str) -> Optional[Piece]:
    """Maps a promotion piece letter to a Piece; the empty letter means no promotion."""
    if letter == "":
        return None
    try:
        return PIECE_LETTERS[letter]
    except KeyError:
        raise MalformedMoveError(f"Unrecognized promotion piece: {letter!r}") from None


def check_from_suffix(suffix: str) -> CheckState:
    try:
        return CHECK_SUFFIXES[suffix]
    except KeyError:
        raise MalformedMoveError(f"Unrecognized check flag: {suffix!r}") from None


def annotation_from_glyph(glyph: str) -> Annotation:
    """
    Maps a `!`/`?` glyph sequence to an Annotation.

    Sequences outside the table map to `Annotation.UNRECOGNIZED` rather than
    failing, so the move is kept and the glyph is visibly marked.
    """
    annotation = ANNOTATION_GLYPHS.get(glyph)
    if annotation is None:
        logger.debug(f"Unrecognized annotation glyph {glyph!r}.")
        return Annotation.UNRECOGNIZED
    return annotation


def parse_castling(token: str, move_count: int) -> Optional[CastlingMove]:
    """
    Parses a castling token. White is to move when `move_count` is even.

    Returns None if the token is not a castling move.
    """
    match = CASTLING_PATTERN.match(token)
    if not match:
        return None
    castle, check_suffix, glyph = match.groups()
    return CastlingMove(
        kingside=castle == KINGSIDE_CASTLING,
        white=move_count % 2 == 0,
        check=check_from_suffix(check_suffix),
        annotation=annotation_from_glyph(glyph),
    )


def parse_standard(token: str) -> Optional[StandardMove]:
    """
    Parses a non-castling SAN token.

    Returns None if the token does not fit the move pattern.

    Raises:
        MalformedMoveError: If the disambiguation is longer than the
                            destination, or a promotion marker and
                            promotion piece do not come together.
    """
    match = MOVE_PATTERN.match(token)
    if not match:
        return None
    (piece_letter, disambiguation, capture, destination,
     promotion_marker, promotion_letter, check_suffix, glyph) = match.groups()

    if len(disambiguation) > len(destination):
        raise MalformedMoveError(f"Disambiguation longer than destination in {token!r}")
    if len(promotion_marker) != len(promotion_letter):
        raise MalformedMoveError(f"Promotion marker without matching piece in {token!r}")

    return StandardMove(
        piece=piece_from_letter(piece_letter),
        disambiguation=disambiguation,
        is_capture=capture == "x",
        destination=destination,
        promotion=promotion_from_letter(promotion_letter),
        check=check_from_suffix(check_suffix),
        annotation=annotation_from_glyph(glyph),
    )


def parse_token(token: str, move_count: int) -> ParsedMove:
    """
    Classifies one whitespace-delimited movetext token.

    Args:
        token: The token, without surrounding whitespace.
        move_count: Number of moves already parsed in this game; used to
                    decide which side castles.

    Returns:
        A CastlingMove, a StandardMove, or NotAMove for anything else.
    """
    castling = parse_castling(token, move_count)
    if castling is not None:
        return castling
    standard = parse_standard(token)
    if standard is not None:
        return standard
    return NotAMove(token)
