# pgn_packer_project/pgn_packer/movetext/movetext_parser.py
"""
Parses one game's movetext line into encoded moves and annotation samples.

This module ties the grammar, the encoder and the annotation extractor
together. Tokens are split on single spaces; tokens inside a comment span go
to the extractor, all others to the move grammar.
"""
import logging
from dataclasses import replace
from typing import List

from pgn_packer.config import settings
from pgn_packer.movetext.annotations import AnnotationExtractor
from pgn_packer.movetext.encoder import build_move_record, encode_move
from pgn_packer.movetext.grammar import parse_token
from pgn_packer.types import MoveRecord, MovetextData, NotAMove

logger = logging.getLogger(settings.APP_NAME + ".MovetextParser")

TOKEN_SEPARATOR = " "


def _attach_pending(moves: List[MoveRecord], extractor: AnnotationExtractor) -> None:
    """Gives the most recent move the clock/eval from the comment that followed it."""
    clock, evaluation = extractor.take_pending()
    if not moves or (clock is None and evaluation is None):
        return
    moves[-1] = replace(moves[-1], clock=clock, evaluation=evaluation)


def parse_movetext(line: str) -> MovetextData:
    """
    Parses a movetext line.

    Args:
        line: The movetext line with surrounding whitespace already removed.

    Returns:
        A MovetextData holding the moves, their packed words and the
        clock/eval samples in encounter order.

    Raises:
        MalformedMoveError: If a move token breaks the move grammar.
        MalformedAnnotationError: If a comment value is out of range.
    """
    extractor = AnnotationExtractor()
    moves: List[MoveRecord] = []
    square_words: List[int] = []
    metadata_words: List[int] = []

    for token in line.split(TOKEN_SEPARATOR):
        extractor.track_braces(token)
        if extractor.in_comment:
            extractor.scan(token)
            continue

        parsed = parse_token(token, len(moves))
        if isinstance(parsed, NotAMove):
            continue

        _attach_pending(moves, extractor)
        record = build_move_record(parsed)
        square_word, metadata_word = encode_move(record)
        moves.append(record)
        square_words.append(square_word)
        metadata_words.append(metadata_word)

    _attach_pending(moves, extractor)

    if extractor.in_comment:
        logger.debug("Movetext ended inside an unterminated comment.")

    return MovetextData(
        moves=moves,
        square_words=square_words,
        metadata_words=metadata_words,
        clocks=extractor.clocks,
        evaluations=extractor.evaluations,
        eval_available=extractor.eval_available,
    )
