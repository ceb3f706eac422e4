# tests/test_encoder.py
"""
Unit tests for the Move Encoder and its bit layout.

Expected words are built from literal bit values, independent of the
encoder's own field tables.
"""
import itertools

import pytest

from pgn_packer.exceptions import MalformedMoveError
from pgn_packer.movetext.encoder import (
    build_move_record,
    decode_move,
    encode_move,
)
from pgn_packer.movetext.grammar import parse_token
from pgn_packer.types import (
    Annotation,
    CastlingMove,
    CheckState,
    MoveRecord,
    NotAMove,
    Piece,
)

PIECE_BITS = {"": 0x001, "N": 0x002, "B": 0x003, "R": 0x004, "Q": 0x005, "K": 0x006}
CAPTURE_BITS = {"": 0x000, "x": 0x008}
CHECK_BITS = {"": 0x000, "+": 0x010, "#": 0x020}
GLYPH_BITS = {"": 0x000, "!": 0x040, "?": 0x080, "!!": 0x0C0, "??": 0x100, "!?": 0x140, "?!": 0x180}
PROMOTION_BITS = {"": 0x000, "=N": 0x400, "=B": 0x600, "=R": 0x800, "=Q": 0xA00, "=K": 0xC00}

# disambiguation fragment -> square-word bits; destination is always c6
DISAMBIGUATION_BITS = {"": 0x00, "b": 0x02, "2": 0x20, "b2": 0x22}
DESTINATION = "c6"
DESTINATION_BITS = 0x6300


def encode_token(token: str, move_count: int = 0):
    return encode_move(build_move_record(parse_token(token, move_count)))


@pytest.mark.parametrize("token, square_word, metadata_word", [
    ("e4", 0x4500, 0x0001),
    ("Nf3", 0x3600, 0x0002),
    ("exd5", 0x5405, 0x0009),
    ("e8=Q+", 0x8500, 0x0A11),
    ("Qh4e1#??", 0x1548, 0x0125),
    ("R1a3!?", 0x3110, 0x0144),
    ("Kxh8", 0x8800, 0x000E),
])
def test_known_encodings(token, square_word, metadata_word):
    assert encode_token(token) == (square_word, metadata_word)


def test_full_grammar_table():
    """Every combination of grammar parts produces the documented bit pattern."""
    combinations = itertools.product(
        PIECE_BITS, DISAMBIGUATION_BITS, CAPTURE_BITS, PROMOTION_BITS, CHECK_BITS, GLYPH_BITS,
    )
    count = 0
    for piece, disambiguation, capture, promotion, check, glyph in combinations:
        token = f"{piece}{disambiguation}{capture}{DESTINATION}{promotion}{check}{glyph}"
        expected_square = DISAMBIGUATION_BITS[disambiguation] | DESTINATION_BITS
        expected_metadata = (PIECE_BITS[piece] | CAPTURE_BITS[capture] | CHECK_BITS[check]
                             | GLYPH_BITS[glyph] | PROMOTION_BITS[promotion])
        assert encode_token(token) == (expected_square, expected_metadata), token
        count += 1
    assert count == 6 * 4 * 2 * 6 * 3 * 7


@pytest.mark.parametrize("token, move_count, square_word", [
    ("O-O", 0, 0x1715),    # e1 -> g1
    ("O-O-O", 0, 0x1315),  # e1 -> c1
    ("O-O", 1, 0x8785),    # e8 -> g8
    ("O-O-O", 3, 0x8385),  # e8 -> c8
])
def test_castling_is_a_king_move_from_the_e_file(token, move_count, square_word):
    assert encode_token(token, move_count) == (square_word, 0x0006)


@pytest.mark.parametrize("suffix, metadata_bits", [
    ("+", 0x010), ("#", 0x020), ("!", 0x040), ("?!", 0x180), ("+??", 0x110),
])
def test_castling_suffix_matches_standard_move_suffix(suffix, metadata_bits):
    _, castling_metadata = encode_token("O-O" + suffix)
    _, standard_metadata = encode_token("Kg1" + suffix)
    assert castling_metadata == 0x0006 | metadata_bits
    assert castling_metadata == standard_metadata


def test_unrecognized_annotation_sentinel_does_not_alias_other_fields():
    record = MoveRecord(destination_file=5, destination_rank=4, piece=Piece.PAWN,
                        annotation=Annotation.UNRECOGNIZED)
    _, metadata_word = encode_move(record)
    assert metadata_word == 0x0001 | 0x01C0
    assert decode_move(0x4500, metadata_word).annotation == Annotation.UNRECOGNIZED


def test_every_square_survives_decode():
    for file_code, rank_code in itertools.product(range(1, 9), repeat=2):
        record = MoveRecord(destination_file=file_code, destination_rank=rank_code,
                            piece=Piece.ROOK, disambiguation_file=file_code)
        decoded = decode_move(*encode_move(record))
        assert (decoded.destination_file, decoded.destination_rank) == (file_code, rank_code)
        assert decoded.disambiguation_file == file_code
        assert decoded.disambiguation_rank == 0


def test_decode_restores_all_fields():
    record = build_move_record(parse_token("Qh4xe1=N#!?", 0))
    assert decode_move(*encode_move(record)) == record
    assert record.promotion == Piece.KNIGHT
    assert record.check == CheckState.MATE


@pytest.mark.parametrize("square_word, metadata_word", [
    (0x4500, 0x0000),   # piece 0
    (0x4500, 0x0007),   # piece 7
    (0x4500, 0x0031),   # check state 3
    (0x4900, 0x0001),   # file code 9
    (0x10000, 0x0001),  # wider than 16 bits
])
def test_decode_rejects_meaningless_words(square_word, metadata_word):
    with pytest.raises(ValueError):
        decode_move(square_word, metadata_word)


def test_off_board_destination_is_fatal():
    with pytest.raises(MalformedMoveError, match="rank"):
        build_move_record(parse_token("Ra9", 0))


def test_not_a_move_cannot_be_built():
    with pytest.raises(ValueError):
        build_move_record(NotAMove("1."))


def test_castling_record_fields():
    record = build_move_record(CastlingMove(kingside=False, white=False))
    assert (record.disambiguation_file, record.disambiguation_rank) == (5, 8)
    assert (record.destination_file, record.destination_rank) == (3, 8)
    assert record.is_capture is False
    assert record.promotion is None
