# tests/test_movetext_parser.py
"""
Tests for parsing whole movetext lines.
"""
import pytest

from pgn_packer.exceptions import MalformedMoveError
from pgn_packer.movetext.movetext_parser import parse_movetext
from pgn_packer.types import ClockSample, EvalSample, Piece


def test_moves_and_annotations():
    data = parse_movetext(
        "1. e4 { [%eval 0.2] [%clk 0:01:30] } e5 { [%clk 0:01:28] } 2. Nf3"
    )

    assert [move.piece for move in data.moves] == [Piece.PAWN, Piece.PAWN, Piece.KNIGHT]
    assert data.square_words == [0x4500, 0x5500, 0x3600]
    assert data.metadata_words == [0x0001, 0x0001, 0x0002]

    assert data.evaluations == [EvalSample(mate_in=0, advantage=0.2)]
    assert data.eval_available is True
    assert data.clocks == [ClockSample(0, 1, 30), ClockSample(0, 1, 28)]


def test_annotations_are_attached_to_the_preceding_move():
    data = parse_movetext(
        "1. e4 { [%eval 0.2] [%clk 0:01:30] } e5 { [%clk 0:01:28] } 2. Nf3"
    )
    e4, e5, nf3 = data.moves

    assert e4.clock == ClockSample(0, 1, 30)
    assert e4.evaluation == EvalSample(advantage=0.2)
    assert e5.clock == ClockSample(0, 1, 28)
    assert e5.evaluation is None
    assert nf3.clock is None
    assert nf3.evaluation is None


def test_comment_before_first_move_stays_game_level():
    data = parse_movetext("{ [%clk 0:05:00] } 1. d4 d5")
    assert data.clocks == [ClockSample(0, 5, 0)]
    assert all(move.clock is None for move in data.moves)


def test_no_annotations():
    data = parse_movetext("1. d4 d5 2. c4 1-0")
    assert len(data.moves) == 3
    assert data.clocks == []
    assert data.evaluations == []
    assert data.eval_available is False


def test_castling_side_follows_move_parity():
    data = parse_movetext("1. e4 e5 2. O-O O-O-O")
    white_castle, black_castle = data.moves[2], data.moves[3]

    assert white_castle.piece == Piece.KING
    assert (white_castle.disambiguation_file, white_castle.disambiguation_rank) == (5, 1)
    assert (white_castle.destination_file, white_castle.destination_rank) == (7, 1)

    assert (black_castle.disambiguation_file, black_castle.disambiguation_rank) == (5, 8)
    assert (black_castle.destination_file, black_castle.destination_rank) == (3, 8)


def test_moves_inside_comments_are_not_parsed():
    data = parse_movetext("1. e4 { e5 } Nf3")
    assert data.square_words == [0x4500, 0x3600]


def test_brace_bearing_token_is_neither_move_nor_comment():
    data = parse_movetext("1. e4 {e5} Nf3 { [%clk 0:01:00] }")
    assert data.square_words == [0x4500, 0x3600]
    assert data.clocks == [ClockSample(0, 1, 0)]


def test_mate_evaluations():
    data = parse_movetext("1. e4 { [%eval #-4] } c5 { [%eval #3] }")
    assert data.evaluations == [EvalSample(mate_in=-4), EvalSample(mate_in=3)]
    assert data.moves[0].evaluation == EvalSample(mate_in=-4)


def test_malformed_move_aborts_the_line():
    with pytest.raises(MalformedMoveError):
        parse_movetext("1. e4 e5 2. Ra9")


def test_empty_movetext():
    data = parse_movetext("")
    assert data.moves == []
