# tests/test_coordinates.py
"""
Unit tests for the Coordinate Codec.
"""
import pytest

from pgn_packer.exceptions import MalformedMoveError
from pgn_packer.movetext.coordinates import (
    NONE_CODE,
    decode_file,
    decode_rank,
    encode_file,
    encode_rank,
    split_square,
)


@pytest.mark.parametrize("letter, code", [("a", 1), ("b", 2), ("c", 3), ("d", 4),
                                          ("e", 5), ("f", 6), ("g", 7), ("h", 8), ("", 0)])
def test_encode_file(letter, code):
    assert encode_file(letter) == code
    assert decode_file(code) == letter


@pytest.mark.parametrize("digit, code", [(str(n), n) for n in range(1, 9)] + [("", 0)])
def test_encode_rank(digit, code):
    assert encode_rank(digit) == code
    assert decode_rank(code) == digit


@pytest.mark.parametrize("bad", ["i", "z", "A", "1"])
def test_encode_file_rejects_unknown_letters(bad):
    with pytest.raises(MalformedMoveError, match="file"):
        encode_file(bad)


@pytest.mark.parametrize("bad", ["0", "9", "a"])
def test_encode_rank_rejects_unknown_digits(bad):
    with pytest.raises(MalformedMoveError, match="rank"):
        encode_rank(bad)


@pytest.mark.parametrize("fragment, expected", [
    ("", (0, 0)),
    ("e", (5, 0)),
    ("4", (0, 4)),
    ("e4", (5, 4)),
    ("h8", (8, 8)),
    ("a1", (1, 1)),
])
def test_split_square(fragment, expected):
    assert split_square(fragment) == expected


@pytest.mark.parametrize("fragment", ["4e", "ee", "44", "e9", "i4", "e44"])
def test_split_square_rejects_malformed_fragments(fragment):
    with pytest.raises(MalformedMoveError):
        split_square(fragment)

