# tests/conftest.py
"""
Shared fixtures for the PGN Packer test suite.
"""
import io
from pathlib import Path
from typing import Callable, List

import pytest

from pgn_packer.pgn.game_framer import GameFramer
from pgn_packer.types import GameRecord

GAME_BLITZ = """[Event "Rated Blitz game"]
[Site "https://lichess.org/abcd1234"]
[White "alice"]
[Black "bob"]
[Result "1-0"]
[UTCDate "2023.01.05"]
[UTCTime "12:00:00"]
[WhiteElo "1500"]
[BlackElo "?"]
[WhiteRatingDiff "+6"]
[BlackRatingDiff "-6"]
[ECO "C20"]
[Opening "King's Pawn Game"]
[TimeControl "180+2"]
[Termination "Normal"]

1. e4 { [%eval 0.2] [%clk 0:03:00] } 1... e5 { [%eval 0.25] [%clk 0:03:00] } 2. Qh5 { [%eval -0.5] [%clk 0:02:58] } 2... Nc6 3. Bc4 Nf6?? 4. Qxf7# 1-0

"""

GAME_BULLET = """[Event "Rated Bullet game"]
[Site "https://lichess.org/efgh5678"]
[White "carol"]
[Black "dave"]
[Result "0-1"]
[UTCDate "2023.01.06"]
[WhiteElo "1800"]
[BlackElo "1850"]
[ECO "?"]
[TimeControl "60+0"]
[Termination "Time forfeit"]

1. d4 d5 2. c4 dxc4 3. e3 b5 4. a4 c6 5. axb5 cxb5 6. Qf3 O-O-O?! 0-1

"""

GAME_CORRESPONDENCE = """[Event "Casual Correspondence game"]
[Site "https://lichess.org/ijkl9012"]
[Result "1/2-1/2"]
[UTCDate "2023.02.10"]
[TimeControl "-"]
[Termination "Normal"]

1. e4 { [%eval 0.3] } 1... c5 { [%eval #-4] } 2. O-O { [%eval #3] } 1/2-1/2

"""

GAME_BAD_RESULT = """[Event "Rated Blitz game"]
[Result "2-0"]

1. e4 e5 1-0

"""


@pytest.fixture
def sample_pgn_text() -> str:
    """Three well-formed games in Lichess export layout."""
    return GAME_BLITZ + GAME_BULLET + GAME_CORRESPONDENCE


@pytest.fixture
def pgn_with_bad_game() -> str:
    """A good game, a game with an unknown result string, then another good game."""
    return GAME_BLITZ + GAME_BAD_RESULT + GAME_CORRESPONDENCE


@pytest.fixture
def sample_records(sample_pgn_text: str) -> List[GameRecord]:
    """The sample games run through the framer."""
    return list(GameFramer(io.StringIO(sample_pgn_text)))


@pytest.fixture
def write_pgn(tmp_path: Path) -> Callable[[str, str], Path]:
    """Returns a helper that writes PGN text to a file under tmp_path."""
    def _write(text: str, name: str = "games.pgn") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
