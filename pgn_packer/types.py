# pgn_packer_project/pgn_packer/types.py
"""
A central module for shared data structures and type definitions.

Enumerations carry the numeric codes that end up in the packed output, so
their values are part of the binary contract and must not be renumbered.
"""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Protocol, Union

import chess


# --- Enumerations ---
class Piece(IntEnum):
    """Piece types, numbered exactly like python-chess piece types (1..6)."""
    PAWN = chess.PAWN
    KNIGHT = chess.KNIGHT
    BISHOP = chess.BISHOP
    ROOK = chess.ROOK
    QUEEN = chess.QUEEN
    KING = chess.KING


class CheckState(IntEnum):
    """Check suffix of a move. Check and mate are mutually exclusive."""
    NONE = 0
    CHECK = 1
    MATE = 2


class Annotation(IntEnum):
    """Move-quality glyph attached to a SAN token."""
    NONE = 0
    GOOD = 1          # !
    MISTAKE = 2       # ?
    BRILLIANT = 3     # !!
    BLUNDER = 4       # ??
    SPECULATIVE = 5   # !?
    DUBIOUS = 6       # ?!
    UNRECOGNIZED = 7  # sentinel: fills the 3-bit field, never a real glyph


class GameResult(IntEnum):
    WHITE_WIN = 0
    BLACK_WIN = 1
    DRAW = 2
    UNFINISHED = 255


class Termination(IntEnum):
    NORMAL = 0
    TIME_FORFEIT = 1
    ABANDONED = 2
    RULES_INFRACTION = 3
    UNTERMINATED = 4


# --- Parsed move variants (output of the move grammar) ---
@dataclass(frozen=True)
class CastlingMove:
    """An `O-O` / `O-O-O` token, before it is turned into a king move."""
    kingside: bool
    white: bool
    check: CheckState = CheckState.NONE
    annotation: Annotation = Annotation.NONE


@dataclass(frozen=True)
class StandardMove:
    """A SAN token decomposed into its grammatical parts."""
    piece: Piece
    disambiguation: str
    is_capture: bool
    destination: str
    promotion: Optional[Piece] = None
    check: CheckState = CheckState.NONE
    annotation: Annotation = Annotation.NONE


@dataclass(frozen=True)
class NotAMove:
    """A movetext token that is not a move (move number, result, ellipsis...)."""
    token: str


ParsedMove = Union[CastlingMove, StandardMove, NotAMove]


# --- Annotation samples ---
@dataclass(frozen=True)
class ClockSample:
    """Remaining clock time from a `[%clk H:MM:SS]` comment."""
    hours: int
    minutes: int
    seconds: int


@dataclass(frozen=True)
class EvalSample:
    """An engine evaluation. Exactly one of the two values is meaningful."""
    mate_in: int = 0
    advantage: float = 0.0


# --- Per-move and per-game records ---
@dataclass(frozen=True)
class MoveRecord:
    """
    One move recognized in the movetext.

    Coordinate fields hold Coordinate Codec values: 0 means "not given",
    1..8 map to files a..h or ranks 1..8. Destination codes are never 0.
    """
    destination_file: int
    destination_rank: int
    piece: Piece
    disambiguation_file: int = 0
    disambiguation_rank: int = 0
    is_capture: bool = False
    check: CheckState = CheckState.NONE
    promotion: Optional[Piece] = None
    annotation: Annotation = Annotation.NONE
    clock: Optional[ClockSample] = None
    evaluation: Optional[EvalSample] = None


@dataclass
class GameHeader:
    """Typed game metadata. Every field defaults to its 'unknown' value."""
    year: int = 0
    month: int = 0
    day: int = 0
    time_control_main: int = 0
    time_control_increment: int = 0
    white_rating: int = 0
    black_rating: int = 0
    white_rating_diff: int = 0
    black_rating_diff: int = 0
    eco_category: int = 0
    eco_subcategory: int = 0
    result: GameResult = GameResult.UNFINISHED
    termination: Termination = Termination.NORMAL
    site: Optional[str] = None
    white: Optional[str] = None
    black: Optional[str] = None


@dataclass(frozen=True)
class MovetextData:
    """Everything extracted from one movetext line."""
    moves: List[MoveRecord] = field(default_factory=list)
    square_words: List[int] = field(default_factory=list)
    metadata_words: List[int] = field(default_factory=list)
    clocks: List[ClockSample] = field(default_factory=list)
    evaluations: List[EvalSample] = field(default_factory=list)
    eval_available: bool = False


@dataclass(frozen=True)
class GameRecord:
    """
    The unit handed to a sink: header plus the move and annotation sequences.

    `square_words` and `metadata_words` are parallel to `moves`. The game-level
    `clocks` and `evaluations` keep encounter order and may be shorter than
    `moves`; use `MoveRecord.clock` / `MoveRecord.evaluation` for per-move access.
    """
    header: GameHeader
    moves: List[MoveRecord]
    square_words: List[int]
    metadata_words: List[int]
    clocks: List[ClockSample]
    evaluations: List[EvalSample]
    eval_available: bool

    @classmethod
    def from_parts(cls, header: GameHeader, movetext: MovetextData) -> "GameRecord":
        return cls(
            header=header,
            moves=movetext.moves,
            square_words=movetext.square_words,
            metadata_words=movetext.metadata_words,
            clocks=movetext.clocks,
            evaluations=movetext.evaluations,
            eval_available=movetext.eval_available,
        )


# --- Protocols ---
class GameSink(Protocol):
    """
    A protocol for anything that consumes converted games.
    The pipeline hands every completed GameRecord to a sink and never
    retains it afterwards.
    """
    def write(self, record: GameRecord) -> None:
        """Accepts one completed game."""
        ...

    def close(self) -> None:
        """Flushes any buffered games and releases resources."""
        ...


class ProgressReporter(Protocol):
    """
    A protocol defining the interface for reporting progress.
    This allows the pipeline to report progress without being tied
    to a specific UI implementation like tqdm.
    """
    def update(self, n: int = 1) -> None:
        """Updates the progress by n steps."""
        ...

    def set_description(self, desc: str) -> None:
        """Sets the description text for the current task."""
        ...

    def close(self) -> None:
        """Closes or finalizes the progress display."""
        ...
