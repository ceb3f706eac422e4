# pgn_packer_project/pgn_packer/movetext/encoder.py
"""
Move Encoder: packs a MoveRecord into two 16-bit words and unpacks them again.

Square word:   [0:4) disambiguation file  [4:8) disambiguation rank
               [8:12) destination file    [12:16) destination rank
Metadata word: [0:3) piece  [3] capture  [4:6) check state
               [6:9) annotation  [9:13) promotion piece

The layout is a stable, bit-exact contract. Encoding and decoding both read
the field tables below and nothing else.
"""
from dataclasses import dataclass
from typing import Final, Tuple

from pgn_packer.movetext.coordinates import split_square
from pgn_packer.types import (
    Annotation,
    CastlingMove,
    CheckState,
    MoveRecord,
    NotAMove,
    ParsedMove,
    Piece,
    StandardMove,
)

WORD_BITS: Final[int] = 16


@dataclass(frozen=True)
class BitField:
    """A named, fixed-position slice of a packed word."""
    name: str
    offset: int
    width: int

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def pack(self, value: int) -> int:
        if not 0 <= value <= self.mask:
            raise ValueError(f"Value {value} does not fit the {self.width}-bit field '{self.name}'")
        return value << self.offset

    def unpack(self, word: int) -> int:
        return (word >> self.offset) & self.mask


# --- Square Word Layout ---
DISAMBIGUATION_FILE: Final[BitField] = BitField("disambiguation_file", 0, 4)
DISAMBIGUATION_RANK: Final[BitField] = BitField("disambiguation_rank", 4, 4)
DESTINATION_FILE: Final[BitField] = BitField("destination_file", 8, 4)
DESTINATION_RANK: Final[BitField] = BitField("destination_rank", 12, 4)

SQUARE_WORD_FIELDS: Final[Tuple[BitField, ...]] = (
    DISAMBIGUATION_FILE, DISAMBIGUATION_RANK, DESTINATION_FILE, DESTINATION_RANK,
)

# --- Metadata Word Layout ---
PIECE: Final[BitField] = BitField("piece", 0, 3)
CAPTURE: Final[BitField] = BitField("capture", 3, 1)
CHECK: Final[BitField] = BitField("check", 4, 2)
ANNOTATION: Final[BitField] = BitField("annotation", 6, 3)
PROMOTION: Final[BitField] = BitField("promotion", 9, 4)

METADATA_WORD_FIELDS: Final[Tuple[BitField, ...]] = (PIECE, CAPTURE, CHECK, ANNOTATION, PROMOTION)

NO_PROMOTION: Final[int] = 0


def build_move_record(parsed: ParsedMove) -> MoveRecord:
    """
    Turns a parsed token into a MoveRecord with coordinate codes.

    Castling becomes a king move from e1/e8 (recorded as the disambiguation
    square) to g1/g8 or c1/c8.

    Raises:
        ValueError: If given NotAMove.
        MalformedMoveError: If a square fragment holds an off-board component.
    """
    if isinstance(parsed, CastlingMove):
        rank = "1" if parsed.white else "8"
        from_file, from_rank = split_square("e" + rank)
        to_file, to_rank = split_square(("g" if parsed.kingside else "c") + rank)
        return MoveRecord(
            destination_file=to_file,
            destination_rank=to_rank,
            piece=Piece.KING,
            disambiguation_file=from_file,
            disambiguation_rank=from_rank,
            check=parsed.check,
            annotation=parsed.annotation,
        )
    if isinstance(parsed, StandardMove):
        from_file, from_rank = split_square(parsed.disambiguation)
        to_file, to_rank = split_square(parsed.destination)
        return MoveRecord(
            destination_file=to_file,
            destination_rank=to_rank,
            piece=parsed.piece,
            disambiguation_file=from_file,
            disambiguation_rank=from_rank,
            is_capture=parsed.is_capture,
            check=parsed.check,
            promotion=parsed.promotion,
            annotation=parsed.annotation,
        )
    if isinstance(parsed, NotAMove):
        raise ValueError(f"Token {parsed.token!r} is not a move")
    raise TypeError(f"Unexpected parsed move type: {type(parsed).__name__}")


def encode_square_word(record: MoveRecord) -> int:
    return (
        DISAMBIGUATION_FILE.pack(record.disambiguation_file)
        | DISAMBIGUATION_RANK.pack(record.disambiguation_rank)
        | DESTINATION_FILE.pack(record.destination_file)
        | DESTINATION_RANK.pack(record.destination_rank)
    )


def encode_metadata_word(record: MoveRecord) -> int:
    promotion = NO_PROMOTION if record.promotion is None else int(record.promotion)
    return (
        PIECE.pack(int(record.piece))
        | CAPTURE.pack(int(record.is_capture))
        | CHECK.pack(int(record.check))
        | ANNOTATION.pack(int(record.annotation))
        | PROMOTION.pack(promotion)
    )


def encode_move(record: MoveRecord) -> Tuple[int, int]:
    """Returns the (square_word, metadata_word) pair for a move."""
    return encode_square_word(record), encode_metadata_word(record)


def decode_move(square_word: int, metadata_word: int) -> MoveRecord:
    """
    Rebuilds a MoveRecord (without clock or evaluation) from its packed words.

    Raises:
        ValueError: If a word is wider than 16 bits or a field holds a code
                    with no meaning (e.g. piece 0, check state 3).
    """
    for word in (square_word, metadata_word):
        if not 0 <= word < (1 << WORD_BITS):
            raise ValueError(f"Packed word {word:#x} is not a {WORD_BITS}-bit value")

    coordinates = {f.name: f.unpack(square_word) for f in SQUARE_WORD_FIELDS}
    for name, code in coordinates.items():
        if code > 8:
            raise ValueError(f"Field '{name}' holds out-of-board code {code}")

    promotion_code = PROMOTION.unpack(metadata_word)
    return MoveRecord(
        piece=Piece(PIECE.unpack(metadata_word)),
        is_capture=bool(CAPTURE.unpack(metadata_word)),
        check=CheckState(CHECK.unpack(metadata_word)),
        annotation=Annotation(ANNOTATION.unpack(metadata_word)),
        promotion=None if promotion_code == NO_PROMOTION else Piece(promotion_code),
        **coordinates,
    )
