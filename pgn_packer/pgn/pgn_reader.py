# pgn_packer_project/pgn_packer/pgn/pgn_reader.py
"""
Opens PGN input files as text line streams.

Plain `.pgn` files, bzip2 archives (`.bz2`) and Zstandard archives (`.zst`,
the format of the Lichess database dumps) are supported. Archives are
decompressed on the fly, so the whole file is never held in memory.
"""
import bz2
import io
import logging
import os
from contextlib import contextmanager
from typing import Iterator, TextIO

import zstandard as zstd

from pgn_packer.config import settings
from pgn_packer.exceptions import PgnInputError

logger = logging.getLogger(settings.APP_NAME + ".PGNReader")

ZSTD_SUFFIX = ".zst"
BZIP2_SUFFIX = ".bz2"

INPUT_ERRORS = (OSError, EOFError, zstd.ZstdError)


def _open_text(input_pgn_path: str) -> TextIO:
    encoding = settings.INPUT_ENCODING
    if input_pgn_path.endswith(ZSTD_SUFFIX):
        logger.info(f"Reading Zstandard-compressed PGN '{input_pgn_path}'.")
        fh = open(input_pgn_path, "rb")
        try:
            reader = zstd.ZstdDecompressor().stream_reader(fh, closefd=True)
        except zstd.ZstdError:
            fh.close()
            raise
        return io.TextIOWrapper(reader, encoding=encoding, errors="replace", newline="\n")
    if input_pgn_path.endswith(BZIP2_SUFFIX):
        logger.info(f"Reading bzip2-compressed PGN '{input_pgn_path}'.")
        return bz2.open(input_pgn_path, "rt", encoding=encoding, errors="replace")
    logger.info(f"Reading PGN '{input_pgn_path}'.")
    return open(input_pgn_path, "r", encoding=encoding, errors="replace")


def _read_lines(text: TextIO, input_pgn_path: str) -> Iterator[str]:
    """Yields the lines of `text`, wrapping read and decompression failures."""
    try:
        yield from text
    except INPUT_ERRORS as e:
        raise PgnInputError(f"Cannot read PGN file '{input_pgn_path}': {e}") from e


@contextmanager
def open_pgn(input_pgn_path: str) -> Iterator[Iterator[str]]:
    """
    Context manager yielding the lines of a PGN file.

    Only failures of the input itself become PgnInputError; exceptions raised
    by the caller inside the `with` block propagate unchanged.

    Raises:
        PgnInputError: If the file does not exist or cannot be opened, read
                       or decompressed.
    """
    if not os.path.exists(input_pgn_path):
        raise PgnInputError(f"Input PGN file not found: {input_pgn_path}")

    try:
        text = _open_text(input_pgn_path)
    except INPUT_ERRORS as e:
        raise PgnInputError(f"Cannot open PGN file '{input_pgn_path}': {e}") from e

    with text:
        yield _read_lines(text, input_pgn_path)
