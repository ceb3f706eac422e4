# pgn_packer_project/pgn_packer/output/chunk_writer.py
"""
Writes converted games to numbered, compressed parquet chunk files.

Games are buffered and flushed every `games_per_chunk` games to
`{output_prefix}_{k:06d}.parquet`. Packed move words are stored as
`list<uint16>` columns and header fields use their exact storage widths, so
the files stay compact and can be scanned column by column.
"""
import logging
import os
from typing import Any, Dict, List, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from pgn_packer.config import settings
from pgn_packer.exceptions import ChunkWriteError
from pgn_packer.types import GameRecord

logger = logging.getLogger(settings.APP_NAME + ".ChunkWriter")

CHUNK_SCHEMA: pa.Schema = pa.schema([
    ("year", pa.uint16()),
    ("month", pa.uint8()),
    ("day", pa.uint8()),
    ("time_control_main", pa.uint16()),
    ("time_control_increment", pa.uint8()),
    ("white_rating", pa.uint16()),
    ("black_rating", pa.uint16()),
    ("white_diff", pa.int16()),
    ("black_diff", pa.int16()),
    ("eco_category", pa.uint8()),
    ("eco_subcategory", pa.uint8()),
    ("result", pa.uint8()),
    ("termination", pa.uint8()),
    ("site", pa.string()),
    ("white", pa.string()),
    ("black", pa.string()),
    ("moves", pa.list_(pa.uint16())),
    ("move_metadata", pa.list_(pa.uint16())),
    ("clock_hours", pa.list_(pa.uint8())),
    ("clock_minutes", pa.list_(pa.uint8())),
    ("clock_seconds", pa.list_(pa.uint8())),
    ("eval_mate_in", pa.list_(pa.int16())),
    ("eval_advantage", pa.list_(pa.float32())),
    ("eval_available", pa.bool_()),
])


def game_to_row(record: GameRecord) -> Dict[str, Any]:
    """Flattens a GameRecord into one row matching CHUNK_SCHEMA."""
    header = record.header
    return {
        "year": header.year,
        "month": header.month,
        "day": header.day,
        "time_control_main": header.time_control_main,
        "time_control_increment": header.time_control_increment,
        "white_rating": header.white_rating,
        "black_rating": header.black_rating,
        "white_diff": header.white_rating_diff,
        "black_diff": header.black_rating_diff,
        "eco_category": header.eco_category,
        "eco_subcategory": header.eco_subcategory,
        "result": int(header.result),
        "termination": int(header.termination),
        "site": header.site,
        "white": header.white,
        "black": header.black,
        "moves": record.square_words,
        "move_metadata": record.metadata_words,
        "clock_hours": [clock.hours for clock in record.clocks],
        "clock_minutes": [clock.minutes for clock in record.clocks],
        "clock_seconds": [clock.seconds for clock in record.clocks],
        "eval_mate_in": [evaluation.mate_in for evaluation in record.evaluations],
        "eval_advantage": [evaluation.advantage for evaluation in record.evaluations],
        "eval_available": record.eval_available,
    }


class ChunkWriter:
    """
    A GameSink that batches games by count into parquet chunk files.

    Usage:
        with ChunkWriter("out/games", games_per_chunk=10000) as writer:
            for record in framer:
                writer.write(record)
        # The final partial chunk is flushed on exit, even after an error.
    """

    def __init__(
        self,
        output_prefix: str,
        games_per_chunk: int = settings.DEFAULT_GAMES_PER_CHUNK,
        compression: str = settings.DEFAULT_CHUNK_COMPRESSION,
    ):
        """
        Initializes the ChunkWriter.

        Args:
            output_prefix: Path prefix of the chunk files; the chunk counter
                           and file suffix are appended to it.
            games_per_chunk: Maximum number of games per chunk file.
            compression: Parquet compression codec ("none" disables it).
        """
        if games_per_chunk < 1:
            raise ValueError(f"games_per_chunk must be positive, got {games_per_chunk}")
        self.output_prefix: str = output_prefix
        self.games_per_chunk: int = games_per_chunk
        self.compression: str = compression
        self.chunk_paths: List[str] = []
        self.games_written: int = 0
        self._rows: List[Dict[str, Any]] = []
        logger.debug(f"ChunkWriter initialized with prefix '{output_prefix}', {games_per_chunk} games per chunk.")

    def __enter__(self) -> "ChunkWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _chunk_path(self, index: int) -> str:
        return f"{self.output_prefix}_{index:0{settings.CHUNK_INDEX_WIDTH}d}{settings.CHUNK_FILE_SUFFIX}"

    def write(self, record: GameRecord) -> None:
        """Buffers one game and flushes the chunk once it is full."""
        self._rows.append(game_to_row(record))
        if len(self._rows) >= self.games_per_chunk:
            self.flush()

    def flush(self) -> Optional[str]:
        """
        Writes all buffered games to the next chunk file.

        Returns:
            The path of the written chunk, or None if nothing was buffered.

        Raises:
            ChunkWriteError: If the table cannot be built or the file cannot
                             be written.
        """
        if not self._rows:
            return None

        path = self._chunk_path(len(self.chunk_paths))
        try:
            if (output_dir := os.path.dirname(path)):
                os.makedirs(output_dir, exist_ok=True)
            table = pa.Table.from_pylist(self._rows, schema=CHUNK_SCHEMA)
            pq.write_table(table, path, compression=self.compression)
        except (pa.ArrowException, IOError, OSError) as e:
            raise ChunkWriteError(f"Failed to write chunk '{path}': {e}") from e

        logger.info(f"Wrote {len(self._rows)} games to '{path}'.")
        self.games_written += len(self._rows)
        self.chunk_paths.append(path)
        self._rows = []
        return path

    def close(self) -> None:
        """Flushes the final partial chunk."""
        self.flush()
