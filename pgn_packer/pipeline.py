# pgn_packer_project/pgn_packer/pipeline.py
"""
The conversion pipeline for the PGN Packer application.

Streams games from a PGN file through the Game Framer and hands each
completed GameRecord to a chunked sink. By default any malformed game
aborts the run; chunks already written are kept. With `skip_invalid`,
games with malformed headers, moves or annotations are logged and skipped.
Framing errors always abort, since the stream position can no longer be
trusted.
"""
import logging
import threading
import time
from typing import Dict, List, Optional, Type

from tqdm import tqdm

from pgn_packer.config import settings
from pgn_packer.exceptions import (
    GameParseError,
    MalformedAnnotationError,
    MalformedHeaderError,
    MalformedMoveError,
)
from pgn_packer.output.chunk_writer import ChunkWriter
from pgn_packer.pgn.game_framer import GameFramer
from pgn_packer.pgn.pgn_reader import open_pgn
from pgn_packer.statistics import StatisticsTracker
from pgn_packer.types import GameSink, ProgressReporter
from pgn_packer.utils.signal_manager import SignalManager

logger = logging.getLogger(settings.APP_NAME + ".Pipeline")

SKIPPABLE_ERRORS: Dict[Type[GameParseError], str] = {
    MalformedHeaderError: "malformed_header",
    MalformedMoveError: "malformed_move",
    MalformedAnnotationError: "malformed_annotation",
}


# --- TQDM Adapter for our ProgressReporter Protocol ---
class TqdmProgressReporter:
    """An adapter that makes a tqdm progress bar conform to our ProgressReporter protocol."""
    def __init__(self, pbar: tqdm):
        self._pbar = pbar

    def update(self, n: int = 1) -> None:
        self._pbar.update(n)

    def set_description(self, desc: str) -> None:
        self._pbar.set_description_str(desc)

    def close(self) -> None:
        self._pbar.close()


class ConversionPipeline:
    """
    Orchestrates a full conversion from a PGN file to parquet chunk files.
    """

    def __init__(
        self,
        games_per_chunk: int = settings.DEFAULT_GAMES_PER_CHUNK,
        compression: str = settings.DEFAULT_CHUNK_COMPRESSION,
        skip_invalid: bool = False,
        limit: Optional[int] = None,
        show_progress: bool = True,
    ):
        """
        Initializes the pipeline.

        Args:
            games_per_chunk: Number of games per output chunk file.
            compression: Parquet compression codec for the chunks.
            skip_invalid: Skip games with malformed content instead of aborting.
            limit: Stop after converting this many games (None for no limit).
            show_progress: Whether to draw a tqdm progress bar.
        """
        self.games_per_chunk = games_per_chunk
        self.compression = compression
        self.skip_invalid = skip_invalid
        self.limit = limit
        self.show_progress = show_progress
        self.stats_tracker = StatisticsTracker()
        self.shutdown_event = threading.Event()

    def run(self, input_pgn_path: str, output_prefix: str) -> List[str]:
        """
        Executes a conversion run.

        Returns:
            The paths of the chunk files written.

        Raises:
            PgnInputError: If the input cannot be read.
            GameParseError: On a malformed game (unless skipped) or a framing error.
            ChunkWriteError: If an output chunk cannot be written.
        """
        start_time = time.time()
        self.stats_tracker.reset()
        self.shutdown_event.clear()

        logger.info(f"Converting '{input_pgn_path}' to chunks with prefix '{output_prefix}'...")
        writer = ChunkWriter(output_prefix, self.games_per_chunk, self.compression)
        try:
            with SignalManager(self.shutdown_event), open_pgn(input_pgn_path) as lines, \
                 tqdm(unit=" games", disable=not self.show_progress) as pbar:
                self.convert_stream(GameFramer(lines), writer, TqdmProgressReporter(pbar))
        finally:
            # Games already handed to the sink are kept even when the run aborts.
            writer.close()
            self.stats_tracker.set_chunk_paths(writer.chunk_paths)
            logger.info(f"Conversion run finished in {time.time() - start_time:.2f} seconds.")
            self.stats_tracker.log_summary()

        return writer.chunk_paths

    def convert_stream(self, framer: GameFramer, sink: GameSink, progress: ProgressReporter) -> int:
        """
        Moves games from the framer to the sink until the input ends, the
        limit is reached or a shutdown is requested.

        Returns:
            The number of games handed to the sink.
        """
        converted = 0
        progress.set_description("Converting")
        while not self.shutdown_event.is_set():
            if self.limit is not None and converted >= self.limit:
                logger.info(f"Reached the limit of {self.limit} games. Stopping early.")
                break

            try:
                record = framer.read_next_game()
            except tuple(SKIPPABLE_ERRORS) as e:
                if not self.skip_invalid:
                    raise
                logger.warning(f"Skipping malformed game: {e}")
                self.stats_tracker.add_game_skipped(SKIPPABLE_ERRORS[type(e)])
                continue

            if record is None:
                break

            sink.write(record)
            self.stats_tracker.add_game_converted(record)
            progress.update()
            converted += 1
            if converted % settings.PROGRESS_LOG_INTERVAL == 0:
                logger.info(f"Converted {converted} games...")

        if self.shutdown_event.is_set():
            logger.warning(f"Shutdown requested; stopped after {converted} games.")
        return converted
