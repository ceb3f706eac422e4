# pgn_packer_project/pgn_packer/statistics.py
"""
Manages statistics tracking for the PGN Packer application.

This module provides the StatisticsTracker class, a centralized component
for aggregating and reporting metrics from a conversion run.
"""
import logging
from collections import Counter
from typing import List

from pgn_packer.config import settings
from pgn_packer.types import GameRecord

logger = logging.getLogger(settings.APP_NAME + ".Statistics")


class StatisticsTracker:
    """
    A stateful class to aggregate and report statistics for a conversion run.
    """

    def __init__(self):
        """Initializes the StatisticsTracker with all counters set to zero."""
        self.stats: Counter[str] = Counter()
        self.chunk_paths: List[str] = []
        logger.debug("StatisticsTracker initialized.")

    def reset(self) -> None:
        """Resets all statistics to their initial state for a new run."""
        self.stats.clear()
        self.chunk_paths = []
        logger.debug("StatisticsTracker has been reset.")

    def add_game_converted(self, record: GameRecord) -> None:
        """Counts a converted game and the moves and annotations it carries."""
        self.stats["games_converted"] += 1
        self.stats["moves_encoded"] += len(record.moves)
        self.stats["clock_samples"] += len(record.clocks)
        self.stats["eval_samples"] += len(record.evaluations)
        if record.eval_available:
            self.stats["games_with_evals"] += 1

    def add_game_skipped(self, reason: str) -> None:
        """Increments the counter for skipped games, categorized by reason."""
        self.stats["games_skipped_total"] += 1
        self.stats[f"skipped_{reason}"] += 1

    def set_chunk_paths(self, paths: List[str]) -> None:
        """Stores the paths of the chunk files written during the run."""
        self.chunk_paths = list(paths)

    def log_summary(self) -> None:
        """
        Logs a formatted summary of all collected statistics for the run.
        """
        logger.info("--- Conversion Run Summary ---")

        display_order = [
            ("games_converted", "Games Converted"),
            ("moves_encoded", "Moves Encoded"),
            ("clock_samples", "Clock Samples"),
            ("eval_samples", "Evaluation Samples"),
            ("games_with_evals", "Games With Evaluations"),
            ("games_skipped_total", "Total Games Skipped"),
            ("skipped_malformed_header", "  - Skipped (Malformed Header)"),
            ("skipped_malformed_move", "  - Skipped (Malformed Move)"),
            ("skipped_malformed_annotation", "  - Skipped (Malformed Annotation)"),
        ]

        for key, display_text in display_order:
            if key in self.stats:
                logger.info(f"{display_text}: {self.stats[key]}")

        logger.info(f"Chunk Files Written: {len(self.chunk_paths)}")
        for path in self.chunk_paths:
            logger.debug(f"  - {path}")
        logger.info("---")
