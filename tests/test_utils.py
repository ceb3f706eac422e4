# tests/test_utils.py
"""
Tests for the signal manager, logging setup and run statistics.
"""
import logging
import signal
import threading

import pytest

from pgn_packer.statistics import StatisticsTracker
from pgn_packer.utils.logging_config import TqdmLoggingHandler, setup_logging
from pgn_packer.utils.signal_manager import FORCED_EXIT_CODE, SignalManager


def test_signal_sets_shutdown_event_and_handlers_are_restored():
    original = signal.getsignal(signal.SIGINT)
    event = threading.Event()

    with SignalManager(event) as manager:
        assert signal.getsignal(signal.SIGINT) == manager._signal_handler
        manager._signal_handler(signal.SIGINT, None)
        assert event.is_set()

        with pytest.raises(SystemExit) as excinfo:
            manager._signal_handler(signal.SIGINT, None)
        assert excinfo.value.code == FORCED_EXIT_CODE

    assert signal.getsignal(signal.SIGINT) == original


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "run.log"
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug", str(log_file), log_to_console=True)
        assert any(isinstance(h, TqdmLoggingHandler) for h in root.handlers)
        assert root.level == logging.DEBUG
        logging.getLogger("PGNPacker.Test").info("hello from the test")
        for handler in root.handlers:
            handler.flush()
        assert "hello from the test" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_statistics_summary(sample_records, caplog):
    tracker = StatisticsTracker()
    for record in sample_records:
        tracker.add_game_converted(record)
    tracker.add_game_skipped("malformed_move")
    tracker.set_chunk_paths(["games_000000.parquet"])

    assert tracker.stats["games_converted"] == 3
    assert tracker.stats["clock_samples"] == 3
    assert tracker.stats["eval_samples"] == 6
    assert tracker.stats["skipped_malformed_move"] == 1

    with caplog.at_level(logging.INFO):
        tracker.log_summary()
    assert "Games Converted: 3" in caplog.text
    assert "Chunk Files Written: 1" in caplog.text

    tracker.reset()
    assert not tracker.stats
    assert tracker.chunk_paths == []
