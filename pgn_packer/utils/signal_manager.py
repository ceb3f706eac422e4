# pgn_packer_project/pgn_packer/utils/signal_manager.py
"""
Graceful shutdown for long conversion runs.

On SIGINT/SIGTERM the pipeline finishes the game it is parsing, flushes the
partial chunk and stops. A second signal exits immediately.
"""
import logging
import signal
import sys
import threading
from types import FrameType
from typing import Callable, List, Optional, Tuple, Union

from pgn_packer.config import settings

logger = logging.getLogger(settings.APP_NAME + ".SignalManager")

Handler = Union[Callable[[int, Optional[FrameType]], None], int, None]

FORCED_EXIT_CODE = 130


class SignalManager:
    """
    Context manager that turns shutdown signals into a `threading.Event`.

    Usage:
        shutdown_event = threading.Event()
        with SignalManager(shutdown_event):
            for record in framer:
                if shutdown_event.is_set():
                    break
                ...
        # Original signal handlers are restored on exit.
    """

    def __init__(self, shutdown_event: threading.Event):
        self.shutdown_event: threading.Event = shutdown_event
        self._original_handlers: List[Tuple[signal.Signals, Handler]] = []

    @staticmethod
    def _signals_to_handle() -> List[signal.Signals]:
        # SIGTERM is not available on Windows
        signals = [signal.SIGINT]
        if hasattr(signal, "SIGTERM"):
            signals.append(signal.SIGTERM)
        return signals

    def __enter__(self) -> "SignalManager":
        self._original_handlers = []
        for sig in self._signals_to_handle():
            try:
                self._original_handlers.append((sig, signal.getsignal(sig)))
                signal.signal(sig, self._signal_handler)
            except (ValueError, OSError, RuntimeError) as e:
                # Raised outside the main thread.
                logger.warning(f"Could not set signal handler for {sig.name}: {e}")
        logger.debug("Shutdown signal handlers installed.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for sig, handler in self._original_handlers:
            try:
                if signal.getsignal(sig) == self._signal_handler:
                    signal.signal(sig, handler)
            except (ValueError, OSError, RuntimeError) as e:
                logger.warning(f"Error restoring original handler for {sig.name}: {e}")
        logger.debug("Original signal handlers restored.")

    def _signal_handler(self, signum: int, frame: Optional[FrameType]) -> None:
        signal_name = signal.Signals(signum).name
        if self.shutdown_event.is_set():
            logger.critical(f"Second signal {signal_name} received. Forcing exit.")
            sys.exit(FORCED_EXIT_CODE)
        logger.warning(f"Signal {signal_name} received. Stopping after the current game...")
        self.shutdown_event.set()
