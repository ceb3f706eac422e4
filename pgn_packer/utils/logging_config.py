# pgn_packer_project/pgn_packer/utils/logging_config.py
"""
Logging configuration for the PGN Packer application.

Console output goes through tqdm so log lines do not tear the progress bar
drawn by the conversion pipeline. The log file gets a more detailed format.
"""
import logging
from typing import List, Optional

from tqdm import tqdm

from pgn_packer.config import settings

CONSOLE_FORMAT = "%(levelname)-8s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TqdmLoggingHandler(logging.Handler):
    """A console handler that prints through `tqdm.write`."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record))
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def setup_logging(
    log_level_str: Optional[str] = None,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
) -> None:
    """
    Configures application-wide logging on the root logger.

    Args:
        log_level_str: Logging level name (e.g. "INFO", "DEBUG"). Defaults to
                       `settings.DEFAULT_LOG_LEVEL`; unknown names fall back
                       to INFO with a warning.
        log_file: Path of the log file. Defaults to `settings.DEFAULT_LOG_FILENAME`.
        log_to_console: Whether to log to the console via tqdm.
        log_to_file: Whether to append logs to `log_file`.
    """
    effective_level_str = (log_level_str or settings.DEFAULT_LOG_LEVEL).upper()
    effective_log_file = log_file or settings.DEFAULT_LOG_FILENAME

    level_val = logging.getLevelName(effective_level_str)
    if not isinstance(level_val, int):
        logging.warning(f"Invalid log level string: '{effective_level_str}'. Defaulting to 'INFO'.")
        level_val = logging.INFO
        effective_level_str = "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(level_val)
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    handlers: List[logging.Handler] = []
    if log_to_console:
        console_handler = TqdmLoggingHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(console_handler)

    if log_to_file:
        file_handler = logging.FileHandler(effective_log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    if not handlers:
        root_logger.addHandler(logging.NullHandler())
        return

    for handler in handlers:
        root_logger.addHandler(handler)

    setup_logger = logging.getLogger(settings.APP_NAME + ".Logging")
    setup_logger.info(f"Logging initialized. Level: {effective_level_str}.")
    if log_to_file:
        setup_logger.info(f"Logging to file enabled: '{effective_log_file}'.")
