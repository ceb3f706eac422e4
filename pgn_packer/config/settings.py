# pgn_packer_project/pgn_packer/config/settings.py
"""
Configuration settings for the PGN Packer application.

This module centralizes all tunable parameters, default values and file
naming conventions used throughout the application. Command-line flags
override these values at run time.
"""
from typing import Final

# --- Output Chunking ---
DEFAULT_GAMES_PER_CHUNK: Final[int] = 10000
"""Default number of games written to each output chunk file."""

DEFAULT_CHUNK_COMPRESSION: Final[str] = "zstd"
"""Default parquet compression codec for output chunks."""

SUPPORTED_CHUNK_COMPRESSIONS: Final[tuple] = ("zstd", "snappy", "gzip", "brotli", "none")
"""Compression codecs accepted on the command line."""

CHUNK_FILE_SUFFIX: Final[str] = ".parquet"
"""File extension appended to every output chunk."""

CHUNK_INDEX_WIDTH: Final[int] = 6
"""Zero-padded width of the chunk counter in output file names."""

# --- Input ---
INPUT_ENCODING: Final[str] = "utf-8"
"""Text encoding of PGN input files."""

# --- Progress Reporting ---
PROGRESS_LOG_INTERVAL: Final[int] = 100000
"""Number of converted games between progress log lines."""

# --- Logging ---
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
"""Default logging level for the application."""

DEFAULT_LOG_FILENAME: Final[str] = "pgn_packer.log"
"""Default filename for the application log."""

# --- Application Specific ---
APP_NAME: Final[str] = "PGNPacker"
"""Application name, used for logging and other identifiers."""
