# pgn_packer_project/main.py
"""
Main entry point for the PGN Packer application.

This script handles command-line argument parsing, sets up logging,
and runs the ConversionPipeline over one PGN file.
"""
import argparse
import logging
import os
import sys

# Adjust the Python path to include the project's root directory.
# This allows the script to be run directly from the project root via `python main.py`.
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from pgn_packer.config import settings
from pgn_packer.exceptions import PgnPackerError
from pgn_packer.pipeline import ConversionPipeline
from pgn_packer.utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Converts Lichess PGN files into compact, chunked binary game files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument("input_file", help="The PGN to parse (.pgn, .pgn.bz2 or .pgn.zst).")
    parser.add_argument(
        "-o", "--output-prefix", required=True,
        help="Path prefix of the output chunks; '_NNNNNN.parquet' is appended."
    )
    parser.add_argument(
        "-m", "--max", dest="games_per_chunk", type=int, default=settings.DEFAULT_GAMES_PER_CHUNK,
        help="The number of games to put in each chunk."
    )
    parser.add_argument(
        "--compression", default=settings.DEFAULT_CHUNK_COMPRESSION,
        choices=settings.SUPPORTED_CHUNK_COMPRESSIONS,
        help="Parquet compression codec for the chunks."
    )
    parser.add_argument(
        "--skip-invalid", action="store_true",
        help="Skip games with malformed headers or moves instead of aborting the run."
    )
    parser.add_argument(
        "--limit", type=int, default=None,
        help="Stop after converting this many games."
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable the progress bar."
    )
    parser.add_argument(
        "--log-level", default=settings.DEFAULT_LOG_LEVEL,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help="Set the logging level for console and file output."
    )
    parser.add_argument(
        "--log-file", default=settings.DEFAULT_LOG_FILENAME,
        help="Path to the log file."
    )
    parser.add_argument(
        "--no-console-log", action="store_true", help="Disable logging to the console."
    )
    return parser


def main():
    """Parses command-line arguments and runs the conversion pipeline."""
    args = build_parser().parse_args()

    setup_logging(
        log_level_str=args.log_level,
        log_file=args.log_file,
        log_to_console=not args.no_console_log
    )

    if args.games_per_chunk < 1:
        logging.critical(f"--max must be a positive number of games, got {args.games_per_chunk}.")
        sys.exit(1)

    logging.info(f"{settings.APP_NAME} starting up...")

    try:
        pipeline = ConversionPipeline(
            games_per_chunk=args.games_per_chunk,
            compression=args.compression,
            skip_invalid=args.skip_invalid,
            limit=args.limit,
            show_progress=not args.no_progress,
        )
        pipeline.run(args.input_file, args.output_prefix)
    except PgnPackerError as e:
        logging.critical(f"Conversion aborted: {e}")
        sys.exit(1)
    except Exception as e:
        logging.critical(f"A fatal, unhandled exception occurred at the top level: {e}", exc_info=True)
        sys.exit(1)

    logging.info(f"{settings.APP_NAME} has finished successfully.")
    sys.exit(0)


if __name__ == "__main__":
    main()
