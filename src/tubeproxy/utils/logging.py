"""Logging utilities."""

import logging
import sys
import traceback
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ERROR_LOG_FILE = Path.home() / "tubeproxy_error.log"


def setup_logging(debug: bool = False):
    """Send log records to the console."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def log_error(msg: str, exc: Exception | None = None, log_file: Path = ERROR_LOG_FILE):
    """Log errors to a file for debugging."""
    try:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"{msg}\n")
            if exc:
                f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
            f.write("-" * 50 + "\n")
    except OSError:
        pass  # Can't log if logging fails
