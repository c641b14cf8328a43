"""Environment-driven logging setup for applications embedding pyskiplist.

The library itself only emits records on the ``pyskiplist`` logger
hierarchy; nothing is printed until a handler is attached, either by the
host application or by :class:`Configuration`.

Recognised variables:
    • PYSKIPLIST_LOG_LEVEL  – level name (default ``WARNING``)
    • PYSKIPLIST_LOG_FORMAT – :class:`logging.Formatter` format string
    • PYSKIPLIST_LOG_FILE   – optional path for an additional file handler
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

__all__ = ["Configuration", "LOGGER_NAME"]

LOGGER_NAME = "pyskiplist"
_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Configuration:
    def __init__(self) -> None:
        self.log_level: str = os.environ.get("PYSKIPLIST_LOG_LEVEL", "WARNING").upper()
        self.log_format: str = os.environ.get("PYSKIPLIST_LOG_FORMAT", _DEFAULT_FORMAT)
        self.log_file: Optional[str] = os.environ.get("PYSKIPLIST_LOG_FILE")

    def setup_logging(self) -> logging.Logger:
        """Attach console (and optionally file) handlers to the package logger."""
        numeric_level = getattr(logging, self.log_level, logging.WARNING)
        formatter = logging.Formatter(self.log_format)

        root_logger = logging.getLogger(LOGGER_NAME)
        root_logger.setLevel(numeric_level)

        # Replace handlers from a previous setup to avoid duplicate output
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(numeric_level)
        root_logger.addHandler(console_handler)

        if self.log_file:
            try:
                file_handler = logging.FileHandler(self.log_file)
            except OSError as e:
                root_logger.warning("Failed to open log file %s: %s", self.log_file, e)
            else:
                file_handler.setFormatter(formatter)
                file_handler.setLevel(numeric_level)
                root_logger.addHandler(file_handler)
        return root_logger
