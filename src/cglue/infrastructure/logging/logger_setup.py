#!/usr/bin/env python3

"""Logger setup and configuration for the binding generator."""

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_FILE_PREFIX = "cglue"


class LoggerSetup:
    """Manages logging configuration for the command line tool."""

    _initialized = False
    _log_file_path: Path | None = None
    _handlers: list[logging.Handler] = []

    @classmethod
    def initialize(cls, log_dir: Path, verbose: bool = False) -> None:
        """
        Attach a console handler and a timestamped file handler to the root logger.

        Args:
            log_dir: Directory to store log files
            verbose: If True, set console to DEBUG level; otherwise INFO
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        cls._log_file_path = log_dir / f"{LOG_FILE_PREFIX}_{timestamp}.log"

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

        # The file always receives the full debug trail (clashes, lookups, instantiations)
        file_handler = logging.FileHandler(cls._log_file_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

        cls._handlers = [console_handler, file_handler]
        for handler in cls._handlers:
            root_logger.addHandler(handler)

        cls._initialized = True

        logger = logging.getLogger(__name__)
        logger.info(f"Logging initialized. Log file: {cls._log_file_path}")
        logger.debug(f"Verbose mode: {verbose}")

    @classmethod
    def shutdown(cls) -> None:
        """Detach and close the handlers added by initialize()."""
        root_logger = logging.getLogger()
        for handler in cls._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        cls._handlers = []
        cls._initialized = False
        cls._log_file_path = None

    @classmethod
    def get_log_file_path(cls) -> Path | None:
        """Get the current log file path."""
        return cls._log_file_path

    @classmethod
    def is_initialized(cls) -> bool:
        """Check if logging has been initialized."""
        return cls._initialized
