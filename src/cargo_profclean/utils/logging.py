"""Centralised logging configuration and utilities."""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "cargo_profclean"


class ColouredFormatter(logging.Formatter):
    """Logging formatter that colours the level name."""

    COLOURS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record) -> str:
        """Formats the record with the colour for its level."""
        levelname = record.levelname
        if levelname in self.COLOURS:
            record.levelname = f"{self.COLOURS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def get_logger(name: str) -> logging.Logger:
    """Returns a logger for the given module name.

    Args:
        name (str): Usually ``__name__`` of the calling module.

    Returns:
        logging.Logger: The logger instance.
    """
    return logging.getLogger(name)


def setup_logging(
    log_file: Optional[Path] = None,
    log_level: str = "WARNING",
    verbose: bool = False,
    coloured: bool = True,
) -> None:
    """Sets up logging for the package.

    Args:
        log_file (Optional[Path], optional): Also write logs to this file. Defaults to None.
        log_level (str, optional): Console logging level. Defaults to "WARNING".
        verbose (bool, optional): If True, sets the console level to DEBUG. Defaults to False.
        coloured (bool, optional): Colour level names when stderr is a TTY. Defaults to True.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if coloured and sys.stderr.isatty():
        console_formatter = ColouredFormatter("%(levelname)s: %(message)s")
    else:
        console_formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            logger.warning(f"Cannot open log file {log_file}, logging to console only: {e}")
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)


class OperationLogger:
    """Context manager for logging the start and end of an operation."""

    def __init__(
        self, operation_name: str, logger: Optional[logging.Logger] = None
    ) -> None:
        """Initialises the OperationLogger.

        Args:
            operation_name (str): The name of the operation.
            logger (Optional[logging.Logger], optional): Logger instance to use. Defaults to this module's logger.
        """
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.start_time: Optional[float] = None

    def __enter__(self):
        """Logs the start of the operation."""
        self.start_time = time.time()
        self.logger.info(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        """Logs the end of the operation."""
        duration = time.time() - self.start_time

        if exc_type is None:
            self.logger.info(f"Completed: {self.operation_name} in {duration:.2f}s")
        else:
            self.logger.error(
                f"Failed: {self.operation_name} after {duration:.2f}s - {exc_value}"
            )

        return False  # Do not suppress exceptions
