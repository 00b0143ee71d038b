"""
Logging utilities.

All library modules log under the ``phospho_causal`` namespace, so a single
call to :func:`setup_logger` configures the whole pipeline.
"""

import sys
import logging
from pathlib import Path
from typing import Optional
from datetime import datetime


ROOT_LOGGER_NAME = "phospho_causal"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_file: Optional[str | Path] = None,
    level: str = "INFO",
    format_str: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a logger with console and optional file handlers.

    Parameters
    ----------
    name : str
        Logger name. Child loggers (``phospho_causal.searcher`` etc.)
        inherit the handlers installed here.
    log_file : str or Path, optional
        Path to log file.
    level : str
        Logging level (DEBUG, INFO, WARNING, ERROR).
    format_str : str, optional
        Log message format.

    Returns
    -------
    logging.Logger
        Configured logger.
    """
    if format_str is None:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    level_value = getattr(logging, level.upper(), None)
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown logging level: {level}")

    logger = logging.getLogger(name)
    logger.setLevel(level_value)

    # Repeated runs in one process must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_str)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger inside the package namespace.

    Parameters
    ----------
    name : str
        Logger name. Short names such as ``"searcher"`` are placed under
        ``phospho_causal.``.

    Returns
    -------
    logging.Logger
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class ProgressLogger:
    """
    Simple progress logger for long relation scans.
    """

    def __init__(
        self,
        total: int,
        desc: str = "Processing",
        logger: Optional[logging.Logger] = None,
        log_every: int = 1000,
    ):
        """
        Initialize progress logger.

        Parameters
        ----------
        total : int
            Total number of items.
        desc : str
            Description of the task.
        logger : logging.Logger, optional
            Logger to use.
        log_every : int
            Log progress every N items.
        """
        self.total = total
        self.desc = desc
        self.logger = logger or get_logger()
        self.log_every = max(int(log_every), 1)
        self.current = 0
        self.start_time = datetime.now()

    def update(self, n: int = 1):
        """Update progress by n items."""
        self.current += n

        if self.current % self.log_every == 0 or self.current == self.total:
            elapsed = (datetime.now() - self.start_time).total_seconds()
            rate = self.current / elapsed if elapsed > 0 else 0
            pct = 100 * self.current / self.total if self.total else 100.0

            self.logger.debug(
                f"{self.desc}: {self.current}/{self.total} ({pct:.1f}%) - "
                f"{rate:.1f} items/sec"
            )

    def close(self):
        """Close progress logger and log a summary."""
        elapsed = (datetime.now() - self.start_time).total_seconds()
        self.logger.info(
            f"{self.desc} complete: {self.current} items in {elapsed:.1f}s"
        )
