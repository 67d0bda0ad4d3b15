# logger_utils.py -  for logging messages and performance metrics, timestamps etc

import logging
import os
import time
from typing import Optional

from rich.logging import RichHandler

# Directory where log files go when file logging is switched on
LOG_DIR = "logs"

# Path to the default log file, can be overriden
DEFAULT_LOG_PATH = os.path.join(LOG_DIR, "autocompleter.log")

ROOT_LOGGER = "ngram_autocompleter"
_metrics_logger = logging.getLogger(ROOT_LOGGER + ".metrics")


def configure_logging(level: str = "INFO", path: Optional[str] = None, use_color: bool = True) -> logging.Logger:
    """
    Attach handlers to the package logger: rich console output and, if `path`
    is given, a plain file log. Safe to call more than once (handlers are replaced).
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if use_color:
        console = RichHandler(show_path=False, rich_tracebacks=True)
        console.setFormatter(logging.Formatter("%(message)s"))
    else:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)-7s | %(message)s",
                                               "%Y-%m-%d %H:%M:%S"))
    logger.addHandler(console)

    if path:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)  # Create the folder if it doesn't already exist
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)-7s | %(message)s",
                                          "%Y-%m-%d %H:%M:%S"))
        logger.addHandler(fh)

    return logger


class Log:
    """Lightweight facade over the package logger for messages and metrics."""

    def __init__(self, name: str = ROOT_LOGGER):
        self.logger = logging.getLogger(name)

    def write(self, level: str, msg: str):
        """Log `msg` at a level given by name (DEBUG/INFO/WARNING/ERROR)."""
        lvl = logging.getLevelName(level.upper())
        self.logger.log(lvl if isinstance(lvl, int) else logging.INFO, msg)

    # Public logging methods
    def debug(self, msg: str):
        self.write("DEBUG", msg)

    def info(self, msg: str):
        self.write("INFO", msg)

    def warning(self, msg: str):
        self.write("WARNING", msg)

    def error(self, msg: str):
        self.write("ERROR", msg)

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric (like timing, counts, or performance stats).
        Example: "Autocompleter.train done: 0.123s"
        """
        _metrics_logger.info("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label):
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("data_processing"):
                do_some_work()
        It automatically logs how long the block took.
        """
        return _Timer(label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label):
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        """When exiting the 'with' block, calculate how long it took and record it as a metric. """
        self.elapsed = time.perf_counter() - self.start
        Log.metric(f"{self.label} done", round(self.elapsed, 3), "s")
