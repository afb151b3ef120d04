"""
Logging for Strata.

Diagnostics (skipped files, layer-table warnings, debug timings) go to a rich
handler on stderr. Stdout is reserved for the report, so
``strata check --format json`` stays parseable at any verbosity.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "strata"

_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def verbosity_from_flags(verbose: bool = False, quiet: bool = False) -> str:
    """Map ``-v``/``-q`` to a verbosity name; quiet wins when both are given."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stderr rich handler (and optionally a file handler) to the strata logger.

    Calling it again replaces the previous handlers, so one process can run
    several commands with different verbosity.

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings) or "verbose" (debug)
        log_file: Optional file path; records are appended with timestamps

    Returns:
        The configured ``strata`` logger

    Raises:
        ValueError: If verbosity is not a known level name
    """
    if verbosity not in _LEVELS:
        raise ValueError(f"Unknown verbosity: {verbosity!r}")
    level = _LEVELS[verbosity]
    debug = verbosity == "verbose"

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
        markup=False,
        show_time=debug,
        show_path=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(ROOT_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``strata`` namespace (``architecture.rules`` -> ``strata.architecture.rules``)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
