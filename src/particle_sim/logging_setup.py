# MIT License (see LICENSE)
"""
Logging setup for the application.

All modules log through children of the dedicated "particle_sim" logger
(logging.getLogger(__name__) inside the package). setup_logging() attaches
handlers to that logger only, so output from third-party libraries such as
pygame or numpy is not captured.
"""
from __future__ import annotations
import logging
import os

LOGGER_NAME = "particle_sim"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str | int = "INFO",
    fmt: str = DEFAULT_FORMAT,
    run_id: str | None = None,
    log_root: str = "runs",
) -> logging.Logger:
    """
    Configure the application logger.

    Logs go to the console and, when run_id is given, also to
    <log_root>/<run_id>/simulation.log. Calling this again replaces the
    handlers installed by the previous call.

    Args:
        level: Logging level name or number.
        fmt: Format string for logging.Formatter.
        run_id: Identifier of this run. None disables the file log.
        log_root: Parent directory of the per-run log directories.

    Returns:
        The configured "particle_sim" logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Keep records away from the root logger
    logger.propagate = False

    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(fmt)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_file = None
    if run_id:
        log_dir = os.path.join(log_root, run_id)
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, "simulation.log")

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized. Run ID: %s. Log file: %s", run_id, log_file)
    return logger
