"""Logging setup for the CLI and experiments."""

import logging
import sys
from typing import Optional, Union

SEARCH_LOGGER = "jigsaw_mcts.mcts.search"

LOG_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    search_level: Optional[Union[int, str]] = None
):
    """Configure root logging once for a run.

    Replaces any handlers installed earlier, so calling it twice does
    not duplicate output. Records carry the thread name to tell the
    search worker apart from the polling thread.

    Args:
        level: Root level, as int or name ("debug", "INFO", ...)
        log_file: Optional log file, written alongside stdout
        search_level: Separate level for the search loop, which logs
            every snapshot at DEBUG; defaults to ``level``
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=_as_level(level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )

    search_logger = logging.getLogger(SEARCH_LOGGER)
    if search_level is None:
        search_logger.setLevel(logging.NOTSET)
    else:
        search_logger.setLevel(_as_level(search_level))
