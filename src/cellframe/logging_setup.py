"""Logger configuration for applications built on cellframe."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "cellframe"

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    level: Union[int, str] = "WARNING",
    log_file: Union[str, Path, None] = None,
    console: Console | None = None,
) -> logging.Logger:
    """
    Attach handlers to the ``cellframe`` logger.

    Console output goes through rich on stderr so it does not interleave
    with frames drawn on stdout. Calling again replaces earlier handlers.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level}")
    logger.setLevel(level)

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logger.addHandler(rich_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    logger.debug("logging configured at %s", logging.getLevelName(level))
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)
