"""
Logging setup for ddlkit command line runs.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config import LoggingConfig


_HANDLER_MARK = "_ddlkit_handler"


def setup_logging(config: Optional[LoggingConfig] = None, debug: bool = False) -> None:
    """
    Configure the root logger from a LoggingConfig.

    Logs go to stderr, and additionally to a size-rotated file when the
    config names one. debug forces the DEBUG level.
    """
    config = config or LoggingConfig()
    level = logging.DEBUG if debug else getattr(logging, config.level)
    formatter = logging.Formatter(config.format)

    root = logging.getLogger()
    # replace only the handlers installed by an earlier call
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    setattr(console_handler, _HANDLER_MARK, True)
    root.addHandler(console_handler)

    if config.file:
        Path(config.file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.file,
            maxBytes=config.max_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_MARK, True)
        root.addHandler(file_handler)

    # asyncpg is chatty at DEBUG
    logging.getLogger("asyncpg").setLevel(max(level, logging.INFO))
