"""Logging setup for scripts that run the match engine."""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(level: int = logging.WARNING, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Attach handlers to the ``mpg`` logger.

    Engine modules log on ``mpg.<module>`` and never configure handlers
    themselves. Calling this again replaces the previous handlers.

    Args:
        level: Logging level for the console and the file
        log_file: Also write detailed records to this file

    Returns:
        The ``mpg`` logger
    """
    logger = logging.getLogger('mpg')
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s %(name)s %(levelname)s %(message)s')
        )
        logger.addHandler(file_handler)

    return logger
