"""
Operation log for a recycle bin.

All modules log through ``logging.getLogger(__name__)``; this module wires
the ``recyclebin`` logger to the bin's ``recyclebin.log`` file, one line per
event: ``[YYYY-MM-DD HH:MM:SS] [LEVEL] message``.
"""

from __future__ import annotations

import logging
import sys

from recyclebin.core.bin.layout import BinLayout

LOGGER_NAME = "recyclebin"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _BinFileHandler(logging.FileHandler):
    """File handler marker so reconfiguration can find and replace it."""


def configure_logging(layout: BinLayout, debug: bool = False) -> logging.Logger:
    """
    Attach the bin log file to the package logger.

    Calling this again (e.g. for a different bin root in the same process)
    replaces the handlers installed by the previous call.

    Args:
        layout: Bin whose log file receives the records
        debug: If True, log at DEBUG level and mirror records to stderr

    Returns:
        The configured ``recyclebin`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        if isinstance(handler, _BinFileHandler) or getattr(handler, "_recyclebin", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = _BinFileHandler(layout.log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if debug:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler._recyclebin = True  # type: ignore[attr-defined]
        logger.addHandler(stream_handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger
