"""
Logger setup for the shellplate package

Both entry points (the FastAPI app and the Streamlit app) call setup_logging()
once at import. Streamlit re-executes its script on every interaction, so the
call has to be idempotent.
"""
import logging
import sys
from typing import Union

LOGGER_NAME = "shellplate"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    # Unknown names come back as the string "Level X"
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Send shellplate.* records to stdout at the given level.

    Args:
        level: Level number or name, e.g. logging.DEBUG or "info" (the
            LOG_LEVEL setting). Unknown names fall back to INFO.
    """
    level = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if getattr(h, "_shellplate", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler._shellplate = True
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    handler.setLevel(level)

    logger.debug("Logging at %s", logging.getLevelName(level))
    return logger
