import logging
import sys
from typing import Optional, Union

_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Set on loggers we installed a handler on, so repeated calls stay no-ops.
_MARK = "_shiptrack_configured"


def _coerce_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        if isinstance(value, int):
            return value
    return logging.INFO


def configure_logging(level: Union[int, str, None] = None, name: Optional[str] = "shiptrack") -> logging.Logger:
    """Attach a single stderr handler to the ``shiptrack`` logger tree.

    Safe to call more than once; only the level is updated on later calls.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_coerce_level(level))
    if not getattr(logger, _MARK, False):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=_FMT, datefmt=_DATEFMT))
        logger.addHandler(handler)
        setattr(logger, _MARK, True)
    return logger
