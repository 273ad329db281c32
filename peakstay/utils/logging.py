"""Namespaced logging for the Peak Stay backend.

Every module logs through a child of the ``peakstay`` logger, e.g.
``peakstay.db.local``, with ``key=value`` pairs in the message. ``LOG_LEVEL``
picks the level; an unrecognised name falls back to INFO.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

NAMESPACE = "peakstay"
DEFAULT_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_level(level: Union[str, int, None] = None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(namespace: str = NAMESPACE, level: Union[str, int, None] = None) -> logging.Logger:
    """Attach the single stream handler to ``namespace`` on first use.

    Later calls leave the handler alone but still apply an explicit ``level``,
    so tests and the seed script can turn on DEBUG after import.
    """

    logger = logging.getLogger(namespace)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(resolve_level())
    if level is not None:
        logger.setLevel(resolve_level(level))
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    base = configure_logging()
    return base.getChild(child) if child else base
