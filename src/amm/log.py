from __future__ import annotations

import logging
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
HANDLER_NAME = "amm.stream"


def configure_logging(
    level: Optional[str] = None, logger: Optional[logging.Logger] = None
) -> logging.Handler:
    """
    Attach a stream handler to the ``amm`` logger, once per logger.
    If level is None, uses AMM_LOG_LEVEL env (default WARNING).
    Calling again only updates the level and returns the existing handler.
    """
    level_name = (level or get_settings().log_level).upper()
    log_level = getattr(logging, level_name, logging.WARNING)
    target = logger or logging.getLogger("amm")
    handler = next((h for h in target.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        target.addHandler(handler)
    target.setLevel(log_level)
    target.debug("Logging configured (level=%s)", level_name)
    return handler
