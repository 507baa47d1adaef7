"""Logging helpers for the planner."""

import logging
from typing import Optional

_CONFIGURED = False
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging once for CLI usage"""
    global _CONFIGURED
    if _CONFIGURED:
        logging.getLogger().setLevel(level)
        return
    logging.basicConfig(level=level, format=_LOG_FORMAT, datefmt=_DATE_FORMAT)
    _CONFIGURED = True

def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a named logger with optional level override (does not touch root config)"""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
