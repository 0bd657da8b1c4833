"""
Standardized logging for the MCP server.

stdout carries the JSON-RPC protocol, so every handler installed here
writes to stderr.
"""

import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "gemini_mcp"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_MARKER = "_gemini_mcp_handler"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (thin wrapper so call sites stay uniform)."""
    return logging.getLogger(name)


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Install a single stderr handler on the package logger.

    Idempotent: repeated calls only adjust the level.

    Args:
        level: logging level name or number (default: INFO)

    Returns:
        The package logger
    """
    if level is None:
        level = logging.INFO
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    has_handler = any(getattr(h, _HANDLER_MARKER, False) for h in package_logger.handlers)
    if not has_handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _HANDLER_MARKER, True)
        package_logger.addHandler(handler)
        package_logger.propagate = False

    return package_logger
