"""Package loggers for the NBAI MCP server; output goes to stderr."""

import logging
import sys

_PACKAGE = "nbai_mcp"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(_PACKAGE).addHandler(logging.NullHandler())


def get_logger(module: str) -> logging.Logger:
    """Logger for a module of this package, e.g. get_logger("client")"""
    return logging.getLogger(f"{_PACKAGE}.{module}")


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Attach a stderr handler to the package logger.

    stdout is reserved for the stdio MCP protocol. Calling this again only
    updates the level.
    """
    package_logger = logging.getLogger(_PACKAGE)
    if not any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
