"""
Logging configuration for the application.
"""
import logging
import sys
from typing import TextIO

from resume_mcp.app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str | None = None, stream: TextIO | None = None) -> logging.Logger:
    """
    Configure application logging. Returns the package logger.

    The stdio MCP transport owns stdout, so callers running it pass sys.stderr.
    """
    level_val = level or settings.log_level
    logging.basicConfig(
        level=getattr(logging, level_val.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        force=True,
    )
    return logging.getLogger("resume_mcp")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(f"resume_mcp.{name}")
