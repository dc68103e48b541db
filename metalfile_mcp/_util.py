"""Utility functions for the Metalfile MCP server."""

import logging
import os
import sys
from pathlib import Path

from metalfile_mcp.constants import METALFILE_MCP_LOG_LEVEL


def initialize_logging() -> None:
    """Initialize logging configuration for the MCP server.

    Logs go to stderr since stdout carries the MCP stdio transport.
    """
    level_name = os.environ.get(METALFILE_MCP_LOG_LEVEL, "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def resolve_metalfile_path(path: str) -> Path:
    """Resolve a Metalfile path against the current working directory.

    Args:
        path: Relative or absolute path as provided by the caller

    Returns:
        Absolute, normalized path. Symlinks are not resolved.
    """
    return Path(os.path.abspath(Path.cwd() / path))
