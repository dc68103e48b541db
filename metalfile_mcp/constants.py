"""Constants for the Metalfile MCP server.

This module contains configuration constants and environment variable names
used throughout the Metalfile MCP server.
"""

MCP_SERVER_NAME = "metalfile-mcp"
"""Name reported to MCP clients and used as the resource URI scheme."""

MCP_SERVER_VERSION = "0.1.0"
"""Version reported to MCP clients during initialization."""

PACKAGE_DISTRIBUTION_NAME = "metalfile-mcp"
"""Distribution name used to look up the installed package version."""

DEFAULT_METALFILE_PATH = "Metalfile.yml"
"""Default Metalfile path, resolved relative to the server working directory."""

METALFILE_MCP_LOG_LEVEL = "METALFILE_MCP_LOG_LEVEL"
"""Environment variable name for the server log level.

Accepts any standard logging level name (DEBUG, INFO, WARNING, ERROR).
Unknown values fall back to INFO.

Default: INFO
"""
