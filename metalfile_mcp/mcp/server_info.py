"""SERVER_INFO domain resources - Server version and identity.

This module provides read-only resources describing the running server.
"""

import importlib.metadata as md
from functools import lru_cache

from metalfile_mcp.constants import (
    MCP_SERVER_NAME,
    MCP_SERVER_VERSION,
    PACKAGE_DISTRIBUTION_NAME,
)
from metalfile_mcp.mcp_capabilities import mcp_resource


@lru_cache(maxsize=1)
def _get_version_info() -> dict[str, str | None]:
    """Get version information for the MCP server.

    Returns:
        Dictionary with the server name and version, the installed package
        version, and the FastMCP version
    """
    try:
        package_version = md.version(PACKAGE_DISTRIBUTION_NAME)
    except md.PackageNotFoundError:
        package_version = "0.0.0+dev"

    try:
        fastmcp_version = md.version("fastmcp")
    except md.PackageNotFoundError:
        fastmcp_version = None

    return {
        "name": MCP_SERVER_NAME,
        "version": MCP_SERVER_VERSION,
        "package_version": package_version,
        "fastmcp_version": fastmcp_version,
    }


@mcp_resource("version", description="Version information for the Metalfile MCP server")
def version_resource() -> dict[str, str | None]:
    """Resource that returns version information for the MCP server.

    Returns:
        Dictionary with version information
    """
    return _get_version_info()
