"""Metalfile MCP server implementation.

This module provides the main MCP server for reading, validating, and writing
Metalfiles over the stdio transport.
"""

from fastmcp import FastMCP

from metalfile_mcp._util import initialize_logging
from metalfile_mcp.server_class import MetalfileMCPServer


initialize_logging()


class DefaultMetalfileServer(MetalfileMCPServer):
    """The default Metalfile MCP server."""


server = DefaultMetalfileServer()
server.register_all()

app: FastMCP = server.app


def main() -> None:
    """Main entry point for the Metalfile MCP server."""
    server.run_stdio(show_banner=False)


if __name__ == "__main__":
    main()
