"""Metalfile MCP Server class for clean subclassing and configuration.

This module provides a base server class that can be subclassed to create
custom Metalfile MCP servers with a different identity or extra tools.
"""

import asyncio
import logging
import sys

from fastmcp import FastMCP

import metalfile_mcp.mcp.server_info  # noqa: F401  # registers deferred resources
from metalfile_mcp.constants import MCP_SERVER_NAME, MCP_SERVER_VERSION
from metalfile_mcp.mcp.guidance import register_guidance_tools
from metalfile_mcp.mcp.metalfile_checks import register_metalfile_check_tools
from metalfile_mcp.mcp.metalfile_edits import register_metalfile_edit_tools
from metalfile_mcp.mcp_capabilities import register_capabilities as register_declared_capabilities


logger = logging.getLogger(__name__)


class MetalfileMCPServer:
    """Base class for Metalfile MCP servers.

    Server identity (name and version) is fixed when the instance is created and
    handed to FastMCP, which reports it to clients during initialization.

    Example:
        ```python
        class MyMetalfileServer(MetalfileMCPServer):
            server_name = "my-metalfile-server"
            server_version = "1.2.0"

            def register_extra_tools(self) -> None:
                register_my_tools(self.app)

        def main():
            MyMetalfileServer().run_stdio()
        ```

    Attributes:
        server_name: Name of the MCP server (can be overridden in subclass)
        server_version: Version reported to clients (can be overridden in subclass)
    """

    server_name: str = MCP_SERVER_NAME
    server_version: str = MCP_SERVER_VERSION

    def __init__(
        self,
        app: FastMCP | None = None,
        *,
        server_name: str | None = None,
        server_version: str | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            app: Optional FastMCP instance. If not provided, creates one.
            server_name: Override server name (keyword-only)
            server_version: Override server version (keyword-only)
        """
        if server_name is not None:
            self.server_name = server_name

        if server_version is not None:
            self.server_version = server_version

        self.app = app or FastMCP(self.server_name, version=self.server_version)
        self._registered = False

    def register_metalfile_tools(self) -> None:
        """Register the Metalfile tools (validate, write, guidance).

        Subclasses can override to customize tool registration.
        """
        logger.info("Registering Metalfile tools")
        register_metalfile_check_tools(self.app)
        register_metalfile_edit_tools(self.app)
        register_guidance_tools(self.app)

    def register_capabilities(self) -> None:
        """Register deferred prompts and resources."""
        register_declared_capabilities(self.app)

    def register_extra_tools(self) -> None:
        """Hook for subclasses to register additional tools.

        Called after the built-in tools and capabilities are registered.
        """
        pass

    def register_all(self) -> None:
        """Register all tools, prompts, and resources.

        Safe to call more than once; registration only happens the first time.
        """
        if self._registered:
            return

        self.register_metalfile_tools()
        self.register_capabilities()
        self.register_extra_tools()
        self._registered = True

    def run_stdio(self, show_banner: bool = False) -> None:
        """Run the MCP server with stdio transport.

        Args:
            show_banner: Whether to show startup banner
        """
        self.register_all()

        print("=" * 60, flush=True, file=sys.stderr)
        print(f"Starting {self.server_name} v{self.server_version} MCP server", file=sys.stderr)
        print("=" * 60, flush=True, file=sys.stderr)

        try:
            asyncio.run(self.app.run_stdio_async(show_banner=show_banner))
        except KeyboardInterrupt:
            print(f"\n{self.server_name} MCP server interrupted by user.", file=sys.stderr)
        except Exception as ex:
            print(f"Error running {self.server_name} MCP server: {ex}", file=sys.stderr)
            sys.exit(1)

        print(f"{self.server_name} MCP server stopped.", file=sys.stderr)
        print("=" * 60, flush=True, file=sys.stderr)
        sys.exit(0)
