"""METALFILE_CHECKS domain tools - Validation that only reads.

This module contains the validate_metalfile tool and the Metalfile schema resource.
"""

from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from metalfile_mcp._metalfile_handlers import handle_validate_metalfile
from metalfile_mcp._tool_utils import ToolDomain, mcp_tool, register_tools
from metalfile_mcp.constants import DEFAULT_METALFILE_PATH
from metalfile_mcp.mcp_capabilities import mcp_resource
from metalfile_mcp.metalfile import metalfile_json_schema


@mcp_tool(
    ToolDomain.METALFILE_CHECKS,
    read_only=True,
    idempotent=True,
    open_world=False,
)
def validate_metalfile(
    path: Annotated[
        str,
        Field(
            description=(
                "Path to the Metalfile, relative to the server working directory. "
                "Ignored when content is provided."
            ),
        ),
    ] = DEFAULT_METALFILE_PATH,
    content: Annotated[
        str | None,
        Field(description="Inline Metalfile YAML to validate instead of reading from disk"),
    ] = None,
) -> str:
    """Validate a Metalfile from disk (default Metalfile.yml) or provided YAML content.

    Returns a summary with the package name, version, and entry counts when the
    Metalfile is valid, or a description of every problem found otherwise.
    """
    raw_input: dict[str, Any] = {"path": path}
    if content is not None:
        raw_input["content"] = content
    return handle_validate_metalfile(raw_input)


@mcp_resource("metalfile/schema", description="JSON schema describing a valid Metalfile")
def metalfile_schema() -> dict[str, Any]:
    """Resource that returns the Metalfile JSON schema."""
    return metalfile_json_schema()


def register_metalfile_check_tools(app: FastMCP) -> None:
    """Register Metalfile check tools with the FastMCP app.

    Args:
        app: FastMCP application instance
    """
    register_tools(app, ToolDomain.METALFILE_CHECKS)
