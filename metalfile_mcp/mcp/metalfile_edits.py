"""METALFILE_EDITS domain tools - Tools that write a Metalfile to disk.

This module contains the write_metalfile tool.
"""

import logging
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from metalfile_mcp._metalfile_handlers import handle_write_metalfile
from metalfile_mcp._tool_utils import ToolDomain, mcp_tool, register_tools
from metalfile_mcp.constants import DEFAULT_METALFILE_PATH


logger = logging.getLogger(__name__)


@mcp_tool(
    ToolDomain.METALFILE_EDITS,
    read_only=False,
    destructive=True,
    idempotent=True,
    open_world=False,
    extra_help_text=(
        "Call suggest_write_metalfile_prompt for a complete example payload. "
        "Invalid Metalfile content is rejected with an error and nothing is written."
    ),
)
def write_metalfile(
    package: Annotated[
        dict[str, Any],
        Field(
            description=(
                "Package metadata: name, version, architecture, description, and "
                "optional depends (list of package names)"
            ),
        ),
    ],
    files: Annotated[
        list[dict[str, Any]],
        Field(description="At least one {src, dest} file mapping"),
    ],
    path: Annotated[
        str,
        Field(description="Destination path, relative to the server working directory"),
    ] = DEFAULT_METALFILE_PATH,
    overwrite: Annotated[
        bool,
        Field(description="Replace an existing file at path. If False, an existing file is kept."),
    ] = True,
    conffiles: Annotated[
        list[str] | None,
        Field(description="Destination paths to preserve across package upgrades"),
    ] = None,
    postinst: Annotated[
        str | None,
        Field(description="Post-install script body"),
    ] = None,
    extra_fields: Annotated[
        dict[str, Any] | None,
        Field(description="Additional top-level Metalfile fields to write as-is"),
    ] = None,
) -> str:
    """Write a Metalfile to disk from structured input, with optional overwrite control."""
    logger.info(f"Writing Metalfile to path={path} overwrite={overwrite}")

    raw_input: dict[str, Any] = dict(extra_fields or {})
    raw_input.update(path=path, overwrite=overwrite, package=package, files=files)
    if conffiles is not None:
        raw_input["conffiles"] = conffiles
    if postinst is not None:
        raw_input["postinst"] = postinst
    return handle_write_metalfile(raw_input)


def register_metalfile_edit_tools(app: FastMCP) -> None:
    """Register Metalfile edit tools with the FastMCP app.

    Args:
        app: FastMCP application instance
    """
    register_tools(app, ToolDomain.METALFILE_EDITS)
