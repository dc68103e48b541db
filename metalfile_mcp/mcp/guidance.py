"""GUIDANCE domain tools and prompts - Usage hints and reference docs.

This module provides static guidance for writing Metalfiles and for building
packages from them in CI.
"""

import logging
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from metalfile_mcp._guidance import (
    GITHUB_ACTION_INFO,
    WRITE_METALFILE_PROMPT,
    get_write_metalfile_hint,
)
from metalfile_mcp._tool_utils import ToolDomain, mcp_tool, register_tools
from metalfile_mcp.mcp_capabilities import mcp_prompt


logger = logging.getLogger(__name__)


@mcp_tool(
    ToolDomain.GUIDANCE,
    read_only=True,
    idempotent=True,
    open_world=False,
)
def suggest_write_metalfile_prompt() -> str:
    """Returns a ready-to-use prompt with hints for calling write_metalfile."""
    logger.info("Getting write_metalfile hint")
    return get_write_metalfile_hint()


@mcp_tool(
    ToolDomain.GUIDANCE,
    read_only=True,
    idempotent=True,
    open_world=False,
)
def get_github_action_info() -> str:
    """Describe the GitHub Action that builds a package from a Metalfile.

    Includes the action name, its inputs and outputs, and an example workflow.
    """
    logger.info("Getting GitHub Action info")
    return GITHUB_ACTION_INFO


@mcp_prompt(
    name="write_metalfile",
    description="Step-by-step playbook to create and validate a Metalfile",
)
def write_metalfile_prompt(
    package_name: Annotated[
        str | None,
        Field(description="Optional name of the package to create a Metalfile for"),
    ] = None,
) -> list[dict[str, str]]:
    """Prompt for creating a Metalfile.

    Args:
        package_name: Optional name of the package

    Returns:
        List of message dictionaries for the prompt
    """
    content = WRITE_METALFILE_PROMPT.format(
        package_name=package_name or "this project",
        write_metalfile_hint=get_write_metalfile_hint(),
    )
    return [{"role": "user", "content": content}]


def register_guidance_tools(app: FastMCP) -> None:
    """Register guidance tools with the FastMCP app.

    Args:
        app: FastMCP application instance
    """
    register_tools(app, ToolDomain.GUIDANCE)
