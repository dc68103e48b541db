"""Deferred registration for the Metalfile MCP prompts and resources.

Prompt and resource functions are declared next to the tools they support and
collected here at import time. `register_capabilities()` attaches them to a
FastMCP app, so the same definitions can be served by more than one server
instance.

Resource URIs always live under the server scheme, e.g. `metalfile-mcp://version`.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastmcp import FastMCP

from metalfile_mcp.constants import MCP_SERVER_NAME


logger = logging.getLogger(__name__)

PromptMessages = list[dict[str, str]]


@dataclass(frozen=True)
class MetalfilePrompt:
    """A prompt waiting to be registered."""

    name: str
    description: str
    func: Callable[..., PromptMessages]


@dataclass(frozen=True)
class MetalfileResource:
    """A read-only resource waiting to be registered."""

    uri: str
    description: str
    mime_type: str
    func: Callable[..., Any]


_PROMPTS: dict[str, MetalfilePrompt] = {}
_RESOURCES: dict[str, MetalfileResource] = {}


def resource_uri(path: str) -> str:
    """Return the full resource URI for a path under the server scheme."""
    return f"{MCP_SERVER_NAME}://{path.lstrip('/')}"


def mcp_prompt(name: str, description: str):
    """Declare a prompt for deferred registration.

    Raises:
        ValueError: If a prompt with the same name is already declared
    """

    def decorator(func: Callable[..., PromptMessages]):
        if name in _PROMPTS:
            raise ValueError(f"Duplicate prompt name: {name}")
        _PROMPTS[name] = MetalfilePrompt(name, description, func)
        return func

    return decorator


def mcp_resource(path: str, description: str, mime_type: str = "application/json"):
    """Declare a resource at `metalfile-mcp://<path>` for deferred registration.

    Args:
        path: Resource path under the server scheme (e.g., "metalfile/schema")
        description: Human-readable description of the resource
        mime_type: MIME type of the resource content (default: JSON)

    Raises:
        ValueError: If a resource with the same URI is already declared
    """
    uri = resource_uri(path)

    def decorator(func: Callable[..., Any]):
        if uri in _RESOURCES:
            raise ValueError(f"Duplicate resource URI: {uri}")
        _RESOURCES[uri] = MetalfileResource(uri, description, mime_type, func)
        return func

    return decorator


def get_declared_prompts() -> list[MetalfilePrompt]:
    return list(_PROMPTS.values())


def get_declared_resources() -> list[MetalfileResource]:
    return list(_RESOURCES.values())


def register_capabilities(app: FastMCP) -> None:
    """Register every declared resource and prompt with the FastMCP app.

    Args:
        app: FastMCP application instance
    """
    for resource in _RESOURCES.values():
        app.resource(
            resource.uri,
            description=resource.description,
            mime_type=resource.mime_type,
        )(resource.func)
    for prompt in _PROMPTS.values():
        app.prompt(name=prompt.name, description=prompt.description)(prompt.func)

    logger.info(f"Registered {len(_RESOURCES)} resource(s) and {len(_PROMPTS)} prompt(s)")
