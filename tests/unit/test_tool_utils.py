"""Tests for deferred tool registration."""

from metalfile_mcp._annotations import DESTRUCTIVE_HINT, READ_ONLY_HINT
from metalfile_mcp._tool_utils import ToolDomain, get_registered_tools

# Importing the tool modules populates the registry.
from metalfile_mcp.mcp import guidance, metalfile_checks, metalfile_edits  # noqa: F401


def _tool_names(domain: ToolDomain | None = None) -> set[str]:
    return {func.__name__ for func, _ in get_registered_tools(domain)}


def test_tools_are_registered_by_domain():
    assert _tool_names(ToolDomain.METALFILE_CHECKS) == {"validate_metalfile"}
    assert _tool_names(ToolDomain.METALFILE_EDITS) == {"write_metalfile"}
    assert _tool_names("guidance") == {"suggest_write_metalfile_prompt", "get_github_action_info"}


def test_read_only_annotations():
    annotations = {func.__name__: ann for func, ann in get_registered_tools()}

    assert annotations["validate_metalfile"][READ_ONLY_HINT] is True
    assert annotations["get_github_action_info"][READ_ONLY_HINT] is True
    assert annotations["write_metalfile"][READ_ONLY_HINT] is False
    assert annotations["write_metalfile"][DESTRUCTIVE_HINT] is True
    assert annotations["write_metalfile"]["domain"] == "metalfile_edits"


def test_only_help_text_is_stored_on_functions():
    functions = {func.__name__: func for func, _ in get_registered_tools()}

    for func in functions.values():
        assert not hasattr(func, "_mcp_domain")
        assert not hasattr(func, "_mcp_annotations")
    assert functions["write_metalfile"]._mcp_extra_help_text
    assert functions["validate_metalfile"]._mcp_extra_help_text is None
