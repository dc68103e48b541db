"""MCP tool annotation hint names.

These keys match the MCP `ToolAnnotations` fields understood by clients.
"""

READ_ONLY_HINT = "readOnlyHint"
"""The tool does not modify its environment."""

DESTRUCTIVE_HINT = "destructiveHint"
"""The tool may perform destructive updates, such as overwriting files."""

IDEMPOTENT_HINT = "idempotentHint"
"""Repeated calls with the same arguments have no additional effect."""

OPEN_WORLD_HINT = "openWorldHint"
"""The tool interacts with external entities beyond the local machine."""
