"""MCP tool, prompt, and resource modules for the Metalfile MCP server."""
