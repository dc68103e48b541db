"""Metalfile MCP server.

An MCP server for reading, validating, and writing Metalfile package manifests.
"""
