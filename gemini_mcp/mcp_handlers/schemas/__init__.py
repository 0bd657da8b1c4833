"""Pydantic input models for the MCP tools (one module per tool family)."""
