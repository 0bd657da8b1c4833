"""
Gemini MCP Server

Exposes Gemini generation as Model Context Protocol tools over stdio.
"""

__version__ = "0.3.0"
