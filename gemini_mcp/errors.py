"""
Exception taxonomy for the Gemini MCP server.

Backend failures derive from GeminiError; bad tool input raises
ToolInputError before any backend call is made. The dispatcher turns both
into -32603 responses carrying str(exc).
"""

from typing import Optional


class GeminiError(Exception):
    """Base class for Generation Service failures."""


class GeminiHttpError(GeminiError):
    """Transport-level failure talking to the Gemini API."""

    def __init__(self, message: str):
        super().__init__(f"HTTP client error: {message}")


class GeminiApiError(GeminiError):
    """Gemini answered with a non-success status."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"API error ({status}): {message}")


class EmptyResponseError(GeminiError):
    """Gemini answered 200 but without any text part."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Empty response from API")


class ConfigError(GeminiError):
    """Missing or invalid server configuration."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class ToolInputError(ValueError):
    """Tool arguments failed validation."""


class ToolNotFoundError(LookupError):
    """No handler is registered under the requested tool name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool not found: {name}")
