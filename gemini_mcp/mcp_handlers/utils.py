"""
Common utilities for MCP tool handlers.

v1 and v2 tools share their executors; only the presentation differs:
v1 tools answer with plain text, v2 tools with the pretty-printed JSON of a
ToolResponse. Both end up as a single TextContent item.
"""

from typing import Any, Dict, Sequence
import json

from mcp.types import TextContent
from pydantic import BaseModel

from gemini_mcp.errors import ToolInputError


def text_response(text: str) -> Sequence[TextContent]:
    """v1 presentation: the text as-is."""
    return [TextContent(type="text", text=text)]


def json_response(response: BaseModel) -> Sequence[TextContent]:
    """v2 presentation: structured result as indented JSON text."""
    payload = response.model_dump(mode="json")
    return [TextContent(
        type="text",
        text=json.dumps(payload, indent=2, ensure_ascii=False)
    )]


def content_payload(contents: Sequence[TextContent]) -> Dict[str, Any]:
    """tools/call result body: {"content": [{"type": "text", "text": ...}]}"""
    return {"content": [c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in contents]}


def require_text(value: str, field_name: str) -> str:
    """
    Reject empty or whitespace-only text before any backend call.

    Raises:
        ToolInputError: '<field_name> cannot be empty'
    """
    if not value or not value.strip():
        raise ToolInputError(f"{field_name} cannot be empty")
    return value


def require_range(value: int, field_name: str, minimum: int, maximum: int) -> int:
    """
    Raises:
        ToolInputError: '<field_name> must be between <minimum> and <maximum>'
    """
    if value < minimum or value > maximum:
        raise ToolInputError(f"{field_name} must be between {minimum} and {maximum}")
    return value
