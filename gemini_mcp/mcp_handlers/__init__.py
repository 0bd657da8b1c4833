"""
MCP Tool Handlers

Handler registry pattern for tool dispatch. Each tool handler is a separate
function; importing the handler modules runs their @mcp_tool decorators.
"""

from typing import Dict, Any, Callable, Sequence, Optional
from mcp.types import TextContent

# Import all handlers
from .query import handle_query, handle_search_v2
from .analyze import handle_analyze_code, handle_analyze_text, handle_analyze_v2
from .summarize import handle_summarize, handle_summarize_v2
from .brainstorm import handle_brainstorm, handle_brainstorm_v2

# Shared context (Generation Service client)
from .shared import initialize_context, get_generation_client

# Decorator utilities
from .decorators import get_tool_registry as get_decorator_registry

from gemini_mcp.errors import ToolNotFoundError
from gemini_mcp.logging_utils import get_logger

# Handler registry - populated from the @mcp_tool decorators run by the imports above
TOOL_HANDLERS: Dict[str, Callable] = dict(get_decorator_registry())

_logger = get_logger(__name__)


async def dispatch_tool(name: str, arguments: Optional[Dict[str, Any]]) -> Sequence[TextContent]:
    """
    Dispatch a tool call to its handler.

    Args:
        name: Tool name (case-sensitive)
        arguments: Tool arguments; None is treated as {}

    Returns:
        The handler's content items

    Raises:
        ToolNotFoundError: no handler registered under name
        Exception: whatever the handler raises (validation, backend errors)
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise ToolNotFoundError(name)
    if arguments is None:
        arguments = {}
    _logger.info(f"Tool call: {name}")
    return await handler(arguments)


__all__ = [
    "TOOL_HANDLERS",
    "dispatch_tool",
    "initialize_context",
    "get_generation_client",
    "handle_query",
    "handle_search_v2",
    "handle_analyze_code",
    "handle_analyze_text",
    "handle_analyze_v2",
    "handle_summarize",
    "handle_summarize_v2",
    "handle_brainstorm",
    "handle_brainstorm_v2",
]
