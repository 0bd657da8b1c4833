"""
MCP Tool Decorators - Auto-registration and utilities

Handlers register themselves by name at import time; mcp_handlers.__init__
builds the dispatch table from this registry.
"""

from dataclasses import dataclass
from typing import Dict, Any, Callable, Optional
from functools import wraps
import time

from pydantic import ValidationError

from gemini_mcp.errors import GeminiError, ToolInputError
from gemini_mcp.logging_utils import get_logger

logger = get_logger(__name__)

# Failures the caller can act on; anything else is logged with a traceback
EXPECTED_FAILURES = (ToolInputError, ValidationError, GeminiError)


# --- Unified Tool Registry ---

@dataclass
class ToolDefinition:
    """Single source of truth for a registered tool handler."""
    name: str
    handler: Callable
    slow_after: float = 30.0
    description: str = ""

_TOOL_DEFINITIONS: Dict[str, ToolDefinition] = {}


def mcp_tool(
    name: Optional[str] = None,
    slow_after: float = 30.0,
    description: Optional[str] = None,
):
    """
    Decorator for MCP tool handlers with auto-registration and timing.

    Provides:
    - Tool registration for dispatch
    - Performance timing (warns past 80% of slow_after)
    - Failure logging; the exception still propagates so the dispatcher can
      turn it into a JSON-RPC error

    There is no timeout here: a stalled backend call is bounded by the
    Generation Service client's own timeout.

    Usage:
        @mcp_tool("gemini-brainstorm-v2", slow_after=60.0)
        async def handle_brainstorm_v2(arguments: Dict[str, Any]) -> Sequence[TextContent]:
            ...

    Args:
        name: Tool name (defaults to function name without 'handle_' prefix)
        slow_after: Seconds after which a call counts as slow
        description: Short description (defaults to docstring first line)
    """
    def decorator(func: Callable) -> Callable:
        tool_name = name or func.__name__.replace('handle_', '')
        tool_description = description or (func.__doc__ and func.__doc__.strip().split('\n')[0].strip()) or ""

        @wraps(func)
        async def wrapper(arguments: Dict[str, Any]):
            start_time = time.time()
            try:
                result = await func(arguments)
            except EXPECTED_FAILURES as e:
                logger.warning(f"Tool '{tool_name}' failed: {e}")
                raise
            except Exception as e:
                logger.error(f"Tool '{tool_name}' error: {e}", exc_info=True)
                raise
            elapsed = time.time() - start_time
            if elapsed > slow_after * 0.8:
                logger.warning(
                    f"Tool '{tool_name}' took {elapsed:.2f}s "
                    f"({elapsed/slow_after*100:.1f}% of {slow_after}s budget)"
                )
            else:
                logger.debug(f"Tool '{tool_name}' finished in {elapsed:.2f}s")
            return result

        if tool_name in _TOOL_DEFINITIONS:
            raise ValueError(f"Duplicate tool registration: {tool_name}")
        _TOOL_DEFINITIONS[tool_name] = ToolDefinition(
            name=tool_name,
            handler=wrapper,
            slow_after=slow_after,
            description=tool_description,
        )

        return wrapper
    return decorator


def get_tool_registry() -> Dict[str, Callable]:
    """Get the registered tool handlers."""
    return {name: td.handler for name, td in _TOOL_DEFINITIONS.items()}


def get_tool_definition(tool_name: str) -> Optional[ToolDefinition]:
    """Get the full ToolDefinition for a registered tool."""
    return _TOOL_DEFINITIONS.get(tool_name)
