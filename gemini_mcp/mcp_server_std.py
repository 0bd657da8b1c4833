#!/usr/bin/env python3
"""
Gemini MCP Server - stdio JSON-RPC implementation

Line-delimited JSON-RPC 2.0 over stdin/stdout: one request per line, exactly
one response line per non-empty request line, in request order. Requests are
handled one at a time. Logs go to stderr; stdout carries only protocol.

Usage:
    gemini-mcp [--verbose | --quiet] [--skip-connection-test]

Configuration:
    GEMINI_API_KEY is required, from the environment or a .env file found
    from the working directory up; see gemini_mcp.runtime_config for the rest.
    Add to the MCP client config (Claude Desktop, Cursor, ...) as a stdio server.
"""

import argparse
import asyncio
import io
import json
import sys
from typing import Any, AsyncIterable, Dict, Optional, Sequence

import anyio
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

from gemini_mcp import __version__
from gemini_mcp.errors import ConfigError, GeminiError, ToolNotFoundError
from gemini_mcp.gemini_client import GeminiClient
from gemini_mcp.logging_utils import configure_logging, get_logger
from gemini_mcp.mcp_handlers import dispatch_tool, initialize_context
from gemini_mcp.mcp_handlers.decorators import EXPECTED_FAILURES
from gemini_mcp.mcp_handlers.utils import content_payload
from gemini_mcp.runtime_config import ServerConfig
from gemini_mcp.tool_schemas import get_tool_definitions

logger = get_logger(__name__)

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "Gemini MCP Server (Python)"

# JSON-RPC error codes
PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

class JsonRpcRequest(BaseModel):
    """One decoded request line. id is echoed back verbatim (null when absent)."""
    model_config = ConfigDict(frozen=True)

    jsonrpc: str
    id: Any = None
    method: str
    params: Any = None


def success_response(request_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


class McpDispatcher:
    """
    Routes decoded requests to initialize, tools/list and tools/call.

    Never raises: every request line maps to exactly one response object.
    """

    def initialize_result(self) -> Dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def list_tools_result(self) -> Dict[str, Any]:
        return {
            "tools": [
                tool.model_dump(mode="json", by_alias=True, exclude_none=True)
                for tool in get_tool_definitions()
            ]
        }

    async def call_tool(self, request_id: Any, params: Any) -> Dict[str, Any]:
        if not isinstance(params, dict):
            return error_response(request_id, INVALID_PARAMS, "Invalid params")

        name = params.get("name")
        if not isinstance(name, str):
            return error_response(request_id, INVALID_PARAMS, "Missing tool name")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            return error_response(request_id, INVALID_PARAMS, "Invalid params")

        logger.debug(f"Calling tool: {name}")
        try:
            contents = await dispatch_tool(name, arguments)
        except ToolNotFoundError:
            logger.warning(f"Unknown tool requested: {name}")
            return error_response(request_id, METHOD_NOT_FOUND, "Tool not found")
        except EXPECTED_FAILURES as e:
            logger.warning(f"Tool '{name}' failed: {e}")
            return error_response(request_id, INTERNAL_ERROR, str(e))
        except Exception as e:
            logger.error(f"Unexpected error in tool '{name}': {e}", exc_info=True)
            return error_response(request_id, INTERNAL_ERROR, str(e))

        return success_response(request_id, content_payload(contents))

    async def handle_request(self, request: JsonRpcRequest) -> Dict[str, Any]:
        if request.method == "initialize":
            logger.info("Handling initialize request")
            return success_response(request.id, self.initialize_result())
        if request.method == "tools/list":
            logger.info("Handling tools/list request")
            return success_response(request.id, self.list_tools_result())
        if request.method == "tools/call":
            logger.info("Handling tools/call request")
            return await self.call_tool(request.id, request.params)
        logger.debug(f"Method not found: {request.method}")
        return error_response(request.id, METHOD_NOT_FOUND, "Method not found")

    async def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        """Response for one raw input line; None for blank lines."""
        line = line.strip()
        if not line:
            return None

        logger.debug(f"Received: {line}")
        try:
            request = JsonRpcRequest.model_validate_json(line)
        except ValidationError as e:
            logger.error(f"Invalid JSON-RPC request: {e}")
            return error_response(None, PARSE_ERROR, "Parse error")

        return await self.handle_request(request)

    async def serve(self, stdin: AsyncIterable[str], stdout: Any) -> None:
        """
        Read lines until end of stream, answering each before reading the next.

        stdout must provide async write() and flush() (anyio.wrap_file does).
        A failure reading stdin or writing stdout is logged and ends the loop.
        """
        logger.info("Starting MCP server (stdio JSON-RPC)")
        lines = stdin.__aiter__()
        while True:
            try:
                line = await lines.__anext__()
            except StopAsyncIteration:
                logger.info("EOF reached, shutting down")
                break
            except (OSError, ValueError) as e:
                logger.error(f"Error reading stdin: {e}")
                break

            response = await self.handle_line(line)
            if response is None:
                continue
            try:
                await stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
                await stdout.flush()
            except OSError as e:
                logger.error(f"Error writing stdout: {e}")
                break


# ============================================================================
# Entry point
# ============================================================================

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gemini-mcp",
        description="MCP server exposing Gemini analysis, search, summarization and brainstorming tools over stdio",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument(
        "--skip-connection-test",
        action="store_true",
        help="Do not call the Gemini API at startup",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _log_level(args: argparse.Namespace, config: Optional[ServerConfig]) -> Optional[str]:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return config.log_level if config is not None else None


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for MCP server. Returns the process exit code."""
    args = parse_args(argv)
    configure_logging(_log_level(args, None))

    # .env in the working directory (or a parent) fills unset variables
    load_dotenv(find_dotenv(usecwd=True))
    try:
        config = ServerConfig.from_env()
    except ConfigError as e:
        logger.error(str(e))
        return 1
    configure_logging(_log_level(args, config))

    logger.info(f"{SERVER_NAME} v{__version__}")
    logger.info(f"Models: pro={config.pro_model}, flash={config.flash_model}")

    client = GeminiClient(config)
    try:
        if not args.skip_connection_test:
            try:
                await client.test_connection()
            except GeminiError as e:
                logger.error(f"Connection test failed: {e}")
                return 1

        initialize_context(client)
        stdin = anyio.wrap_file(io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8"))
        stdout = anyio.wrap_file(sys.stdout)
        await McpDispatcher().serve(stdin, stdout)
    finally:
        initialize_context(None)
        await client.aclose()

    return 0


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
