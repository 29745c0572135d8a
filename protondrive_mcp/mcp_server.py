from __future__ import annotations

import logging
from typing import Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from .dispatcher import ToolDispatcher
from .errors import METHOD_NOT_FOUND
from .schemas import ToolErrorOut

logger = logging.getLogger(__name__)


def tool_definitions(dispatcher: ToolDispatcher) -> list[types.Tool]:
    return [
        types.Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema)
        for spec in dispatcher.tools()
    ]


def to_mcp_error(error: ToolErrorOut) -> McpError:
    code = types.METHOD_NOT_FOUND if error.code == METHOD_NOT_FOUND else types.INTERNAL_ERROR
    return McpError(types.ErrorData(code=code, message=error.message))


def create_server(dispatcher: ToolDispatcher, name: str = 'proton-drive-mcp', version: Optional[str] = None) -> Server:
    server: Server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return tool_definitions(dispatcher)

    # registered directly so McpError reaches the caller as a JSON-RPC error;
    # the call_tool() decorator folds every exception into isError text
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call(req.params.name, req.params.arguments)
        if not result.ok:
            raise to_mcp_error(result.error)
        return types.ServerResult(
            types.CallToolResult(content=[types.TextContent(type='text', text=result.text or '')], isError=False)
        )

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve_stdio(dispatcher: ToolDispatcher, name: str = 'proton-drive-mcp', version: Optional[str] = None) -> None:
    server = create_server(dispatcher, name=name, version=version)
    async with stdio_server() as (read_stream, write_stream):
        logger.info('MCP server listening on stdio')
        await server.run(read_stream, write_stream, server.create_initialization_options())
