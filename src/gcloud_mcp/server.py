"""
MCP server for Google Cloud tools.

Implements the MCP 2025-06-18 request surface this server needs:
- initialize / notifications/initialized handshake
- ping
- tools/list with cursor-based pagination
- tools/call against a per-request GCloudClient

The server keeps no per-session state. Any transport (HTTP gateway, stdio)
hands each decoded JSON-RPC payload to handle_payload together with the
GCloudClient for the calling tenant.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from common.config import Config
from common.logging import get_logger, log_startup_message
from gcloud_client import GCloudClient
from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    MCP_TOOL_EXECUTION_ERROR,
    METHOD_NOT_FOUND,
    JSONRPCErrorResponse,
    JSONRPCHandler,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    MCPCapabilities,
    MCPClientCapabilities,
    MCPImplementation,
    MCPInitializeParams,
    MCPInitializeResult,
    MCPMethods,
    MCPToolsCallParams,
    MCPToolsCallResult,
    MCPToolsListParams,
    MCPToolsListResult,
)
from .tool_registry import Tool, ToolParameter, ToolRegistry

logger = get_logger(__name__)

# MCP Protocol version
MCP_PROTOCOL_VERSION = "2025-06-18"

# Pagination constants
DEFAULT_PAGE_SIZE = 50

SERVER_INSTRUCTIONS = (
    "This MCP server manages Google Cloud resources through the public REST APIs. "
    "Every call is authenticated with the caller's OAuth access token. Tools that take "
    "a projectId fall back to the default project supplied with the credentials. "
    "List and get tools accept format='markdown' for human-readable tables."
)

JSONRPCReply = Union[JSONRPCResponse, JSONRPCErrorResponse]


class GCloudMCPServer:
    """
    Stateless MCP request handler.

    One instance (and one tool registry) is shared by every tenant; the
    tenant-specific GCloudClient travels with each call.
    """

    def __init__(self, registry: Optional[ToolRegistry] = None, config: Optional[Config] = None):
        config = config or Config()
        self.tool_registry = registry or ToolRegistry()

        self.capabilities = MCPCapabilities(tools={"listChanged": False})
        self.server_info = MCPImplementation(
            name=config.server.name, version=config.server.version
        )

        log_startup_message(
            "MCP server initialized",
            protocol_version=MCP_PROTOCOL_VERSION,
            server=self.server_info.model_dump(),
            tool_count=len(self.tool_registry.tools),
        )

    async def handle_payload(
        self, body: Any, client: GCloudClient
    ) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
        """
        Handle one decoded JSON-RPC payload: a single message or a batch.

        Returns:
            The response object (or list for batches), or None when the payload
            held only notifications and no response is due
        """
        if JSONRPCHandler.is_batch(body):
            if not body:
                return self._error(None, INVALID_REQUEST, "Empty batch").model_dump()

            responses = []
            for item in body:
                response = await self._handle_message(item, client)
                if response is not None:
                    responses.append(response.model_dump())
            return responses or None

        response = await self._handle_message(body, client)
        return response.model_dump() if response is not None else None

    async def _handle_message(self, data: Any, client: GCloudClient) -> Optional[JSONRPCReply]:
        if not isinstance(data, dict):
            return self._error(None, INVALID_REQUEST, "Invalid JSON-RPC message type")

        try:
            message = JSONRPCHandler.parse_message(data)
        except ValueError as e:
            # The id may itself be what failed validation; it is echoed only if usable
            return self._error(data.get("id"), INVALID_REQUEST, f"Invalid request: {e}")

        if isinstance(message, JSONRPCRequest):
            return await self._handle_request(message, client)
        if isinstance(message, JSONRPCNotification):
            await self._handle_notification(message)
            return None

        # Responses sent to a server carry nothing to act on
        return None

    @staticmethod
    def _error(id: Any, code: int, message: str) -> JSONRPCErrorResponse:
        return JSONRPCHandler.create_error_response(id, code, message)

    async def _handle_request(self, request: JSONRPCRequest, client: GCloudClient) -> JSONRPCReply:
        """Handle a JSON-RPC request."""
        try:
            logger.debug(event="jsonrpc_request", method=request.method, id=request.id)

            if request.method == MCPMethods.INITIALIZE:
                return await self._handle_initialize(request)
            elif request.method == MCPMethods.PING:
                return await self._handle_ping(request)
            elif request.method == MCPMethods.TOOLS_LIST:
                return await self._handle_tools_list(request)
            elif request.method == MCPMethods.TOOLS_CALL:
                return await self._handle_tools_call(request, client)
            else:
                return self._error(
                    request.id, METHOD_NOT_FOUND, f"Method '{request.method}' not found"
                )

        except Exception as e:
            logger.error(event="request_handler_error", method=request.method, error=str(e))
            return self._error(request.id, INTERNAL_ERROR, f"Internal error: {str(e)}")

    async def _handle_notification(self, notification: JSONRPCNotification) -> None:
        """Handle a JSON-RPC notification."""
        logger.debug(event="jsonrpc_notification", method=notification.method)

        if notification.method == MCPMethods.INITIALIZED:
            logger.info(event="client_ready")
        elif notification.method == MCPMethods.CANCEL:
            params = notification.params or {}
            # Calls are single short HTTP round trips; nothing to abort
            logger.info(event="request_cancelled", request_id=params.get("requestId"))
        else:
            logger.warning(event="unknown_notification", method=notification.method)

    async def _handle_initialize(self, request: JSONRPCRequest) -> JSONRPCReply:
        """Handle initialize request - capability negotiation."""
        if not request.params:
            return self._error(request.id, INVALID_PARAMS, "Initialize requires params")

        try:
            params = MCPInitializeParams.model_validate(request.params)
        except ValueError:
            # Lenient fallback for clients that omit clientInfo fields
            params_dict = request.params
            client_info = params_dict.get("clientInfo") or {}
            try:
                params = MCPInitializeParams(
                    protocolVersion=params_dict.get("protocolVersion", MCP_PROTOCOL_VERSION),
                    capabilities=MCPClientCapabilities.model_validate(
                        params_dict.get("capabilities") or {}
                    ),
                    clientInfo=MCPImplementation(
                        name=client_info.get("name", "unknown"),
                        version=client_info.get("version", "unknown"),
                    ),
                )
            except (ValueError, AttributeError) as e:
                return self._error(request.id, INVALID_PARAMS, f"Invalid initialize params: {e}")

        if params.protocolVersion != MCP_PROTOCOL_VERSION:
            logger.warning(
                event="protocol_version_mismatch",
                client_version=params.protocolVersion,
                server_version=MCP_PROTOCOL_VERSION,
            )

        result = MCPInitializeResult(
            protocolVersion=MCP_PROTOCOL_VERSION,
            capabilities=self.capabilities,
            serverInfo=self.server_info,
            instructions=SERVER_INSTRUCTIONS,
        )

        logger.info(
            event="client_initialized",
            client_info=params.clientInfo.model_dump(),
            protocol_version=params.protocolVersion,
        )

        return JSONRPCHandler.create_response(request.id, result.model_dump(exclude_none=True))

    async def _handle_ping(self, request: JSONRPCRequest) -> JSONRPCResponse:
        return JSONRPCHandler.create_response(
            request.id,
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "server": self.server_info.model_dump(),
            },
        )

    async def _handle_tools_list(self, request: JSONRPCRequest) -> JSONRPCReply:
        """Handle tools/list request with cursor-based pagination."""
        try:
            params = MCPToolsListParams.model_validate(request.params or {})
        except ValueError as e:
            return self._error(request.id, INVALID_PARAMS, f"Invalid tools/list params: {e}")

        all_tools = await self.tool_registry.list_tools()

        cursor_index = 0
        if params.cursor:
            try:
                cursor_index = int(params.cursor)
            except ValueError:
                return self._error(request.id, INVALID_PARAMS, "Invalid cursor format")
            if cursor_index < 0:
                return self._error(request.id, INVALID_PARAMS, "Invalid cursor format")

        end_index = cursor_index + DEFAULT_PAGE_SIZE
        page = [self.tool_to_mcp(tool) for tool in all_tools[cursor_index:end_index]]
        next_cursor = str(end_index) if end_index < len(all_tools) else None

        result = MCPToolsListResult(tools=page, nextCursor=next_cursor)

        logger.debug(
            event="tools_listed",
            total_tools=len(all_tools),
            returned_tools=len(page),
            cursor=params.cursor,
            next_cursor=next_cursor,
        )

        return JSONRPCHandler.create_response(request.id, result.model_dump(exclude_none=True))

    async def _handle_tools_call(
        self, request: JSONRPCRequest, client: GCloudClient
    ) -> JSONRPCReply:
        """Handle tools/call request."""
        if not request.params:
            return self._error(request.id, INVALID_PARAMS, "Tool call requires params")

        try:
            params = MCPToolsCallParams.model_validate(request.params)
        except ValueError as e:
            return self._error(request.id, INVALID_PARAMS, f"Invalid tools/call params: {e}")

        try:
            execution = await self.tool_registry.execute_tool(
                params.name, params.arguments or {}, client
            )
        except Exception as e:
            logger.error(event="tool_call_error", tool_name=params.name, error=str(e))
            return self._error(
                request.id, MCP_TOOL_EXECUTION_ERROR, f"Tool execution error: {str(e)}"
            )

        if execution.success:
            result = MCPToolsCallResult(
                content=execution.result.get("content", []),
                isError=bool(execution.result.get("isError", False)),
            )
        else:
            logger.warning(
                event="tool_execution_failed", tool_name=params.name, error=execution.error
            )
            result = MCPToolsCallResult(
                content=[{"type": "text", "text": execution.error or "Tool execution failed"}],
                isError=True,
            )

        return JSONRPCHandler.create_response(request.id, result.model_dump())

    @classmethod
    def tool_to_mcp(cls, tool: Tool) -> Dict[str, Any]:
        return {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": cls.tool_input_schema(tool),
        }

    @classmethod
    def tool_input_schema(cls, tool: Tool) -> Dict[str, Any]:
        """Convert tool parameters to JSON Schema format."""
        properties = {}
        required = []

        for param in tool.parameters:
            properties[param.name] = cls._parameter_schema(param)
            if param.required:
                required.append(param.name)

        return {"type": "object", "properties": properties, "required": required}

    @classmethod
    def _parameter_schema(cls, param: ToolParameter) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": param.type.value, "description": param.description}

        if param.enum:
            schema["enum"] = param.enum
        if param.minimum is not None:
            schema["minimum"] = param.minimum
        if param.maximum is not None:
            schema["maximum"] = param.maximum
        if param.pattern:
            schema["pattern"] = param.pattern
        if param.default is not None:
            schema["default"] = param.default

        if param.items is not None:
            schema["items"] = cls._parameter_schema(param.items)

        if param.properties:
            schema["properties"] = {
                name: cls._parameter_schema(prop) for name, prop in param.properties.items()
            }
            nested_required = [name for name, prop in param.properties.items() if prop.required]
            if nested_required:
                schema["required"] = nested_required

        return schema
