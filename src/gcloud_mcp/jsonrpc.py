"""
JSON-RPC 2.0 envelopes and the MCP payloads this server exchanges.

Only the lifecycle handshake, ping and the tools methods are modelled; the
server never sends requests of its own, so there are no client-side builders.

Reference: https://www.jsonrpc.org/specification
MCP: https://modelcontextprotocol.io/specification/2025-06-18/basic/
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# MCP-specific error codes
MCP_TOOL_EXECUTION_ERROR = -32002

RequestId = Union[str, int]


def coerce_request_id(value: Any) -> Optional[RequestId]:
    """
    Return value if it can be echoed back as a JSON-RPC id, else None.

    JSON-RPC ids are strings, integers or null. Anything else a client sends
    (floats, objects, arrays, booleans) is answered with a null id.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return value
    return None


class JSONRPCError(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class JSONRPCRequest(BaseModel):
    """A call expecting a response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId
    method: str
    params: Optional[Dict[str, Any]] = None


class JSONRPCResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId
    result: Any


class JSONRPCErrorResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[RequestId]
    error: JSONRPCError


class JSONRPCNotification(BaseModel):
    """A one-way message; never answered."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: Optional[Dict[str, Any]] = None


JSONRPCMessage = Union[JSONRPCRequest, JSONRPCResponse, JSONRPCErrorResponse, JSONRPCNotification]


class MCPMethods:
    """MCP method names handled by this server."""

    INITIALIZE = "initialize"
    INITIALIZED = "notifications/initialized"
    CANCEL = "notifications/cancelled"
    PING = "ping"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


class MCPCapabilities(BaseModel):
    """Server capabilities; this server only offers tools."""

    tools: Dict[str, Any]


class MCPClientCapabilities(BaseModel):
    # Client capabilities are accepted as-is and never acted on
    model_config = ConfigDict(extra="allow")


class MCPImplementation(BaseModel):
    name: str
    version: str


class MCPInitializeParams(BaseModel):
    protocolVersion: str
    capabilities: MCPClientCapabilities
    clientInfo: MCPImplementation


class MCPInitializeResult(BaseModel):
    protocolVersion: str
    capabilities: MCPCapabilities
    serverInfo: MCPImplementation
    instructions: Optional[str] = None


class MCPToolsListParams(BaseModel):
    cursor: Optional[str] = None


class MCPToolsListResult(BaseModel):
    tools: List[Dict[str, Any]]
    nextCursor: Optional[str] = None


class MCPToolsCallParams(BaseModel):
    name: str
    arguments: Optional[Dict[str, Any]] = None


class MCPToolsCallResult(BaseModel):
    """Tool output; failures of the tool itself set isError rather than a JSON-RPC error."""

    content: List[Dict[str, Any]]
    isError: bool = False


class JSONRPCHandler:
    """Builds replies and classifies incoming JSON-RPC objects."""

    @staticmethod
    def create_response(id: RequestId, result: Any) -> JSONRPCResponse:
        return JSONRPCResponse(id=id, result=result)

    @staticmethod
    def create_error_response(
        id: Any, code: int, message: str, data: Optional[Any] = None
    ) -> JSONRPCErrorResponse:
        """Build an error reply; an id that is not a valid JSON-RPC id is replaced by null."""
        return JSONRPCErrorResponse(
            id=coerce_request_id(id), error=JSONRPCError(code=code, message=message, data=data)
        )

    @staticmethod
    def parse_error(error: Exception) -> JSONRPCErrorResponse:
        """Reply for a body that is not valid JSON."""
        return JSONRPCHandler.create_error_response(None, PARSE_ERROR, f"Parse error: {error}")

    @staticmethod
    def parse_message(data: Dict[str, Any]) -> JSONRPCMessage:
        """
        Classify a decoded JSON object.

        Raises:
            ValueError: (pydantic.ValidationError included) for anything that
                is not a well-formed request, response or notification
        """
        if "id" not in data:
            return JSONRPCNotification.model_validate(data)
        # Checked before validation: lax mode would turn True or 1.0 into 1
        if data["id"] is not None and coerce_request_id(data["id"]) is None:
            raise ValueError(f"id must be a string or an integer, got {type(data['id']).__name__}")
        if "method" in data:
            return JSONRPCRequest.model_validate(data)
        if "result" in data:
            return JSONRPCResponse.model_validate(data)
        if "error" in data:
            return JSONRPCErrorResponse.model_validate(data)
        raise ValueError("message has an id but no method, result or error")

    @staticmethod
    def is_batch(data: Any) -> bool:
        return isinstance(data, list)
