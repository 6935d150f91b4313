"""
Tests for the MCP protocol layer: JSON-RPC helpers, handshake, pagination and tool calls.
"""

from unittest.mock import AsyncMock, patch

import pytest

from conftest import tool_payload
from gcloud_mcp.jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JSONRPCHandler,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    MCPMethods,
    coerce_request_id,
)
from gcloud_mcp.server import DEFAULT_PAGE_SIZE, MCP_PROTOCOL_VERSION, GCloudMCPServer
from gcloud_mcp.tool_registry import Tool, ToolParameter, ToolParameterType, ToolRegistry
from gcloud_mcp.tools import build_registry


def _request(method, params=None, id=1):
    message = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        message["params"] = params
    return message


class TestJSONRPCProtocol:
    """JSON-RPC 2.0 message helpers."""

    @pytest.mark.parametrize("value", ["abc", 0, 42])
    def test_coerce_keeps_valid_ids(self, value):
        assert coerce_request_id(value) == value

    @pytest.mark.parametrize("value", [None, True, 1.5, {"a": 1}, [1]])
    def test_coerce_drops_unusable_ids(self, value):
        assert coerce_request_id(value) is None

    def test_error_response_with_object_id(self):
        response = JSONRPCHandler.create_error_response({"a": 1}, INVALID_REQUEST, "bad")

        assert response.id is None
        assert response.error.code == INVALID_REQUEST

    def test_parse_error(self):
        response = JSONRPCHandler.parse_error(ValueError("Expecting value"))

        assert response.id is None
        assert response.error.code == PARSE_ERROR
        assert response.error.message == "Parse error: Expecting value"

    def test_parse_message_kinds(self):
        assert isinstance(
            JSONRPCHandler.parse_message({"jsonrpc": "2.0", "id": 1, "method": "ping"}),
            JSONRPCRequest,
        )
        assert isinstance(
            JSONRPCHandler.parse_message({"jsonrpc": "2.0", "method": "notifications/initialized"}),
            JSONRPCNotification,
        )
        assert isinstance(
            JSONRPCHandler.parse_message({"jsonrpc": "2.0", "id": 1, "result": {}}),
            JSONRPCResponse,
        )

    def test_parse_message_rejects_bare_id(self):
        with pytest.raises(ValueError):
            JSONRPCHandler.parse_message({"jsonrpc": "2.0", "id": 1})

    @pytest.mark.parametrize("value", [True, 1.0])
    def test_parse_message_rejects_non_integer_numbers(self, value):
        with pytest.raises(ValueError):
            JSONRPCHandler.parse_message({"jsonrpc": "2.0", "id": value, "method": "ping"})


class TestHandshake:
    @pytest.mark.asyncio
    async def test_initialize(self, gcloud):
        server = GCloudMCPServer(await build_registry())

        response = await server.handle_payload(
            _request(
                MCPMethods.INITIALIZE,
                {
                    "protocolVersion": MCP_PROTOCOL_VERSION,
                    "capabilities": {},
                    "clientInfo": {"name": "test-client", "version": "0.1"},
                },
            ),
            gcloud,
        )

        result = response["result"]
        assert response["id"] == 1
        assert result["protocolVersion"] == MCP_PROTOCOL_VERSION
        assert result["capabilities"]["tools"] == {"listChanged": False}
        assert result["serverInfo"] == {"name": "gcloud-mcp", "version": "1.0.0"}
        assert "projectId" in result["instructions"]

    @pytest.mark.asyncio
    async def test_initialize_lenient_client_info(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(
            _request(MCPMethods.INITIALIZE, {"protocolVersion": "2024-11-05", "clientInfo": {}}),
            gcloud,
        )

        assert response["result"]["protocolVersion"] == MCP_PROTOCOL_VERSION

    @pytest.mark.asyncio
    async def test_initialize_requires_params(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(_request(MCPMethods.INITIALIZE), gcloud)

        assert response["error"]["code"] == INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_initialized_notification_has_no_response(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())
        notification = {"jsonrpc": "2.0", "method": MCPMethods.INITIALIZED}

        assert await server.handle_payload(notification, gcloud) is None

    @pytest.mark.asyncio
    async def test_ping(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(_request(MCPMethods.PING, id="p-1"), gcloud)

        assert response["id"] == "p-1"
        assert "timestamp" in response["result"]


class TestToolsList:
    @pytest.mark.asyncio
    async def test_first_page(self, gcloud):
        server = GCloudMCPServer(await build_registry())

        response = await server.handle_payload(_request(MCPMethods.TOOLS_LIST), gcloud)

        result = response["result"]
        assert len(result["tools"]) == DEFAULT_PAGE_SIZE
        assert result["nextCursor"] == str(DEFAULT_PAGE_SIZE)
        first = result["tools"][0]
        assert first["name"] == "gcloud_list_instances"
        assert first["inputSchema"]["required"] == ["zone"]
        assert first["inputSchema"]["properties"]["format"]["default"] == "json"

    @pytest.mark.asyncio
    async def test_pages_cover_catalog(self, gcloud):
        registry = await build_registry()
        server = GCloudMCPServer(registry)

        names = []
        cursor = None
        while True:
            params = {"cursor": cursor} if cursor else None
            result = (await server.handle_payload(_request(MCPMethods.TOOLS_LIST, params), gcloud))[
                "result"
            ]
            names.extend(tool["name"] for tool in result["tools"])
            cursor = result.get("nextCursor")
            if cursor is None:
                break

        assert names == [tool.name for tool in await registry.list_tools()]

    @pytest.mark.asyncio
    async def test_last_page_omits_cursor(self, gcloud):
        tools = [Tool(name=f"t{i}", description="t") for i in range(3)]
        server = GCloudMCPServer(ToolRegistry())

        with patch.object(server.tool_registry, "list_tools", AsyncMock(return_value=tools)):
            response = await server.handle_payload(_request(MCPMethods.TOOLS_LIST), gcloud)

        assert [tool["name"] for tool in response["result"]["tools"]] == ["t0", "t1", "t2"]
        assert "nextCursor" not in response["result"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cursor", ["abc", "-1"])
    async def test_invalid_cursor(self, gcloud, cursor):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(
            _request(MCPMethods.TOOLS_LIST, {"cursor": cursor}), gcloud
        )

        assert response["error"]["code"] == INVALID_PARAMS
        assert response["error"]["message"] == "Invalid cursor format"

    def test_nested_schema(self):
        tool = Tool(
            name="t",
            description="t",
            parameters=[
                ToolParameter(
                    name="bindings",
                    type=ToolParameterType.ARRAY,
                    description="Role bindings",
                    required=True,
                    items=ToolParameter(
                        name="binding",
                        type=ToolParameterType.OBJECT,
                        description="Binding",
                        properties={
                            "role": ToolParameter(
                                name="role",
                                type=ToolParameterType.STRING,
                                description="Role",
                                required=True,
                            )
                        },
                    ),
                )
            ],
        )

        schema = GCloudMCPServer.tool_input_schema(tool)

        assert schema["required"] == ["bindings"]
        items = schema["properties"]["bindings"]["items"]
        assert items["type"] == "object"
        assert items["properties"]["role"]["type"] == "string"
        assert items["required"] == ["role"]


class TestToolsCall:
    @pytest.mark.asyncio
    async def test_successful_call(self, google, gcloud):
        server = GCloudMCPServer(await build_registry())
        google.respond(200, {"topics": [{"name": "projects/my-project/topics/events"}]})

        response = await server.handle_payload(
            _request(MCPMethods.TOOLS_CALL, {"name": "gcloud_list_topics", "arguments": {}}),
            gcloud,
        )

        result = response["result"]
        assert result["isError"] is False
        assert tool_payload(result) == [{"name": "projects/my-project/topics/events"}]

    @pytest.mark.asyncio
    async def test_api_failure_is_tool_error_not_protocol_error(self, google, gcloud):
        server = GCloudMCPServer(await build_registry())
        google.respond(404)

        response = await server.handle_payload(
            _request(
                MCPMethods.TOOLS_CALL,
                {"name": "gcloud_get_topic", "arguments": {"topicName": "missing"}},
            ),
            gcloud,
        )

        assert "error" not in response
        assert response["result"]["isError"] is True
        assert tool_payload(response["result"])["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(
            _request(MCPMethods.TOOLS_CALL, {"name": "gcloud_nope"}), gcloud
        )

        assert response["result"]["isError"] is True
        assert response["result"]["content"][0]["text"] == "Tool 'gcloud_nope' not found"

    @pytest.mark.asyncio
    async def test_missing_params(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(_request(MCPMethods.TOOLS_CALL), gcloud)

        assert response["error"]["code"] == INVALID_PARAMS


class TestDispatch:
    @pytest.mark.asyncio
    async def test_unknown_method(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(_request("resources/list"), gcloud)

        assert response["error"]["code"] == METHOD_NOT_FOUND

    @pytest.mark.asyncio
    async def test_non_object_message(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload("ping", gcloud)

        assert response["error"]["code"] == INVALID_REQUEST
        assert response["id"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", [{"a": 1}, 1.5, [1], True])
    async def test_unusable_id_is_invalid_request(self, gcloud, bad_id):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(_request(MCPMethods.PING, id=bad_id), gcloud)

        assert response["error"]["code"] == INVALID_REQUEST
        assert response["id"] is None

    @pytest.mark.asyncio
    async def test_unusable_id_inside_batch(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(
            [_request(MCPMethods.PING, id={"x": 1}), _request(MCPMethods.PING, id=2)], gcloud
        )

        assert response[0]["id"] is None
        assert response[0]["error"]["code"] == INVALID_REQUEST
        assert response[1]["id"] == 2
        assert "result" in response[1]

    @pytest.mark.asyncio
    async def test_empty_batch(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload([], gcloud)

        assert response["error"]["code"] == INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_batch_skips_notifications(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(
            [
                _request(MCPMethods.PING, id=1),
                {"jsonrpc": "2.0", "method": MCPMethods.INITIALIZED},
                _request("nope", id=2),
            ],
            gcloud,
        )

        assert [item["id"] for item in response] == [1, 2]
        assert "result" in response[0]
        assert response[1]["error"]["code"] == METHOD_NOT_FOUND

    @pytest.mark.asyncio
    async def test_notification_only_batch(self, gcloud):
        server = GCloudMCPServer(ToolRegistry())

        response = await server.handle_payload(
            [{"jsonrpc": "2.0", "method": MCPMethods.CANCEL, "params": {"requestId": 3}}],
            gcloud,
        )

        assert response is None
