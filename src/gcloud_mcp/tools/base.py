"""
Shared building blocks for the gcloud tool catalog.

A GCloudTool binds a Tool definition to an async operation taking the
per-request GCloudClient and the validated arguments. The operation returns
plain data; GCloudTool owns project resolution and the response envelope.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional

from common.logging import get_logger
from gcloud_client import GCloudApiError, GCloudClient
from gcloud_client.credentials import resolve_project
from gcloud_client.formatters import format_error, format_response
from gcloud_mcp.tool_registry import Tool, ToolHandler, ToolParameter, ToolParameterType

logger = get_logger(__name__)

Operation = Callable[[GCloudClient, Dict[str, Any]], Awaitable[Any]]

PROJECT_ID = "projectId"
FORMAT = "format"


def project_param(required: bool = False) -> ToolParameter:
    return ToolParameter(
        name=PROJECT_ID,
        type=ToolParameterType.STRING,
        description="GCP project ID (defaults to the X-GCloud-Project-ID header)",
        required=required,
    )


def format_param() -> ToolParameter:
    return ToolParameter(
        name=FORMAT,
        type=ToolParameterType.STRING,
        description="Response format",
        enum=["json", "markdown"],
        default="json",
    )


def string_param(name: str, description: str, required: bool = True, **kwargs: Any) -> ToolParameter:
    return ToolParameter(
        name=name, type=ToolParameterType.STRING, description=description, required=required, **kwargs
    )


def integer_param(name: str, description: str, required: bool = False, **kwargs: Any) -> ToolParameter:
    return ToolParameter(
        name=name, type=ToolParameterType.INTEGER, description=description, required=required, **kwargs
    )


def boolean_param(name: str, description: str, default: Optional[bool] = None) -> ToolParameter:
    return ToolParameter(
        name=name, type=ToolParameterType.BOOLEAN, description=description, default=default
    )


def items_of(response: Optional[Dict[str, Any]], key: str) -> List[Any]:
    """
    Extract a list field from a REST response; absent lists become [].

    Only the items are kept. List tools show the first page, and
    nextPageToken is not surfaced.
    """
    if not response:
        return []
    return response.get(key) or []


def mutation(message: str, **payload: Any) -> Dict[str, Any]:
    """Build the success payload for a create/delete/action tool."""
    result: Dict[str, Any] = {"success": True, "message": message}
    result.update(payload)
    return result


class GCloudTool(ToolHandler):
    """Tool handler backed by a single GCloudClient operation."""

    def __init__(
        self,
        name: str,
        description: str,
        parameters: List[ToolParameter],
        operation: Operation,
        category: str,
        resource_type: Optional[str] = None,
        resolve_project_id: bool = True,
    ):
        self.definition = Tool(
            name=name, description=description, parameters=parameters, category=category
        )
        self.operation = operation
        self.resource_type = resource_type
        self.resolve_project_id = resolve_project_id and any(
            param.name == PROJECT_ID for param in parameters
        )

    def get_tool_definition(self) -> Tool:
        return self.definition

    async def execute(self, client: GCloudClient, arguments: Dict[str, Any]) -> Dict[str, Any]:
        args = dict(arguments)
        output_format = args.pop(FORMAT, None) or "json"

        try:
            if self.resolve_project_id:
                args[PROJECT_ID] = resolve_project(args.get(PROJECT_ID), client.credentials)
            data = await self.operation(client, args)
        except (GCloudApiError, ValueError) as e:
            logger.warning(
                event="gcloud_tool_failed",
                tool_name=self.definition.name,
                error_type=type(e).__name__,
                status_code=getattr(e, "status_code", None),
            )
            return format_error(e)

        return format_response(data, output_format, self.resource_type)


def define(
    name: str,
    description: str,
    parameters: List[ToolParameter],
    operation: Operation,
    category: str,
    resource_type: Optional[str] = None,
    formatted: bool = False,
    resolve_project_id: bool = True,
) -> GCloudTool:
    """
    Declare a catalog entry.

    Args:
        name: Tool name (gcloud_ prefixed)
        description: Human readable description shown in tools/list
        parameters: Declared parameters, projectId included where relevant
        operation: async (client, args) -> data
        category: Service area, used for grouping
        resource_type: Label for markdown output
        formatted: Whether the tool accepts the optional format argument
        resolve_project_id: Fill projectId from the tenant default when omitted
    """
    if formatted:
        parameters = parameters + [format_param()]
    return GCloudTool(
        name, description, parameters, operation, category, resource_type, resolve_project_id
    )
