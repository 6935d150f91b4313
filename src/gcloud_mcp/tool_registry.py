"""
Tool registry for the gcloud MCP server.

Holds tool definitions and their handlers, validates call arguments against
the declared parameters and executes handlers with the per-request
GCloudClient. The registry itself is immutable after startup and shared by
all tenants.
"""

import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from common.logging import get_logger
from gcloud_client import GCloudClient

logger = get_logger(__name__)


class ToolParameterType(str, Enum):
    """Standard parameter types for MCP tools."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class ToolParameter(BaseModel):
    """Standard MCP tool parameter definition."""

    name: str
    type: ToolParameterType
    description: str
    required: bool = False
    default: Optional[Any] = None
    enum: Optional[List[Any]] = None
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    pattern: Optional[str] = None  # For string validation
    properties: Optional[Dict[str, "ToolParameter"]] = None  # For object types
    items: Optional["ToolParameter"] = None  # For array types


class Tool(BaseModel):
    """Standard MCP tool definition."""

    name: str
    description: str
    parameters: List[ToolParameter] = Field(default_factory=list)
    category: str = "general"
    version: str = "1.0.0"


@dataclass
class ToolExecution:
    """Result of tool execution."""

    success: bool
    result: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    execution_time_ms: Optional[float] = None


class ToolHandler(ABC):
    """Abstract base class for tool handlers."""

    @abstractmethod
    async def execute(self, client: GCloudClient, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the tool for one tenant's client."""
        pass

    @abstractmethod
    def get_tool_definition(self) -> Tool:
        """Get the tool definition for this handler."""
        pass


class ToolRegistry:
    """
    Registry for managing MCP tools.

    Provides tool registration, discovery, argument validation and execution.
    """

    def __init__(self):
        self.tools: Dict[str, Tool] = {}
        self.handlers: Dict[str, ToolHandler] = {}

    async def register_tool_handler(self, handler: ToolHandler) -> None:
        """Register a tool with its handler."""
        tool = handler.get_tool_definition()
        if tool.name in self.tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self.tools[tool.name] = tool
        self.handlers[tool.name] = handler

        logger.debug(
            event="tool_registered",
            tool_name=tool.name,
            parameters_count=len(tool.parameters),
            category=tool.category,
        )

    async def list_tools(self) -> List[Tool]:
        """List all registered tools in registration order."""
        return list(self.tools.values())

    async def get_tool(self, tool_name: str) -> Optional[Tool]:
        return self.tools.get(tool_name)

    async def get_tool_categories(self) -> List[str]:
        return sorted({tool.category for tool in self.tools.values()})

    async def execute_tool(
        self, tool_name: str, arguments: Optional[Dict[str, Any]], client: GCloudClient
    ) -> ToolExecution:
        """
        Execute a tool with given arguments.

        Args:
            tool_name: Name of the tool to execute
            arguments: Arguments to pass to the tool
            client: GCloudClient bound to the calling tenant

        Returns:
            ToolExecution result with success status and results
        """
        start_time = time.time()
        arguments = dict(arguments or {})

        try:
            if tool_name not in self.tools:
                return ToolExecution(success=False, error=f"Tool '{tool_name}' not found")

            tool = self.tools[tool_name]
            handler = self.handlers[tool_name]

            validation_error = self._validate_arguments(tool, arguments)
            if validation_error:
                return ToolExecution(
                    success=False, error=f"Argument validation failed: {validation_error}"
                )

            arguments = self._apply_defaults(tool, arguments)

            result = await handler.execute(client, arguments)

            execution_time = (time.time() - start_time) * 1000

            logger.info(
                event="tool_executed",
                tool_name=tool_name,
                execution_time_ms=round(execution_time, 2),
                is_error=bool(result.get("isError")),
            )

            return ToolExecution(success=True, result=result, execution_time_ms=execution_time)

        except Exception as e:
            execution_time = (time.time() - start_time) * 1000

            logger.error(
                event="tool_execution_error",
                tool_name=tool_name,
                error=str(e),
                error_type=type(e).__name__,
                execution_time_ms=round(execution_time, 2),
            )

            return ToolExecution(success=False, error=str(e), execution_time_ms=execution_time)

    @staticmethod
    def _apply_defaults(tool: Tool, arguments: Dict[str, Any]) -> Dict[str, Any]:
        for param in tool.parameters:
            if param.default is not None and arguments.get(param.name) is None:
                arguments[param.name] = param.default
        return arguments

    def _validate_arguments(self, tool: Tool, arguments: Dict[str, Any]) -> Optional[str]:
        """
        Validate tool arguments against parameter schema.

        Returns:
            None if valid, error message if invalid
        """
        params = {param.name: param for param in tool.parameters}

        for param in tool.parameters:
            if param.required and param.name not in arguments:
                return f"Required parameter '{param.name}' is missing"

        for param_name, value in arguments.items():
            param_def = params.get(param_name)
            if param_def is None:
                return f"Unknown parameter '{param_name}'"

            type_error = self._validate_parameter_type(param_def, value)
            if type_error:
                return f"Parameter '{param_name}': {type_error}"

        return None

    def _validate_parameter_type(self, param: ToolParameter, value: Any) -> Optional[str]:
        """
        Validate a single parameter value.

        Returns:
            None if valid, error message if invalid
        """
        if value is None:
            if param.required:
                return "is required but got null"
            return None

        if param.type == ToolParameterType.STRING:
            if not isinstance(value, str):
                return f"expected string, got {type(value).__name__}"

            if param.pattern and not re.match(param.pattern, value):
                return f"does not match pattern {param.pattern}"

        elif param.type == ToolParameterType.INTEGER:
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                return f"expected integer, got {type(value).__name__}"

            bound_error = self._check_bounds(param, value)
            if bound_error:
                return bound_error

        elif param.type == ToolParameterType.NUMBER:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"expected number, got {type(value).__name__}"

            bound_error = self._check_bounds(param, value)
            if bound_error:
                return bound_error

        elif param.type == ToolParameterType.BOOLEAN:
            if not isinstance(value, bool):
                return f"expected boolean, got {type(value).__name__}"

        elif param.type == ToolParameterType.ARRAY:
            if not isinstance(value, list):
                return f"expected array, got {type(value).__name__}"

            if param.items:
                for i, item in enumerate(value):
                    item_error = self._validate_parameter_type(param.items, item)
                    if item_error:
                        return f"item {i}: {item_error}"

        elif param.type == ToolParameterType.OBJECT:
            if not isinstance(value, dict):
                return f"expected object, got {type(value).__name__}"

            if param.properties:
                for prop_name, prop in param.properties.items():
                    if prop.required and prop_name not in value:
                        return f"missing required field '{prop_name}'"
                    if prop_name in value:
                        prop_error = self._validate_parameter_type(prop, value[prop_name])
                        if prop_error:
                            return f"field '{prop_name}': {prop_error}"

        if param.enum and value not in param.enum:
            return f"must be one of {param.enum}, got {value}"

        return None

    @staticmethod
    def _check_bounds(param: ToolParameter, value: Union[int, float]) -> Optional[str]:
        if param.minimum is not None and value < param.minimum:
            return f"must be >= {param.minimum}"
        if param.maximum is not None and value > param.maximum:
            return f"must be <= {param.maximum}"
        return None
