"""
The gcloud tool catalog.

Each service module exposes a factory returning its GCloudTool handlers;
build_registry() registers the complete catalog in a fixed order.
"""

from typing import Callable, List

from common.logging import get_logger
from gcloud_mcp.tool_registry import ToolRegistry

from .base import GCloudTool
from .bigquery import bigquery_tools
from .compute import compute_tools
from .connection import connection_tools
from .dns import dns_tools
from .functions import functions_tools
from .gke import gke_tools
from .iam import iam_tools
from .logging import logging_tools
from .pubsub import pubsub_tools
from .secretmanager import secretmanager_tools
from .sql import sql_tools
from .storage import storage_tools

logger = get_logger(__name__)

TOOL_FACTORIES: List[Callable[[], List[GCloudTool]]] = [
    compute_tools,
    storage_tools,
    functions_tools,
    bigquery_tools,
    pubsub_tools,
    sql_tools,
    iam_tools,
    secretmanager_tools,
    dns_tools,
    gke_tools,
    logging_tools,
    connection_tools,
]


async def build_registry() -> ToolRegistry:
    """Create a registry holding every gcloud tool."""
    registry = ToolRegistry()
    for factory in TOOL_FACTORIES:
        for handler in factory():
            await registry.register_tool_handler(handler)

    logger.info(
        event="tool_catalog_registered",
        tool_count=len(registry.tools),
        categories=await registry.get_tool_categories(),
    )
    return registry


__all__ = ["GCloudTool", "TOOL_FACTORIES", "build_registry"]
