"""Connectivity check for the calling tenant's credentials."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient

from .base import GCloudTool, define


async def test_connection(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.test_connection()


def connection_tools() -> List[GCloudTool]:
    return [
        define(
            "gcloud_test_connection",
            "Test the connection to Google Cloud APIs using the supplied access token "
            "and default project.",
            [],
            test_connection,
            "connection",
        ),
    ]
