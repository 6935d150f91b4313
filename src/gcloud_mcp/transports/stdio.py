"""
Standard I/O transport for the gcloud MCP server.

MCP clients spawn the server as a subprocess and exchange line-delimited
JSON-RPC messages over stdin/stdout. stdout carries protocol traffic only;
diagnostics go to stderr.

Tenant credentials come from GCLOUD_ACCESS_TOKEN / GCLOUD_PROJECT_ID, read
once at startup.

Reference: https://modelcontextprotocol.io/specification/2025-06-18/basic/transports
"""

import asyncio
import json
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import httpx

from common.config import Config
from common.logging import get_logger
from gcloud_client import GCloudClient
from gcloud_client.credentials import credentials_from_env
from ..jsonrpc import INTERNAL_ERROR, JSONRPCHandler
from ..server import GCloudMCPServer
from ..tools import build_registry

logger = get_logger(__name__)


class StdioTransport:
    """
    Standard I/O transport for MCP communication.

    Reads one JSON-RPC payload per stdin line and writes one compact JSON
    response per stdout line.
    """

    def __init__(self, mcp_server: GCloudMCPServer, client: GCloudClient):
        self.mcp_server = mcp_server
        self.client = client
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="stdio")
        self.running = False

    async def run(self) -> None:
        """Serve stdin until EOF."""
        self.running = True
        logger.info(event="stdio_transport_started")
        self._log_to_stderr("MCP server ready on stdio")

        loop = asyncio.get_running_loop()
        try:
            while self.running:
                line = await loop.run_in_executor(self.executor, sys.stdin.readline)

                if not line:  # EOF
                    self._log_to_stderr("Received EOF, shutting down")
                    break

                response = await self.handle_line(line)
                if response is not None:
                    await self._write_stdout(response)
        finally:
            self.running = False
            self.executor.shutdown(wait=False)
            logger.info(event="stdio_transport_stopped")

    async def handle_line(self, line: str) -> Optional[Any]:
        """
        Handle one stdin line.

        Returns:
            The JSON-RPC response to write, or None when nothing is due
        """
        line = line.strip()
        if not line:
            return None

        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            return JSONRPCHandler.parse_error(e).model_dump()

        try:
            return await self.mcp_server.handle_payload(data, self.client)
        except Exception as e:
            # One bad line must not end the session
            logger.error(event="message_handle_error", error=str(e), error_type=type(e).__name__)
            return JSONRPCHandler.create_error_response(
                None, INTERNAL_ERROR, f"Internal error: {str(e)}"
            ).model_dump()

    async def _write_stdout(self, data: Any) -> None:
        message = json.dumps(data, separators=(",", ":"))
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self.executor, lambda: print(message, flush=True))

    @staticmethod
    def _log_to_stderr(message: str) -> None:
        print(f"[MCP] {message}", file=sys.stderr, flush=True)


class StdioServer:
    """Standalone stdio MCP server bound to the credentials in the environment."""

    def __init__(self, config: Config):
        self.config = config

    async def run(self) -> None:
        credentials = credentials_from_env()
        if not credentials.access_token:
            logger.warning(
                event="stdio_missing_access_token",
                message="GCLOUD_ACCESS_TOKEN is not set; tool calls will fail with UNAUTHENTICATED",
            )

        registry = await build_registry()
        mcp_server = GCloudMCPServer(registry, self.config)

        async with httpx.AsyncClient(timeout=self.config.gcloud.request_timeout) as http:
            client = GCloudClient(
                credentials,
                http,
                timeout=self.config.gcloud.request_timeout,
                user_agent=self.config.gcloud.user_agent,
            )
            transport = StdioTransport(mcp_server, client)
            await transport.run()


async def main(config: Optional[Config] = None) -> None:
    """Main entry point for stdio server."""
    await StdioServer(config or Config()).run()
