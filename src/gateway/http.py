"""
Streamable-HTTP gateway using FastAPI.

Stateless multi-tenant front door for the MCP server:
- Every POST /mcp carries its own tenant credentials in headers
- One shared httpx.AsyncClient pools outbound connections across tenants
- Structured logging with elapsed_ms; tokens never reach a log line
"""

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from common.config import Config
from common.logging import TimedLogger, get_logger
from gcloud_client import GCloudApiError, GCloudClient
from gcloud_client.credentials import (
    ACCESS_TOKEN_HEADER,
    PROJECT_ID_HEADER,
    parse_tenant_credentials,
    validate_credentials,
)
from gcloud_mcp.jsonrpc import JSONRPCHandler
from gcloud_mcp.server import GCloudMCPServer
from gcloud_mcp.tools import build_registry

logger = get_logger(__name__)

SERVICES = [
    "Compute Engine (instances, disks, networks, firewalls)",
    "Cloud Storage (buckets, objects)",
    "Cloud Functions",
    "Cloud Run",
    "BigQuery (datasets, tables, queries)",
    "Pub/Sub (topics, subscriptions, messages)",
    "Cloud SQL (instances, databases)",
    "IAM (service accounts, policies, roles)",
    "Secret Manager (secrets, versions)",
    "Cloud DNS (managed zones, records)",
    "GKE (clusters, node pools)",
    "Cloud Logging (entries, logs)",
]


class HTTPGateway:
    """FastAPI gateway that authenticates tenants and hands payloads to the MCP server."""

    def __init__(self, config: Config, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.http_client = http_client
        self._owns_http_client = http_client is None
        self.mcp_server: Optional[GCloudMCPServer] = None
        self._startup_lock = asyncio.Lock()

        self.app = FastAPI(
            title="gcloud MCP Gateway",
            version=config.server.version,
            lifespan=self._lifespan,
        )
        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        await self._startup()
        try:
            yield
        finally:
            await self._shutdown()

    async def _startup(self) -> None:
        # Concurrent first requests must share one registry and one client
        async with self._startup_lock:
            if self.mcp_server is None:
                registry = await build_registry()
                self.mcp_server = GCloudMCPServer(registry, self.config)
            if self.http_client is None:
                self.http_client = httpx.AsyncClient(timeout=self.config.gcloud.request_timeout)
                self._owns_http_client = True

    async def _shutdown(self) -> None:
        if self._owns_http_client and self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None

    def _setup_routes(self) -> None:
        """Setup FastAPI routes."""

        @self.app.get("/health")
        async def health_check():
            return JSONResponse({"status": "ok", "server": self.config.server.name})

        @self.app.get("/")
        async def describe():
            return JSONResponse(self._description())

        @self.app.post("/mcp")
        async def mcp_endpoint(request: Request):
            return await self._handle_mcp(request)

        @self.app.get("/sse")
        async def sse_endpoint():
            return PlainTextResponse(
                "SSE transport is not supported. Use POST /mcp (Streamable HTTP).",
                status_code=501,
            )

    async def _handle_mcp(self, request: Request) -> Response:
        credentials = parse_tenant_credentials(request.headers)

        try:
            validate_credentials(credentials)
        except GCloudApiError as e:
            logger.info(event="mcp_request_unauthorized", client=_client_host(request))
            return JSONResponse(
                {
                    "error": "Unauthorized",
                    "message": e.message,
                    "required_headers": [ACCESS_TOKEN_HEADER],
                },
                status_code=401,
            )

        raw = await request.body()
        try:
            body = json.loads(raw)
        except ValueError as e:
            return JSONResponse(JSONRPCHandler.parse_error(e).model_dump(), status_code=400)

        # Lifespan normally runs first; requests served without it start lazily
        if self.mcp_server is None or self.http_client is None:
            await self._startup()

        client = GCloudClient(
            credentials,
            self.http_client,
            timeout=self.config.gcloud.request_timeout,
            user_agent=self.config.gcloud.user_agent,
        )

        with TimedLogger(
            logger,
            "mcp_request_handled",
            batch=JSONRPCHandler.is_batch(body),
            method=body.get("method") if isinstance(body, dict) else None,
            has_default_project=credentials.project_id is not None,
        ):
            response = await self.mcp_server.handle_payload(body, client)

        if response is None:
            return Response(status_code=202)
        return JSONResponse(response)

    def _description(self) -> Dict[str, Any]:
        return {
            "name": self.config.server.name,
            "version": self.config.server.version,
            "description": "Google Cloud Platform MCP Server - Multi-tenant",
            "endpoints": {
                "mcp": "/mcp (POST) - Streamable HTTP MCP endpoint",
                "health": "/health - Health check",
            },
            "authentication": {
                "description": "Pass tenant credentials via request headers",
                "required_headers": {
                    ACCESS_TOKEN_HEADER: (
                        "OAuth 2.0 access token (generate with: gcloud auth print-access-token)"
                    ),
                },
                "optional_headers": {
                    PROJECT_ID_HEADER: "Default project ID for API calls",
                },
            },
            "services": SERVICES,
        }


def _client_host(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def create_gateway_app(config: Config, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """Create and configure the FastAPI gateway application."""
    gateway = HTTPGateway(config, http_client)
    return gateway.app
