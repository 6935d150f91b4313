"""
Shared fixtures: a recording httpx.MockTransport standing in for Google APIs.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from gcloud_client import GCloudClient, TenantCredentials


class FakeGoogle:
    """
    Records outbound requests and answers them.

    Responses are (status, body) pairs consumed in order; once exhausted the
    default response is returned. A custom handler can replace both.
    """

    def __init__(self, default_status: int = 200, default_body: Any = None):
        self.requests: List[httpx.Request] = []
        self.queue: List[httpx.Response] = []
        self.default_status = default_status
        self.default_body = {} if default_body is None else default_body
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def respond(self, status: int = 200, body: Any = None, headers: Optional[Dict[str, str]] = None):
        if body is None:
            self.queue.append(httpx.Response(status, headers=headers))
        else:
            self.queue.append(httpx.Response(status, json=body, headers=headers))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        if self.queue:
            return self.queue.pop(0)
        return httpx.Response(self.default_status, json=self.default_body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
def credentials() -> TenantCredentials:
    return TenantCredentials(access_token="ya29.test-token", project_id="my-project")


@pytest.fixture
def gcloud(google: FakeGoogle, credentials: TenantCredentials) -> GCloudClient:
    return GCloudClient(credentials, google.http_client())


def tool_payload(result: Dict[str, Any]) -> Any:
    """Decode the JSON text block of a tool result envelope."""
    return json.loads(result["content"][0]["text"])
