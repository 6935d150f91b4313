"""
Tenant credential parsing.

A single server deployment serves many tenants: each request carries its own
OAuth access token (and optionally a default project) in headers. Over stdio
the same values come from the process environment instead.

Required header:
    X-GCloud-Access-Token: OAuth 2.0 access token (gcloud auth print-access-token)

Optional header:
    X-GCloud-Project-ID: Default project ID for API calls
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, field_validator

from .errors import AuthenticationError

ACCESS_TOKEN_HEADER = "X-GCloud-Access-Token"
PROJECT_ID_HEADER = "X-GCloud-Project-ID"

ACCESS_TOKEN_ENV = "GCLOUD_ACCESS_TOKEN"
PROJECT_ID_ENV = "GCLOUD_PROJECT_ID"


class TenantCredentials(BaseModel):
    """Per-request credentials for outbound calls."""

    access_token: Optional[str] = None
    project_id: Optional[str] = None

    @field_validator("access_token", "project_id", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def __repr__(self) -> str:
        token = "***" if self.access_token else None
        return f"TenantCredentials(access_token={token!r}, project_id={self.project_id!r})"

    __str__ = __repr__


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # Starlette/httpx headers are case-insensitive already; plain dicts are not
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def parse_tenant_credentials(headers: Mapping[str, str]) -> TenantCredentials:
    """Parse tenant credentials from request headers."""
    return TenantCredentials(
        access_token=_get_header(headers, ACCESS_TOKEN_HEADER),
        project_id=_get_header(headers, PROJECT_ID_HEADER),
    )


def credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> TenantCredentials:
    """Read tenant credentials from the environment (stdio transport)."""
    if environ is None:
        environ = os.environ
    return TenantCredentials(
        access_token=environ.get(ACCESS_TOKEN_ENV),
        project_id=environ.get(PROJECT_ID_ENV),
    )


def validate_credentials(credentials: TenantCredentials) -> None:
    """
    Ensure the credentials can authenticate outbound calls.

    Raises:
        AuthenticationError: if no access token was supplied
    """
    if not credentials.access_token:
        raise AuthenticationError(
            f"Missing {ACCESS_TOKEN_HEADER} header. "
            "Generate a token with: gcloud auth print-access-token"
        )


def resolve_project(explicit: Optional[str], credentials: TenantCredentials) -> str:
    """
    Pick the project for a call: the explicit argument wins, then the tenant default.

    Raises:
        ValueError: if neither is available
    """
    if explicit:
        return explicit
    if credentials.project_id:
        return credentials.project_id
    raise ValueError(
        f"projectId is required: pass it as an argument or set the {PROJECT_ID_HEADER} header"
    )
