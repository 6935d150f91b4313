"""
Google Cloud REST client.

Thin async wrapper over the public Google Cloud REST APIs, authenticated
per request with tenant-supplied OAuth access tokens.
"""

from .client import API_URLS, GCloudClient
from .credentials import TenantCredentials, parse_tenant_credentials, validate_credentials
from .errors import (
    AuthenticationError,
    GCloudApiError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)

__all__ = [
    "API_URLS",
    "GCloudClient",
    "TenantCredentials",
    "parse_tenant_credentials",
    "validate_credentials",
    "AuthenticationError",
    "GCloudApiError",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitError",
]
