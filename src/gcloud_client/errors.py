"""
Error taxonomy for Google Cloud REST calls.

Every non-2xx response is classified by HTTP status into one of a small,
fixed set of exceptions. Nothing here is retried; errors are surfaced to the
MCP caller as a structured payload (see formatters.format_error).
"""

from typing import Optional

import httpx

DEFAULT_RETRY_AFTER = 60


class GCloudApiError(Exception):
    """Generic Google Cloud API error."""

    default_code = "API_ERROR"

    def __init__(
        self, message: str, status_code: Optional[int] = None, code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code or self.default_code

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {
            "error": True,
            "name": self.name,
            "message": self.message,
            "code": self.code,
            "statusCode": self.status_code,
        }


class AuthenticationError(GCloudApiError):
    """401: missing, expired or invalid access token."""

    default_code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Authentication failed. Check your access token."):
        super().__init__(message, status_code=401)


class PermissionDeniedError(GCloudApiError):
    """403: the token lacks the IAM permission for the call."""

    default_code = "PERMISSION_DENIED"

    def __init__(self, message: str = "Permission denied. Check your IAM permissions."):
        super().__init__(message, status_code=403)


class NotFoundError(GCloudApiError):
    """404: the addressed resource does not exist."""

    default_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", identifier: Optional[str] = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{message}: {identifier}"
        super().__init__(message, status_code=404)
        self.resource = resource
        self.identifier = identifier


class RateLimitError(GCloudApiError):
    """429: quota or rate limit exceeded."""

    default_code = "RATE_LIMITED"

    def __init__(
        self, message: str = "Rate limit exceeded", retry_after: int = DEFAULT_RETRY_AFTER
    ):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["retryAfter"] = self.retry_after
        return data


def _parse_retry_after(value: Optional[str]) -> int:
    if not value:
        return DEFAULT_RETRY_AFTER
    try:
        return int(value)
    except ValueError:
        # HTTP-date form is not worth parsing for an advisory value
        return DEFAULT_RETRY_AFTER


def _error_message(response: httpx.Response) -> str:
    fallback = f"API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback

    if not isinstance(body, dict):
        return fallback

    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if body.get("message"):
        return str(body["message"])
    return fallback


def raise_for_status(response: httpx.Response) -> None:
    """
    Map an HTTP response onto the error taxonomy.

    Raises:
        RateLimitError, AuthenticationError, PermissionDeniedError,
        NotFoundError or GCloudApiError for any non-2xx status.
    """
    status = response.status_code

    if status == 429:
        raise RateLimitError(retry_after=_parse_retry_after(response.headers.get("Retry-After")))
    if status == 401:
        raise AuthenticationError()
    if status == 403:
        raise PermissionDeniedError()
    if status == 404:
        raise NotFoundError("Resource", str(response.request.url))
    if not response.is_success:
        raise GCloudApiError(_error_message(response), status_code=status)
