"""Custom exceptions for the Sharing Hub client.

This module provides structured error handling with specific exception types
for different failure scenarios. All exceptions inherit from SharingHubError.
"""
import json
from typing import Optional, Any


class SharingHubError(Exception):
    """Base exception for all sharing-hub errors.

    Attributes:
        message: Human-readable error description.
        resource_id: Optional Drive resource ID related to the error.
    """

    def __init__(self, message: str, resource_id: Optional[str] = None) -> None:
        self.message = message
        self.resource_id = resource_id
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the error message, optionally including resource ID."""
        if self.resource_id:
            return f"{self.message} (resource: {self.resource_id})"
        return self.message


class RemoteRequestError(SharingHubError):
    """Raised when the Drive API returns a non-success response.

    Attributes:
        status: HTTP status code, or 0 when no response was received.
        body: Raw response body as text.
    """

    def __init__(
        self,
        status: int,
        body: str,
        message: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> None:
        self.status = status
        self.body = body
        super().__init__(message or f"HTTP error {status}", resource_id)


class ValidationError(SharingHubError):
    """Raised when required local input is missing or invalid."""
    pass


class ProvisioningError(SharingHubError):
    """Raised when the search-then-create sequence fails at either step."""

    def __init__(self, message: str, name: str, parent_id: Optional[str] = None) -> None:
        self.name = name
        self.parent_id = parent_id
        super().__init__(message, parent_id)


class ConfigurationError(SharingHubError):
    """Raised when required OAuth client credentials are absent."""
    pass


TOKEN_EXPIRED_MESSAGE = (
    "Authentication failed. The access token is invalid or expired; log in again."
)


def _extract_api_message(body: str) -> Optional[str]:
    """Pull error.message out of a Google JSON error body, if there is one."""
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict):
        return error.get("message")
    return None


def handle_http_error(error: Any, resource_id: Optional[str] = None) -> RemoteRequestError:
    """Convert googleapiclient HttpError to a RemoteRequestError.

    Args:
        error: The HttpError from googleapiclient.
        resource_id: Optional resource ID for context.

    Returns:
        A RemoteRequestError carrying the status and raw body.
    """
    try:
        status = int(error.resp.status)
    except (AttributeError, TypeError, ValueError):
        return RemoteRequestError(0, str(error), f"API error: {error}", resource_id)

    content = getattr(error, "content", b"") or b""
    body = content.decode("utf-8", "replace") if isinstance(content, bytes) else str(content)
    detail = _extract_api_message(body)

    if status == 401:
        message = TOKEN_EXPIRED_MESSAGE
    elif status == 403:
        message = "Access denied. Check sharing settings or the granted scopes."
    elif status == 404:
        message = "Resource not found. It may have been deleted or is not visible to this app."
    elif status == 429:
        message = "API quota exceeded. Please wait a moment and try again."
    else:
        message = f"API error (HTTP {status})"

    if detail:
        message = f"{message} [{detail}]"
    return RemoteRequestError(status, body, message, resource_id)


def handle_refresh_error(error: Exception, resource_id: Optional[str] = None) -> RemoteRequestError:
    """Convert a google-auth RefreshError to a 401 RemoteRequestError.

    Bearer-only credentials cannot be refreshed, so google-auth raises
    RefreshError where the server answered 401.
    """
    return RemoteRequestError(401, str(error), TOKEN_EXPIRED_MESSAGE, resource_id)


def format_error(action: str, error: Exception) -> str:
    """Format an error message consistently.

    Args:
        action: The action that failed (e.g., "Profile fetch", "Share").
        error: The exception that occurred.

    Returns:
        Formatted error string.
    """
    if isinstance(error, SharingHubError):
        return f"{action} failed: {error.message}"
    return f"{action} failed: {str(error)}"
