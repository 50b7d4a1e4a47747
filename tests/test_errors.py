"""Unit tests for error mapping helpers."""

import sys
import os
from unittest.mock import Mock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from sharing_hub.utils.errors import (
    ProvisioningError,
    RemoteRequestError,
    SharingHubError,
    ValidationError,
    format_error,
    handle_http_error,
    handle_refresh_error,
)


def http_error(status, content):
    return Mock(resp=Mock(status=status), content=content)


class TestHandleHttpError:
    def test_401_prompts_relogin(self):
        error = handle_http_error(http_error(401, b""))
        assert error.status == 401
        assert "log in again" in error.message

    def test_api_message_is_appended(self):
        error = handle_http_error(
            http_error(403, b'{"error": {"message": "Insufficient permissions"}}'), "f1"
        )
        assert error.message.endswith("[Insufficient permissions]")
        assert error.resource_id == "f1"
        assert "(resource: f1)" in str(error)

    def test_non_json_body_is_kept_raw(self):
        error = handle_http_error(http_error(502, b"<html>Bad Gateway</html>"))
        assert error.message == "API error (HTTP 502)"
        assert error.body == "<html>Bad Gateway</html>"

    def test_missing_response(self):
        error = handle_http_error(ValueError("weird"))
        assert error.status == 0


class TestHandleRefreshError:
    def test_maps_to_401(self):
        error = handle_refresh_error(ValueError("no refresh token"), "f1")
        assert error.status == 401
        assert "log in again" in error.message
        assert error.body == "no refresh token"
        assert error.resource_id == "f1"

    def test_same_message_as_http_401(self):
        from_refresh = handle_refresh_error(ValueError("expired"))
        from_http = handle_http_error(http_error(401, b""))
        assert from_refresh.message == from_http.message


class TestErrorTypes:
    def test_hierarchy(self):
        assert issubclass(RemoteRequestError, SharingHubError)
        assert issubclass(ValidationError, SharingHubError)
        assert issubclass(ProvisioningError, SharingHubError)

    def test_remote_default_message(self):
        assert RemoteRequestError(500, "").message == "HTTP error 500"

    def test_format_error(self):
        assert format_error("Share", ValidationError("bad")) == "Share failed: bad"
        assert format_error("Share", RuntimeError("oops")) == "Share failed: oops"
