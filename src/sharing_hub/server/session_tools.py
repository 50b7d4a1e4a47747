"""Login, identity, and session MCP tools."""

import logging

from .main import mcp, get_orchestrator, render_errors, render_status
from ..auth import run_login_flow, verify_identity_credential
from ..utils.constants import CATEGORY_DRIVE_LOGIN, CATEGORY_ONE_TAP
from ..utils.errors import ConfigurationError, SharingHubError, format_error

logger = logging.getLogger(__name__)


@mcp.tool()
def connect_google_drive() -> str:
    """
    Log in with Google in the browser and connect Google Drive.

    Opens the consent screen for the configured Drive scope profile. On
    success the app folder is located or created in the background and the
    project references are loaded; call session_status to follow progress.
    """
    orchestrator = get_orchestrator()
    try:
        token = run_login_flow()
    except ConfigurationError as e:
        orchestrator.on_login_error(format_error(CATEGORY_DRIVE_LOGIN, e))
        return f"**Authentication Error:** {e.message}"
    except Exception as e:
        logger.error("Google login flow failed: %s", e, exc_info=True)
        orchestrator.on_login_error(format_error(CATEGORY_DRIVE_LOGIN, e))
        return f"**Error:** An unexpected error occurred: {e}"

    try:
        orchestrator.on_login_success(token)
    except Exception as e:
        logger.error("Could not start the session: %s", e, exc_info=True)
        return f"Google Drive login failed: Unexpected error ({type(e).__name__}: {e})"
    return "Connected to Google Drive. Setting up the app folder..." + render_errors(orchestrator)


@mcp.tool()
def connect_with_access_token(access_token: str) -> str:
    """
    Connect Google Drive with an access token obtained elsewhere.

    Args:
        access_token: OAuth bearer token with the profile and Drive scopes.
    """
    try:
        orchestrator = get_orchestrator()
        if not access_token or not access_token.strip():
            orchestrator.on_login_error("Google Drive login returned no access token")
            return "Google Drive login failed: no access token provided."
        orchestrator.on_login_success(access_token.strip())
        return "Connected to Google Drive. Setting up the app folder..."
    except Exception as e:
        return f"Google Drive login failed: Unexpected error ({type(e).__name__}: {e})"


@mcp.tool()
def confirm_identity(id_token: str) -> str:
    """
    Confirm who the user is with a Google ID token (One Tap credential).

    This does not connect Google Drive and does not affect the app folder.

    Args:
        id_token: The ID token JWT issued by Google Identity Services.
    """
    orchestrator = get_orchestrator()
    try:
        identity = verify_identity_credential(id_token)
    except SharingHubError as e:
        orchestrator.on_one_tap_failure(format_error(CATEGORY_ONE_TAP, e))
        return format_error(CATEGORY_ONE_TAP, e)
    except Exception as e:
        logger.error("ID token check failed: %s", e, exc_info=True)
        orchestrator.on_one_tap_failure(format_error(CATEGORY_ONE_TAP, e))
        return format_error(CATEGORY_ONE_TAP, e)
    orchestrator.on_one_tap_success(identity)
    return f"Identity confirmed: {identity.email or 'unknown email'}"


@mcp.tool()
def logout() -> str:
    """Forget the access token, identity, and all session data."""
    try:
        get_orchestrator().logout()
        return "Logged out successfully"
    except Exception as e:
        return f"Logout failed: Unexpected error ({type(e).__name__}: {e})"


@mcp.tool()
def session_status() -> str:
    """Show login state, profile, app folder, project references, and errors."""
    try:
        return render_status(get_orchestrator())
    except Exception as e:
        return f"Session status failed: Unexpected error ({type(e).__name__}: {e})"
