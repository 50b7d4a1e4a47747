"""
Core Google OAuth Logic for Sharing Hub.

This module wraps the identity provider: the installed-app login flow that
yields an access token, the passive ID token check, and the profile fetch.
Tokens are treated as opaque and short-lived. Refresh tokens returned by the
flow are discarded; an expired token means logging in again.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Tuple

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2 import id_token
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..client.models import UserProfile
from ..utils.errors import RemoteRequestError, ValidationError, handle_http_error, handle_refresh_error
from .oauth_config import OAuthConfig, get_oauth_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    """Opaque bearer credential scoped to the granted permission set."""

    value: str = field(repr=False)
    scopes: Tuple[str, ...] = ()
    expires_at: Optional[datetime] = None

    @classmethod
    def from_credentials(cls, credentials: Any) -> "AccessToken":
        """Keep only the bearer token from a google-auth Credentials object."""
        token = getattr(credentials, "token", None)
        if not token:
            raise ValidationError("Login flow returned no access token")
        scopes = getattr(credentials, "granted_scopes", None) or getattr(
            credentials, "scopes", None
        )
        return cls(
            value=token,
            scopes=tuple(scopes or ()),
            expires_at=getattr(credentials, "expiry", None),
        )


@dataclass(frozen=True)
class IdentityCredential:
    """Proof of identity from the passive sign-in surface. Carries no Drive scope."""

    credential: str = field(repr=False)
    email: Optional[str] = None
    name: Optional[str] = None


def run_login_flow(oauth_config: Optional[OAuthConfig] = None) -> AccessToken:
    """
    Run the browser-based login and return the resulting access token.

    Args:
        oauth_config: Configuration to use; defaults to the global instance.

    Returns:
        The access token granted for the configured scopes.

    Raises:
        ConfigurationError: If no OAuth client credentials are configured.
    """
    config = oauth_config or get_oauth_config()
    flow = InstalledAppFlow.from_client_config(config.client_config(), config.scopes)
    logger.info("Starting Google login for Drive profile '%s'", config.drive_profile)
    credentials = flow.run_local_server(port=0)
    token = AccessToken.from_credentials(credentials)
    logger.info("Google login completed with %d scopes", len(token.scopes))
    return token


def fetch_user_profile(access_token: str) -> UserProfile:
    """
    Fetch user profile information.

    Args:
        access_token: Bearer token with the userinfo scopes.

    Returns:
        The parsed user profile.

    Raises:
        RemoteRequestError: If the userinfo request fails.
    """
    if not access_token:
        raise ValidationError("An access token is required to fetch the profile")

    service = build(
        "oauth2", "v2", credentials=Credentials(token=access_token), cache_discovery=False
    )
    try:
        user_info = service.userinfo().get().execute()
    except HttpError as e:
        error = handle_http_error(e)
        logger.error("HttpError fetching user info: %s", error.status)
        raise error from e
    except RefreshError as e:
        logger.error("User info request rejected; the access token has expired")
        raise handle_refresh_error(e) from e
    except (TransportError, OSError) as e:
        logger.error("Error fetching user info: %s", e)
        raise RemoteRequestError(0, str(e), f"Network error: {e}") from e

    logger.info("Fetched user info: %s", user_info.get("email"))
    return UserProfile.from_api(user_info)


def verify_identity_credential(
    credential: str, client_id: Optional[str] = None
) -> IdentityCredential:
    """
    Verify a Google ID token from the passive sign-in surface.

    Args:
        credential: The ID token JWT.
        client_id: Expected audience; defaults to the configured client id.

    Returns:
        The verified identity.

    Raises:
        ValidationError: If the token is missing, malformed, expired, or
            issued for another audience.
    """
    if not credential or not credential.strip():
        raise ValidationError("An ID token credential is required")

    audience = client_id or get_oauth_config().client_id
    try:
        claims = id_token.verify_oauth2_token(credential.strip(), Request(), audience)
    except ValueError as e:
        logger.warning("ID token verification failed: %s", e)
        raise ValidationError(f"Invalid ID token: {e}")

    return IdentityCredential(
        credential=credential.strip(),
        email=claims.get("email"),
        name=claims.get("name"),
    )
