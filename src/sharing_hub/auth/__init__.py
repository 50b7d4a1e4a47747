"""
Google authentication package for Sharing Hub.

This package wraps the identity provider:
- Scope profiles for the requested Drive capability
- OAuth client configuration from the environment or client_secret.json
- Installed-app login returning an opaque access token
- ID token verification and profile lookup
"""

from .scopes import BASE_SCOPES, DRIVE_SCOPE_PROFILES, get_scopes
from .oauth_config import OAuthConfig, get_oauth_config, reload_oauth_config
from .google_auth import (
    AccessToken,
    IdentityCredential,
    fetch_user_profile,
    run_login_flow,
    verify_identity_credential,
)

__all__ = [
    # Scopes
    "BASE_SCOPES",
    "DRIVE_SCOPE_PROFILES",
    "get_scopes",
    # Config
    "OAuthConfig",
    "get_oauth_config",
    "reload_oauth_config",
    # Identity provider
    "AccessToken",
    "IdentityCredential",
    "fetch_user_profile",
    "run_login_flow",
    "verify_identity_credential",
]
