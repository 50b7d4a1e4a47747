"""
OAuth Configuration Management for Sharing Hub.

This module centralizes OAuth-related configuration to eliminate hardcoded values.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from ..utils.errors import ConfigurationError
from .scopes import DEFAULT_DRIVE_PROFILE, get_scopes

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class OAuthConfig:
    """
    Centralized OAuth configuration management.

    Provides a single source of truth for all OAuth-related configuration values.
    """

    def __init__(self) -> None:
        # Credentials directory
        self.credentials_dir = os.path.expanduser(
            os.getenv("SHARING_HUB_CREDENTIALS_DIR", "~/.sharing-hub")
        )

        # OAuth client configuration (from environment or client_secret.json)
        self.client_id = os.getenv("GOOGLE_OAUTH_CLIENT_ID")
        self.client_secret = os.getenv("GOOGLE_OAUTH_CLIENT_SECRET")

        # Client secrets file path
        self.client_secrets_path = os.path.join(
            self.credentials_dir, "client_secret.json"
        )

        # Drive capability requested at login
        self.drive_profile = os.getenv("SHARING_HUB_DRIVE_SCOPE", DEFAULT_DRIVE_PROFILE)

    @property
    def scopes(self) -> List[str]:
        """Scopes requested by the login flow."""
        return get_scopes(self.drive_profile)

    def is_configured(self) -> bool:
        """Check if OAuth is properly configured."""
        # Either environment variables or client_secret.json must exist
        if self.client_id and self.client_secret:
            return True
        return os.path.exists(self.client_secrets_path)

    def client_config(self) -> Dict[str, Any]:
        """
        Load the OAuth client configuration.

        Environment variables take precedence over ``client_secret.json``.

        Returns:
            A client config dict in the ``{"installed": {...}}`` shape
            accepted by google-auth-oauthlib.

        Raises:
            ConfigurationError: If no client credentials are available.
        """
        if self.client_id and self.client_secret:
            logger.info("Loaded OAuth client from environment variables")
            return {
                "installed": {
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "auth_uri": GOOGLE_AUTH_URI,
                    "token_uri": GOOGLE_TOKEN_URI,
                    "redirect_uris": ["http://localhost"],
                }
            }

        if not os.path.exists(self.client_secrets_path):
            raise ConfigurationError(
                "OAuth client credentials not found. Please either:\n"
                "1. Set GOOGLE_OAUTH_CLIENT_ID and GOOGLE_OAUTH_CLIENT_SECRET environment variables\n"
                f"2. Place client_secret.json in {self.client_secrets_path}"
            )

        try:
            with open(self.client_secrets_path, "r") as f:
                client_config = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.error("Error loading client secrets from %s: %s", self.client_secrets_path, e)
            raise ConfigurationError(f"Unreadable client secrets file: {e}")

        if "installed" in client_config or "web" in client_config:
            logger.info("Loaded OAuth client from %s", self.client_secrets_path)
            return client_config
        raise ConfigurationError("Invalid client secrets file format")

    def get_environment_summary(self) -> Dict[str, Any]:
        """Get a summary of the current OAuth configuration (excluding secrets)."""
        return {
            "credentials_dir": self.credentials_dir,
            "client_configured": self.is_configured(),
            "drive_profile": self.drive_profile,
            "scopes": self.scopes,
        }


# Global configuration instance
_oauth_config: Optional[OAuthConfig] = None


def get_oauth_config() -> OAuthConfig:
    """Get the global OAuth configuration instance."""
    global _oauth_config
    if _oauth_config is None:
        _oauth_config = OAuthConfig()
    return _oauth_config


def reload_oauth_config() -> OAuthConfig:
    """Reload the OAuth configuration from environment variables."""
    global _oauth_config
    _oauth_config = OAuthConfig()
    return _oauth_config
