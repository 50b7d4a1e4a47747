"""
Google OAuth Scopes for Sharing Hub.

This module defines the identity scopes and the Drive capability profiles
the login flow can request.
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

# Base OAuth scopes required for user identification
USERINFO_EMAIL_SCOPE = "https://www.googleapis.com/auth/userinfo.email"
USERINFO_PROFILE_SCOPE = "https://www.googleapis.com/auth/userinfo.profile"
OPENID_SCOPE = "openid"

BASE_SCOPES = [OPENID_SCOPE, USERINFO_EMAIL_SCOPE, USERINFO_PROFILE_SCOPE]

# Google Drive scopes
DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"
DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"
DRIVE_APPDATA_SCOPE = "https://www.googleapis.com/auth/drive.appdata"
DRIVE_INSTALL_SCOPE = "https://www.googleapis.com/auth/drive.install"

# Drive capability profiles, from per-file access to full read/write
DRIVE_SCOPE_PROFILES: Dict[str, List[str]] = {
    "file": [DRIVE_FILE_SCOPE],
    "appdata": [DRIVE_FILE_SCOPE, DRIVE_APPDATA_SCOPE],
    "install": [DRIVE_FILE_SCOPE, DRIVE_APPDATA_SCOPE, DRIVE_INSTALL_SCOPE],
    "full": [DRIVE_SCOPE],
}

DEFAULT_DRIVE_PROFILE = "appdata"


def get_scopes(profile: str = DEFAULT_DRIVE_PROFILE) -> List[str]:
    """
    Get the OAuth scopes for a Drive capability profile.

    Args:
        profile: One of the keys of DRIVE_SCOPE_PROFILES.

    Returns:
        Identity scopes followed by the profile's Drive scopes.
    """
    drive_scopes = DRIVE_SCOPE_PROFILES.get(profile)
    if drive_scopes is None:
        logger.warning(
            "Unknown Drive scope profile '%s', falling back to '%s'",
            profile,
            DEFAULT_DRIVE_PROFILE,
        )
        drive_scopes = DRIVE_SCOPE_PROFILES[DEFAULT_DRIVE_PROFILE]
    return BASE_SCOPES + drive_scopes
