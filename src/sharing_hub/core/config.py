"""
Shared configuration for Sharing Hub.

This module centralizes configuration values to avoid hardcoded values
scattered throughout the codebase. A ``.env`` file in the working directory
is loaded before any value is read.
"""

import os

from dotenv import load_dotenv

from ..utils.constants import DEFAULT_PAGE_SIZE

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Application root folder
APP_ROOT_NAME = os.getenv("SHARING_HUB_APP_ROOT_NAME", "MyApp Private Sharing Hub")
APP_ROOT_DESCRIPTION = os.getenv(
    "SHARING_HUB_APP_ROOT_DESCRIPTION",
    "This folder is used by MyApp for private sharing between users. "
    "Only items placed here will be accessible to the app.",
)

# Application file type
APP_FILE_EXTENSION = os.getenv("SHARING_HUB_APP_FILE_EXTENSION", "swtestapp1")
APP_FILE_MIME_TYPE = os.getenv("SHARING_HUB_APP_FILE_MIME_TYPE", "application/swtestapp1")

# Query behaviour
PAGE_SIZE = int(os.getenv("SHARING_HUB_PAGE_SIZE", str(DEFAULT_PAGE_SIZE)))
INCLUDE_ALL_DRIVES = _env_bool("SHARING_HUB_ALL_DRIVES", True)

# Session worker pool
MAX_WORKERS = int(os.getenv("SHARING_HUB_MAX_WORKERS", "4"))

# Logging
LOG_LEVEL = os.getenv("SHARING_HUB_LOG_LEVEL", "INFO").upper()


def app_file_name(name: str) -> str:
    """
    Append the application extension to a file name unless already present.

    Args:
        name: User-supplied file name, with or without the extension.

    Returns:
        The trimmed name ending in ``.{APP_FILE_EXTENSION}``.
    """
    trimmed = name.strip()
    suffix = f".{APP_FILE_EXTENSION}"
    if trimmed.endswith(suffix):
        return trimmed
    return f"{trimmed}{suffix}"
