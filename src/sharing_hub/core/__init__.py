"""
Core utilities package for Sharing Hub.

This package provides shared configuration.
"""

from .config import (
    APP_ROOT_NAME,
    APP_ROOT_DESCRIPTION,
    APP_FILE_EXTENSION,
    APP_FILE_MIME_TYPE,
    PAGE_SIZE,
    INCLUDE_ALL_DRIVES,
    MAX_WORKERS,
    LOG_LEVEL,
    app_file_name,
)

__all__ = [
    "APP_ROOT_NAME",
    "APP_ROOT_DESCRIPTION",
    "APP_FILE_EXTENSION",
    "APP_FILE_MIME_TYPE",
    "PAGE_SIZE",
    "INCLUDE_ALL_DRIVES",
    "MAX_WORKERS",
    "LOG_LEVEL",
    "app_file_name",
]
