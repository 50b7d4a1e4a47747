"""Sharing Hub - Google Drive workspace provisioning client.

This package logs a user in with Google, provisions a private application
folder in their Drive, and maintains shortcuts from it to folders the user
chooses, exposed as an MCP server.
"""
from .client import DriveStoreClient
from .workspace import SessionOrchestrator

__version__ = "0.1.0"
__all__ = ["DriveStoreClient", "SessionOrchestrator"]
