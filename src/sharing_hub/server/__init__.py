"""Sharing Hub MCP Server - modular implementation."""

import logging
import sys

from .main import mcp, get_orchestrator, shutdown_orchestrator
from ..core import config

from . import session_tools
from . import workspace_tools

__all__ = ["mcp", "get_orchestrator", "main"]


def main():
    """Entry point for the Sharing Hub MCP server."""
    # stdout carries the MCP stdio transport
    logging.basicConfig(
        level=config.LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        mcp.run(show_banner=False)
    finally:
        shutdown_orchestrator()
