"""MCP Server initialization and entry point."""

import json
from typing import Optional

from fastmcp import FastMCP

from ..workspace import SessionOrchestrator

# Initialize MCP Server
mcp = FastMCP("Sharing Hub")

# Global orchestrator, initialized lazily
_orchestrator: Optional[SessionOrchestrator] = None


def get_orchestrator() -> SessionOrchestrator:
    """Get or create the global SessionOrchestrator instance.

    Returns:
        The process-wide session orchestrator.
    """
    global _orchestrator
    if not _orchestrator:
        _orchestrator = SessionOrchestrator()
    return _orchestrator


def shutdown_orchestrator() -> None:
    """Stop the orchestrator's worker pool if one was started."""
    global _orchestrator
    if _orchestrator is not None:
        _orchestrator.shutdown()
        _orchestrator = None


def render_status(orchestrator: SessionOrchestrator) -> str:
    """Render the session snapshot as pretty-printed JSON."""
    return json.dumps(orchestrator.snapshot().to_dict(), indent=2)


def render_errors(orchestrator: SessionOrchestrator) -> str:
    """Render the current error notes, or an empty string when there are none."""
    errors = orchestrator.snapshot().errors
    if not errors:
        return ""
    return "\nErrors:\n" + "\n".join(f"  - {e}" for e in errors)


@mcp.resource("sharing-hub://session")
def session_resource() -> str:
    """The current session snapshot as a resource."""
    return render_status(get_orchestrator())
