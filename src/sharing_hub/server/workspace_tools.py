"""Workspace MCP tools: folders, project references, files, and sharing."""

import json
from typing import Optional

from .main import mcp, get_orchestrator, render_errors
from ..client import RemoteResource
from ..utils.constants import ROLE_WRITER
from ..workspace import resolve_target_id


def _describe(resource: RemoteResource) -> str:
    created = resource.created_at.isoformat() if resource.created_at else "unknown"
    return f"{resource.name} (ID: {resource.id}) - Created: {created}"


def _unexpected(action: str, e: Exception) -> str:
    return f"{action} failed: Unexpected error ({type(e).__name__}: {e})"


def _listing(title: str, resources: Optional[list], empty: str) -> str:
    orchestrator = get_orchestrator()
    if resources is None:
        return f"{title} unavailable." + render_errors(orchestrator)
    if not resources:
        return empty
    lines = [f"{title}:"]
    lines.extend(f"  - {_describe(r)}" for r in resources)
    return "\n".join(lines)


@mcp.tool()
def ensure_folder(name: str, parent_id: str = None) -> str:
    """
    Find a folder by exact name, creating it only if it does not exist.
    Args:
        name: Folder name.
        parent_id: Optional parent folder ID. Defaults to the top of My Drive.
    """
    try:
        orchestrator = get_orchestrator()
        folder = orchestrator.ensure_folder(name, parent_id)
        if folder is None:
            return "Folder setup failed." + render_errors(orchestrator)
        return f"Folder ready: {_describe(folder)}"
    except Exception as e:
        return _unexpected("Folder setup", e)


@mcp.tool()
def create_folder(name: str, parent_id: str = None) -> str:
    """
    Create a new folder, even if one with the same name exists.
    Args:
        name: Folder name.
        parent_id: Optional parent folder ID.
    """
    try:
        orchestrator = get_orchestrator()
        folder = orchestrator.create_folder(name, parent_id)
        if folder is None:
            return "Folder creation failed." + render_errors(orchestrator)
        return f'Successfully created folder "{folder.name}". ID: {folder.id}'
    except Exception as e:
        return _unexpected("Folder creation", e)


@mcp.tool()
def list_project_references() -> str:
    """
    Re-read the project references stored in the app folder.
    Each entry shows the folder it points to.
    """
    try:
        orchestrator = get_orchestrator()
        references = orchestrator.refresh_references()
        if references is None:
            return "Project references unavailable." + render_errors(orchestrator)
        if not references:
            return "No project references yet."
        lines = ["Project references:"]
        for ref in references:
            lines.append(f"  - {ref.name} -> {resolve_target_id(ref) or 'n/a'} (ID: {ref.id})")
        return "\n".join(lines)
    except Exception as e:
        return _unexpected("Project references fetch", e)


@mcp.tool()
def attach_project_reference(folder_json: str, context_label: str = None) -> str:
    """
    Add a project reference to a folder chosen in a picker.
    Args:
        folder_json: JSON object with the picked folder's metadata. Must include
            'id' and 'name'; 'ownedByMe' and 'driveId' refine the label.
        context_label: Optional label override, e.g. 'Shared Drive'.
    """
    try:
        metadata = json.loads(folder_json)
    except json.JSONDecodeError:
        return "Project reference creation failed: Invalid JSON object format."
    if not isinstance(metadata, dict):
        return "Project reference creation failed: Expected a JSON object."

    try:
        orchestrator = get_orchestrator()
        reference = orchestrator.attach_reference(metadata, context_label)
        if reference is None:
            return "Project reference creation failed." + render_errors(orchestrator)
        return f"Added project reference '{reference.name}' (ID: {reference.id})"
    except Exception as e:
        return _unexpected("Project reference creation", e)


@mcp.tool()
def attach_project_reference_by_id(folder_id: str) -> str:
    """
    Add a project reference to a folder by its ID, even if it is not listed.
    Args:
        folder_id: The Drive ID of the target folder.
    """
    try:
        orchestrator = get_orchestrator()
        reference = orchestrator.attach_reference_by_id(folder_id)
        if reference is None:
            return "Project reference creation failed." + render_errors(orchestrator)
        return f"Added project reference '{reference.name}' (ID: {reference.id})"
    except Exception as e:
        return _unexpected("Project reference creation", e)


@mcp.tool()
def create_app_file(name: str, parent_id: str = None) -> str:
    """
    Create an empty file of the app's own type.
    Args:
        name: File name; the app extension is appended if missing.
        parent_id: Optional parent folder ID.
    """
    try:
        orchestrator = get_orchestrator()
        created = orchestrator.create_file(name, parent_id)
        if created is None:
            return "File creation failed." + render_errors(orchestrator)
        return f'Successfully created file "{created.name}". ID: {created.id}'
    except Exception as e:
        return _unexpected("File creation", e)


@mcp.tool()
def fetch_file_info(file_id: str) -> str:
    """
    Show metadata for a file or folder by ID, including shared drives.
    Args:
        file_id: The Drive ID.
    """
    try:
        orchestrator = get_orchestrator()
        resource = orchestrator.fetch_file_info(file_id)
        if resource is None:
            return "File fetch failed." + render_errors(orchestrator)
        return json.dumps(resource.to_dict(), indent=2)
    except Exception as e:
        return _unexpected("File fetch", e)


@mcp.tool()
def share_file(file_id: str, email: str, role: str = ROLE_WRITER) -> str:
    """
    Share a file or folder with a user.
    Args:
        file_id: The Drive ID.
        email: Email address of the user to share with.
        role: 'reader', 'commenter', or 'writer' (default).
    """
    try:
        orchestrator = get_orchestrator()
        if not orchestrator.share_file(file_id, email, role):
            return "Share failed." + render_errors(orchestrator)
        return f"Shared with {email.strip()} as {role}"
    except Exception as e:
        return _unexpected("Share", e)


@mcp.tool()
def list_folders() -> str:
    """List folders the app can see, newest first."""
    try:
        return _listing("Folders", get_orchestrator().list_folders(), "No folders found.")
    except Exception as e:
        return _unexpected("Folders fetch", e)


@mcp.tool()
def list_shared_folders() -> str:
    """List folders shared with the user, newest first."""
    try:
        return _listing(
            "Shared with me", get_orchestrator().list_shared_folders(), "No shared folders found."
        )
    except Exception as e:
        return _unexpected("Shared with me fetch", e)


@mcp.tool()
def list_app_files() -> str:
    """List files of the app's own type, newest first."""
    try:
        return _listing("App files", get_orchestrator().list_app_files(), "No app files found.")
    except Exception as e:
        return _unexpected("Files fetch", e)
