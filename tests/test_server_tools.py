"""Unit tests for the MCP tool layer."""

import sys
import os
import importlib
import json
from unittest.mock import Mock, patch

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from fakes import ImmediateExecutor, InMemoryDriveStore
from sharing_hub.auth import AccessToken, IdentityCredential
from sharing_hub.client import UserProfile
from sharing_hub.core import config
from sharing_hub.utils.errors import ConfigurationError, ValidationError
from sharing_hub.workspace import SessionOrchestrator


def make_orchestrator():
    store = InMemoryDriveStore()
    orchestrator = SessionOrchestrator(
        client=store,
        profile_fetcher=lambda token: UserProfile(email="user@example.com"),
        executor=ImmediateExecutor(),
    )
    return store, orchestrator


class TestSessionTools:
    """Tests for login, identity, and status tools."""

    def setup_method(self):
        self.store, self.orchestrator = make_orchestrator()
        self.patcher = patch(
            "sharing_hub.server.session_tools.get_orchestrator", return_value=self.orchestrator
        )
        self.patcher.start()

    def teardown_method(self):
        self.patcher.stop()

    def test_connect_google_drive(self):
        with patch("sharing_hub.server.session_tools.run_login_flow") as mock_flow:
            mock_flow.return_value = AccessToken(value="tok")
            from sharing_hub.server.session_tools import connect_google_drive

            result = connect_google_drive.fn()

        assert "Connected to Google Drive" in result
        assert self.orchestrator.snapshot().app_root_id is not None

    def test_connect_without_configuration(self):
        with patch("sharing_hub.server.session_tools.run_login_flow") as mock_flow:
            mock_flow.side_effect = ConfigurationError("OAuth client credentials not found.")
            from sharing_hub.server.session_tools import connect_google_drive

            result = connect_google_drive.fn()

        assert "Authentication Error" in result
        assert self.orchestrator.snapshot().errors == (
            "Google Drive login failed: OAuth client credentials not found.",
        )

    def test_connect_flow_crash_is_reported(self):
        with patch("sharing_hub.server.session_tools.run_login_flow") as mock_flow:
            mock_flow.side_effect = RuntimeError("browser closed")
            from sharing_hub.server.session_tools import connect_google_drive

            result = connect_google_drive.fn()

        assert "browser closed" in result
        assert len(self.orchestrator.snapshot().errors) == 1

    def test_connect_with_access_token(self):
        from sharing_hub.server.session_tools import connect_with_access_token

        result = connect_with_access_token.fn(" tok ")

        assert "Connected" in result
        assert {call[1] for call in self.store.calls} == {"tok"}

    def test_connect_with_blank_access_token(self):
        from sharing_hub.server.session_tools import connect_with_access_token

        result = connect_with_access_token.fn("  ")

        assert "failed" in result
        assert self.store.calls == []

    def test_confirm_identity(self):
        with patch("sharing_hub.server.session_tools.verify_identity_credential") as mock_verify:
            mock_verify.return_value = IdentityCredential("jwt", email="user@example.com")
            from sharing_hub.server.session_tools import confirm_identity

            result = confirm_identity.fn("jwt")

        assert "user@example.com" in result
        assert self.orchestrator.snapshot().identity_known

    def test_confirm_identity_failure(self):
        with patch("sharing_hub.server.session_tools.verify_identity_credential") as mock_verify:
            mock_verify.side_effect = ValidationError("Invalid ID token: expired")
            from sharing_hub.server.session_tools import confirm_identity

            result = confirm_identity.fn("jwt")

        assert result == "One Tap login failed: Invalid ID token: expired"
        assert self.orchestrator.snapshot().errors == (result,)

    def test_session_status_and_logout(self):
        from sharing_hub.server.session_tools import (
            connect_with_access_token,
            logout,
            session_status,
        )

        connect_with_access_token.fn("tok")
        status = json.loads(session_status.fn())
        assert status["auth_state"] == "ready"
        assert status["profile"]["email"] == "user@example.com"

        assert logout.fn() == "Logged out successfully"
        status = json.loads(session_status.fn())
        assert status["auth_state"] == "logged_out"
        assert status["app_root_id"] is None

    def test_connect_reports_unexpected_session_error(self):
        from sharing_hub.server.session_tools import connect_google_drive

        with patch("sharing_hub.server.session_tools.run_login_flow") as mock_flow, \
                patch.object(self.orchestrator, "on_login_success", side_effect=RuntimeError("pool closed")):
            mock_flow.return_value = AccessToken(value="tok")
            result = connect_google_drive.fn()

        assert result == "Google Drive login failed: Unexpected error (RuntimeError: pool closed)"


class TestWorkspaceTools:
    """Tests for folder, reference, file, and sharing tools."""

    def setup_method(self):
        self.store, self.orchestrator = make_orchestrator()
        self.patcher = patch(
            "sharing_hub.server.workspace_tools.get_orchestrator", return_value=self.orchestrator
        )
        self.patcher.start()

    def teardown_method(self):
        self.patcher.stop()

    def login(self):
        self.orchestrator.on_login_success("tok")

    def test_tools_before_login(self):
        from sharing_hub.server.workspace_tools import list_folders

        result = list_folders.fn()

        assert "unavailable" in result
        assert "Please connect Google Drive first" in result

    def test_ensure_folder(self):
        self.login()
        from sharing_hub.server.workspace_tools import ensure_folder

        first = ensure_folder.fn("Reports")
        second = ensure_folder.fn("Reports")

        assert first.startswith("Folder ready: Reports")
        assert first == second
        assert self.store.count("Reports") == 1

    def test_create_folder_blank_name(self):
        self.login()
        from sharing_hub.server.workspace_tools import create_folder

        result = create_folder.fn("")

        assert "Folder creation failed." in result
        assert "Please provide a folder name" in result

    def test_attach_and_list_references(self):
        self.login()
        self.store.add("g1", "Docs")
        from sharing_hub.server.workspace_tools import (
            attach_project_reference,
            list_project_references,
        )

        result = attach_project_reference.fn(json.dumps({"id": "g1", "name": "Docs"}))
        assert "Docs (Personal Drive)" in result

        listing = list_project_references.fn()
        assert "Docs (Personal Drive) -> g1" in listing

    def test_attach_reference_invalid_json(self):
        self.login()
        from sharing_hub.server.workspace_tools import attach_project_reference

        assert "Invalid JSON" in attach_project_reference.fn("{not json")
        assert "Expected a JSON object" in attach_project_reference.fn("[1, 2]")

    def test_attach_reference_by_id(self):
        self.login()
        self.store.add("g2", "Team", ownedByMe=False, driveId="d1")
        from sharing_hub.server.workspace_tools import attach_project_reference_by_id

        result = attach_project_reference_by_id.fn("g2")

        assert "Team (Shared Drive)" in result

    def test_no_references(self):
        self.login()
        from sharing_hub.server.workspace_tools import list_project_references

        assert list_project_references.fn() == "No project references yet."

    def test_create_and_list_app_files(self):
        self.login()
        from sharing_hub.server.workspace_tools import create_app_file, list_app_files

        assert "Successfully created file" in create_app_file.fn("notes")
        assert f"notes.{config.APP_FILE_EXTENSION}" in list_app_files.fn()

    def test_fetch_file_info(self):
        self.login()
        self.store.add("g1", "Docs")
        from sharing_hub.server.workspace_tools import fetch_file_info

        info = json.loads(fetch_file_info.fn("g1"))

        assert info["id"] == "g1"
        assert info["kind"] == "folder"

    def test_share_file(self):
        self.login()
        self.store.add("g1", "Docs")
        from sharing_hub.server.workspace_tools import share_file

        assert share_file.fn("g1", "friend@example.com") == "Shared with friend@example.com as writer"
        result = share_file.fn("g1", "")
        assert "Share failed." in result
        assert "Please provide a file ID and an email to share with" in result

    def test_unexpected_error_becomes_message(self):
        from sharing_hub.server.workspace_tools import share_file

        with patch.object(self.orchestrator, "share_file", side_effect=RuntimeError("boom")):
            result = share_file.fn("g1", "friend@example.com")

        assert result == "Share failed: Unexpected error (RuntimeError: boom)"

    def test_list_shared_folders_empty(self):
        self.login()
        from sharing_hub.server.workspace_tools import list_shared_folders

        assert list_shared_folders.fn() == "No shared folders found."


class TestServerLifecycle:
    """The worker pool is shut down when the server stops."""

    def setup_method(self):
        self.server_main = importlib.import_module("sharing_hub.server.main")

    def test_main_shuts_down_orchestrator(self):
        import sharing_hub.server as server

        orchestrator = Mock()
        with patch.object(self.server_main, "_orchestrator", orchestrator), \
                patch.object(server.mcp, "run") as mock_run:
            server.main()
            assert self.server_main._orchestrator is None

        mock_run.assert_called_once_with(show_banner=False)
        orchestrator.shutdown.assert_called_once()

    def test_shutdown_runs_when_server_fails(self):
        import sharing_hub.server as server

        orchestrator = Mock()
        with patch.object(self.server_main, "_orchestrator", orchestrator), \
                patch.object(server.mcp, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(KeyboardInterrupt):
                server.main()

        orchestrator.shutdown.assert_called_once()

    def test_shutdown_without_orchestrator(self):
        with patch.object(self.server_main, "_orchestrator", None):
            self.server_main.shutdown_orchestrator()
            assert self.server_main._orchestrator is None
