"""Unit tests for the project reference index."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from fakes import InMemoryDriveStore
from sharing_hub.client import RemoteResource, ResourceKind
from sharing_hub.utils.constants import (
    CATEGORY_REFERENCE_CREATE,
    CATEGORY_REFERENCES_FETCH,
    SHORTCUT_MIME_TYPE,
)
from sharing_hub.utils.errors import RemoteRequestError, ValidationError
from sharing_hub.workspace import (
    ErrorLedger,
    ReferenceIndex,
    classify_context,
    reference_name,
    resolve_target_id,
)


class TestClassifyContext:
    """Tests for the ownership/drive label."""

    def test_shared_drive_from_drive_id(self):
        assert classify_context({"id": "g", "driveId": "d1", "ownedByMe": False}) == "Shared Drive"

    def test_shared_drive_from_legacy_team_drive_id(self):
        assert classify_context({"id": "g", "teamDriveId": "d1"}) == "Shared Drive"

    def test_not_owned_is_shared_folder(self):
        assert classify_context({"id": "g", "ownedByMe": False}) == "Shared Folder"

    def test_owned_is_personal(self):
        assert classify_context({"id": "g", "ownedByMe": True}) == "Personal Drive"

    def test_missing_metadata_is_personal(self):
        assert classify_context({"id": "g"}) == "Personal Drive"
        assert classify_context(None) == "Personal Drive"

    def test_parsed_resources(self):
        shared_drive = RemoteResource.from_api({"id": "a", "driveId": "d1"})
        shared_folder = RemoteResource.from_api({"id": "b", "ownedByMe": False})
        personal = RemoteResource.from_api({"id": "c", "ownedByMe": True})

        assert classify_context(shared_drive) == "Shared Drive"
        assert classify_context(shared_folder) == "Shared Folder"
        assert classify_context(personal) == "Personal Drive"


class TestResolveTargetId:
    def test_shortcut_resolves_to_target(self):
        shortcut = RemoteResource.from_api(
            {"id": "s1", "mimeType": SHORTCUT_MIME_TYPE, "shortcutDetails": {"targetId": "g1"}}
        )
        assert resolve_target_id(shortcut) == "g1"

    def test_folder_resolves_to_itself(self):
        folder = RemoteResource("g1", "Docs", ResourceKind.FOLDER)
        assert resolve_target_id(folder) == "g1"

    def test_plain_file_has_no_target(self):
        assert resolve_target_id(RemoteResource("x", "a.txt", ResourceKind.FILE)) is None


class TestReferenceIndex:
    """Tests for listing and attaching project references."""

    def setup_method(self):
        self.store = InMemoryDriveStore()
        self.ledger = ErrorLedger()
        self.index = ReferenceIndex(self.store, self.ledger)
        self.root = self.store.add("f1", "AppRoot")

    def test_list_empty_root(self):
        assert self.index.list_references("T", "f1") == []

    def test_list_requires_app_root(self):
        with pytest.raises(ValidationError):
            self.index.list_references("T", "")
        assert self.store.calls == []

    @pytest.mark.parametrize(
        "metadata, label",
        [
            ({"ownedByMe": True}, "Personal Drive"),
            ({"ownedByMe": False, "driveId": "d1"}, "Shared Drive"),
            ({"ownedByMe": False}, "Shared Folder"),
        ],
    )
    def test_attach_then_list_resolves_target(self, metadata, label):
        target = self.store.add("g1", "Docs", **metadata)

        result = self.index.attach_reference("T", "f1", target)

        assert result.reference.name == reference_name("Docs", label)
        assert result.reference.is_shortcut
        assert result.reference.parents == ("f1",)
        listed = self.index.list_references("T", "f1")
        assert [resolve_target_id(ref) for ref in listed] == ["g1"]
        assert [ref.id for ref in result.references] == [result.reference.id]

    def test_explicit_label_wins(self):
        target = self.store.add("g1", "Docs", ownedByMe=True)
        result = self.index.attach_reference("T", "f1", target, "Shared Drive")
        assert result.reference.name == "Docs (Shared Drive)"

    def test_listing_is_newest_first_and_includes_plain_folders(self):
        self.store.add("manual", "Placed by hand", parents=("f1",))
        target = self.store.add("g1", "Docs")
        attached = self.index.attach_reference("T", "f1", target).reference

        listed = self.index.list_references("T", "f1")

        assert [ref.id for ref in listed] == [attached.id, "manual"]
        assert resolve_target_id(listed[1]) == "manual"

    def test_shortcut_target_is_rejected(self):
        shortcut = RemoteResource("s0", "Link", ResourceKind.SHORTCUT, target_id="g1")
        with pytest.raises(ValidationError):
            self.index.attach_reference("T", "f1", shortcut)
        assert self.store.calls_to("create") == []

    def test_create_failure_records_note(self):
        target = self.store.add("g1", "Docs")
        self.store.failures["create"] = RemoteRequestError(403, "", "Access denied.")

        with pytest.raises(RemoteRequestError):
            self.index.attach_reference("T", "f1", target)

        assert self.ledger.snapshot() == ["Project reference creation failed: Access denied."]

    def test_relist_failure_keeps_created_reference(self):
        target = self.store.add("g1", "Docs")
        self.store.failures["find"] = RemoteRequestError(500, "")

        result = self.index.attach_reference("T", "f1", target)

        assert result.reference.target_id == "g1"
        assert result.references is None
        assert CATEGORY_REFERENCES_FETCH in self.ledger
        assert CATEGORY_REFERENCE_CREATE not in self.ledger

    def test_list_failure_records_and_success_clears(self):
        self.store.failures["find"] = RemoteRequestError(500, "")
        with pytest.raises(RemoteRequestError):
            self.index.list_references("T", "f1")
        assert CATEGORY_REFERENCES_FETCH in self.ledger

        del self.store.failures["find"]
        self.index.list_references("T", "f1")
        assert len(self.ledger) == 0
