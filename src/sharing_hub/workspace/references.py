"""Project references: shortcuts from the application root to chosen folders."""
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from ..client import CreateSpec, DriveStoreClient, Ownership, RemoteResource, ResourceFilter, ResourceKind
from ..utils.constants import (
    CATEGORY_REFERENCE_CREATE,
    CATEGORY_REFERENCES_FETCH,
    LABEL_PERSONAL_DRIVE,
    LABEL_SHARED_DRIVE,
    LABEL_SHARED_FOLDER,
    SHARED_DRIVE_KEYS,
)
from ..utils.errors import RemoteRequestError, ValidationError, format_error
from .ledger import ErrorLedger

logger = logging.getLogger(__name__)


def classify_context(metadata: Union[RemoteResource, Mapping[str, Any], None]) -> str:
    """
    Derive the ownership/drive label for a reference target.

    Accepts a parsed RemoteResource or whatever raw metadata a picker
    exposes. Missing metadata falls through to the personal label.

    Returns:
        "Shared Drive", "Shared Folder", or "Personal Drive".
    """
    if isinstance(metadata, RemoteResource):
        if metadata.drive_context.is_shared_drive:
            return LABEL_SHARED_DRIVE
        if metadata.ownership is Ownership.SHARED_WITH_ME:
            return LABEL_SHARED_FOLDER
        return LABEL_PERSONAL_DRIVE

    if not metadata:
        return LABEL_PERSONAL_DRIVE
    if any(metadata.get(key) for key in SHARED_DRIVE_KEYS):
        return LABEL_SHARED_DRIVE
    if metadata.get("ownedByMe") is False:
        return LABEL_SHARED_FOLDER
    return LABEL_PERSONAL_DRIVE


def reference_name(target_name: str, context_label: str) -> str:
    return f"{target_name} ({context_label})"


def resolve_target_id(resource: RemoteResource) -> Optional[str]:
    """Shortcut -> its target; folder -> itself; anything else -> None."""
    if resource.kind is ResourceKind.SHORTCUT:
        return resource.target_id
    if resource.kind is ResourceKind.FOLDER:
        return resource.id
    return None


@dataclass(frozen=True)
class AttachResult:
    """The created shortcut plus the re-read index (None if the re-read failed)."""

    reference: RemoteResource
    references: Optional[List[RemoteResource]]


class ReferenceIndex:
    """Lists and attaches project references under the application root."""

    def __init__(self, client: DriveStoreClient, ledger: ErrorLedger) -> None:
        self._client = client
        self._ledger = ledger

    def list_references(self, token: str, app_root_id: str) -> List[RemoteResource]:
        """
        List direct children of the application root, newest first.

        Entries may be shortcuts (project references) or plain folders
        placed there by hand; use ``resolve_target_id`` to get the target.

        Raises:
            ValidationError: If ``app_root_id`` is blank.
            RemoteRequestError: If the query fails (also recorded in the ledger).
        """
        if not app_root_id:
            raise ValidationError("The app folder is not set up yet")
        try:
            references = self._client.find(token, ResourceFilter(parent_id=app_root_id))
        except RemoteRequestError as e:
            self._ledger.set(CATEGORY_REFERENCES_FETCH, format_error(CATEGORY_REFERENCES_FETCH, e))
            raise
        self._ledger.clear(CATEGORY_REFERENCES_FETCH)
        logger.info("Listed %d project references under %s", len(references), app_root_id)
        return references

    def attach_reference(
        self,
        token: str,
        app_root_id: str,
        target: RemoteResource,
        context_label: Optional[str] = None,
    ) -> AttachResult:
        """
        Create a shortcut to ``target`` under the application root, then re-read the index.

        Args:
            token: Bearer access token.
            app_root_id: ID of the application root folder.
            target: The folder the user chose.
            context_label: Ownership/drive label; computed from ``target`` if omitted.

        Returns:
            AttachResult with the new shortcut and the refreshed listing.

        Raises:
            ValidationError: If inputs are missing or the target is a shortcut.
            RemoteRequestError: If the shortcut cannot be created.
        """
        if not app_root_id:
            raise ValidationError("The app folder is not set up yet")
        if not target.id:
            raise ValidationError("Please choose a folder to reference")
        if target.kind is ResourceKind.SHORTCUT:
            raise ValidationError("A shortcut cannot be the target of a project reference")

        label = context_label or classify_context(target)
        spec = CreateSpec(
            name=reference_name(target.name, label),
            kind=ResourceKind.SHORTCUT,
            parents=(app_root_id,),
            target_id=target.id,
        )
        try:
            reference = self._client.create(token, spec)
        except RemoteRequestError as e:
            self._ledger.set(CATEGORY_REFERENCE_CREATE, format_error(CATEGORY_REFERENCE_CREATE, e))
            raise
        self._ledger.clear(CATEGORY_REFERENCE_CREATE)
        logger.info("Attached project reference '%s' -> %s", reference.name, target.id)

        try:
            references = self.list_references(token, app_root_id)
        except RemoteRequestError:
            logger.warning("Reference created but the index could not be re-read")
            references = None
        return AttachResult(reference=reference, references=references)
