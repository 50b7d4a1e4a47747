"""Resource creation and lookup mixin for DriveStoreClient."""
import logging
from typing import Any

from .models import CreateSpec, RemoteResource, ResourceKind
from ..utils.constants import FILE_INFO_FIELDS, FOLDER_MIME_TYPE, RESOURCE_FIELDS, SHORTCUT_MIME_TYPE
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)


def create_body(spec: CreateSpec) -> dict[str, Any]:
    """Build the ``files.create`` request body for a CreateSpec.

    Raises:
        ValidationError: If the create request is incomplete or inconsistent.
    """
    if not spec.name or not spec.name.strip():
        raise ValidationError("A name is required to create a resource")

    body: dict[str, Any] = {'name': spec.name.strip()}

    if spec.kind is ResourceKind.FOLDER:
        body['mimeType'] = FOLDER_MIME_TYPE
    elif spec.kind is ResourceKind.SHORTCUT:
        if not spec.target_id:
            raise ValidationError("A shortcut requires a target id")
        body['mimeType'] = SHORTCUT_MIME_TYPE
        body['shortcutDetails'] = {'targetId': spec.target_id}
    elif spec.mime_type:
        body['mimeType'] = spec.mime_type

    if spec.target_id and spec.kind is not ResourceKind.SHORTCUT:
        raise ValidationError("Only shortcuts may carry a target id")

    if spec.parents:
        body['parents'] = list(spec.parents)
    if spec.description:
        body['description'] = spec.description
    return body


class FilesMixin:
    """Mixin providing create and get-by-id operations."""

    def create(self, token: str, spec: CreateSpec) -> RemoteResource:
        """Create a folder, shortcut, or typed file.

        Args:
            token: Bearer access token for this request.
            spec: What to create.

        Returns:
            The created resource as returned by Drive.

        Raises:
            ValidationError: If the create request is invalid (no request is sent).
            RemoteRequestError: If Drive rejects the request.
        """
        body = create_body(spec)
        service = self._drive(token)
        raw = self._execute(
            service.files().create(
                body=body,
                fields=RESOURCE_FIELDS,
                **self._all_drives_kwargs(),
            )
        )
        resource = RemoteResource.from_api(raw)
        logger.info("Created %s '%s' (%s)", resource.kind.value, resource.name, resource.id)
        return resource

    def get_by_id(self, token: str, resource_id: str) -> RemoteResource:
        """Fetch a single resource's full metadata by id.

        Works for resources outside any known hierarchy, including items in
        shared drives and items shared with the user.

        Args:
            token: Bearer access token for this request.
            resource_id: The Drive file ID.

        Returns:
            The resource.

        Raises:
            ValidationError: If ``resource_id`` is blank.
            RemoteRequestError: If Drive rejects the request.
        """
        if not resource_id or not resource_id.strip():
            raise ValidationError("A file ID is required")
        service = self._drive(token)
        raw = self._execute(
            service.files().get(
                fileId=resource_id.strip(),
                fields=FILE_INFO_FIELDS,
                **self._all_drives_kwargs(),
            ),
            resource_id=resource_id,
        )
        return RemoteResource.from_api(raw)
