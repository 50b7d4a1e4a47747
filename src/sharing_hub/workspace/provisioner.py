"""Idempotent "ensure folder" provisioning over the Drive store."""
import logging
from typing import Optional

from ..client import CreateSpec, DriveStoreClient, RemoteResource, ResourceFilter, ResourceKind
from ..core import config
from ..utils.constants import CATEGORY_APP_FOLDER, MY_DRIVE_ROOT
from ..utils.errors import ProvisioningError, RemoteRequestError, ValidationError, format_error
from .ledger import ErrorLedger

logger = logging.getLogger(__name__)


def folder_category(name: str) -> str:
    """Default ledger category for ensuring the folder called ``name``."""
    return f"Folder setup ({name})"


class ResourceProvisioner:
    """Search-before-create provisioning of uniquely named folders.

    The search and the create are two separate remote calls. Two concurrent
    ``ensure_folder`` calls for the same ``(name, parent)`` can both see an
    empty search and both create, leaving two folders with the same name.
    Nothing here prevents that; later calls return the newest match.
    """

    def __init__(self, client: DriveStoreClient, ledger: ErrorLedger) -> None:
        self._client = client
        self._ledger = ledger

    def ensure_folder(
        self,
        token: str,
        name: str,
        parent_id: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> RemoteResource:
        """Return the folder called ``name`` under ``parent_id``, creating it if absent.

        Args:
            token: Bearer access token.
            name: Exact folder name.
            parent_id: Parent folder ID; None means the top of My Drive.
            description: Description set only when the folder is created.
            category: Ledger category for failures; defaults to one naming the folder.

        Returns:
            The newest existing match, or the newly created folder.

        Raises:
            ValidationError: If ``name`` is blank (nothing is sent).
            ProvisioningError: If the search or the create fails.
        """
        if not name or not name.strip():
            raise ValidationError("Please provide a folder name")

        name = name.strip()
        category = category or folder_category(name)
        resource_filter = ResourceFilter(
            name=name,
            kind=ResourceKind.FOLDER,
            parent_id=parent_id or MY_DRIVE_ROOT,
        )

        try:
            matches = self._client.find(token, resource_filter)
            if matches:
                folder = matches[0]
                logger.info("Found existing folder '%s' (%s)", name, folder.id)
                if len(matches) > 1:
                    logger.warning(
                        "%d folders named '%s' under %s; using the newest",
                        len(matches),
                        name,
                        parent_id or MY_DRIVE_ROOT,
                    )
            else:
                folder = self._client.create(
                    token,
                    CreateSpec(
                        name=name,
                        kind=ResourceKind.FOLDER,
                        parents=(parent_id,) if parent_id else (),
                        description=description,
                    ),
                )
                logger.info("Created folder '%s' (%s)", name, folder.id)
        except RemoteRequestError as e:
            self._ledger.set(category, format_error(category, e))
            raise ProvisioningError(
                f"Could not ensure folder '{name}': {e.message}", name, parent_id
            ) from e

        self._ledger.clear(category)
        return folder

    def ensure_app_root(self, token: str) -> RemoteResource:
        """Ensure the application root folder exists at the top of My Drive."""
        return self.ensure_folder(
            token,
            config.APP_ROOT_NAME,
            parent_id=None,
            description=config.APP_ROOT_DESCRIPTION,
            category=CATEGORY_APP_FOLDER,
        )
