"""Query operations mixin for DriveStoreClient."""
import logging
from typing import Any, Optional

from .models import RemoteResource, ResourceFilter, ResourceKind
from ..utils.constants import (
    FOLDER_MIME_TYPE,
    LIST_FIELDS,
    ORDER_NEWEST_FIRST,
    SHORTCUT_MIME_TYPE,
)

logger = logging.getLogger(__name__)


def quote_query_value(value: str) -> str:
    """Quote a string literal for the Drive query language."""
    escaped = value.replace('\\', '\\\\').replace("'", "\\'")
    return f"'{escaped}'"


def build_query(resource_filter: ResourceFilter) -> str:
    """Translate a ResourceFilter into a Drive query string.

    Args:
        resource_filter: The predicates to combine.

    Returns:
        Query clauses joined with ``and``.
    """
    query_parts = []

    if resource_filter.name is not None:
        query_parts.append(f"name = {quote_query_value(resource_filter.name)}")

    if resource_filter.mime_type is not None:
        query_parts.append(f"mimeType = {quote_query_value(resource_filter.mime_type)}")
    elif resource_filter.kind is ResourceKind.FOLDER:
        query_parts.append(f"mimeType = '{FOLDER_MIME_TYPE}'")
    elif resource_filter.kind is ResourceKind.SHORTCUT:
        query_parts.append(f"mimeType = '{SHORTCUT_MIME_TYPE}'")
    elif resource_filter.kind is ResourceKind.FILE:
        query_parts.append(f"mimeType != '{FOLDER_MIME_TYPE}'")
        query_parts.append(f"mimeType != '{SHORTCUT_MIME_TYPE}'")

    if resource_filter.parent_id is not None:
        query_parts.append(f"{quote_query_value(resource_filter.parent_id)} in parents")

    if not resource_filter.include_trashed:
        query_parts.append("trashed = false")

    if resource_filter.shared_with_me is True:
        query_parts.append("sharedWithMe = true")

    if resource_filter.owned_by_me is True:
        query_parts.append("'me' in owners")
    elif resource_filter.owned_by_me is False:
        query_parts.append("not 'me' in owners")

    return ' and '.join(query_parts)


class SearchMixin:
    """Mixin providing the ``find`` query."""

    def find(self, token: str, resource_filter: ResourceFilter) -> list[RemoteResource]:
        """List resources matching a filter, newest first.

        Args:
            token: Bearer access token for this request.
            resource_filter: Predicates the results must satisfy.

        Returns:
            Possibly-empty list ordered by creation time, newest first.

        Raises:
            RemoteRequestError: If any page request fails.
        """
        drive_query = build_query(resource_filter)
        service = self._drive(token)
        list_kwargs: dict[str, Any] = {}
        if self.include_all_drives:
            list_kwargs = {'includeItemsFromAllDrives': True, 'supportsAllDrives': True}

        resources = []
        page_token: Optional[str] = None

        while True:
            results = self._execute(
                service.files().list(
                    q=drive_query,
                    pageSize=self.page_size,
                    orderBy=ORDER_NEWEST_FIRST,
                    fields=LIST_FIELDS,
                    pageToken=page_token,
                    **list_kwargs,
                )
            )
            for raw in results.get('files', []):
                try:
                    resources.append(RemoteResource.from_api(raw))
                except ValueError:
                    logger.warning("Skipping Drive list entry without an id")
            page_token = results.get('nextPageToken')
            if not page_token:
                break

        logger.debug("find matched %d resources; query:%s", len(resources), drive_query)
        return resources
