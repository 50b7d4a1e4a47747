"""Base client with per-call Google API service construction."""
import logging
from typing import Any, Optional

from google.auth.exceptions import RefreshError, TransportError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core import config
from ..utils.errors import RemoteRequestError, ValidationError, handle_http_error, handle_refresh_error

logger = logging.getLogger(__name__)


class DriveClientBase:
    """Base class with Drive service construction and request execution.

    The client holds no credentials. A bearer token is passed to every
    operation and wrapped in a short-lived ``Credentials`` object for that
    single request.
    """

    def __init__(
        self,
        page_size: Optional[int] = None,
        include_all_drives: Optional[bool] = None,
    ) -> None:
        """Initialize the client.

        Args:
            page_size: Page size for list calls; defaults to configuration.
            include_all_drives: Whether list/get calls include shared drives.
        """
        self.page_size = page_size if page_size is not None else config.PAGE_SIZE
        self.include_all_drives = (
            include_all_drives if include_all_drives is not None else config.INCLUDE_ALL_DRIVES
        )

    @staticmethod
    def _credentials(token: str) -> Credentials:
        if not token or not token.strip():
            raise ValidationError("An access token is required for Drive requests")
        return Credentials(token=token)

    def _drive(self, token: str) -> Any:
        """Build a Drive v3 service bound to ``token``."""
        return build('drive', 'v3', credentials=self._credentials(token), cache_discovery=False)

    def _all_drives_kwargs(self) -> dict[str, Any]:
        if not self.include_all_drives:
            return {}
        return {'supportsAllDrives': True}

    @staticmethod
    def _execute(request: Any, resource_id: Optional[str] = None) -> dict[str, Any]:
        """Execute a prepared request, converting failures to RemoteRequestError.

        Args:
            request: A googleapiclient HttpRequest.
            resource_id: Optional resource ID for error context.

        Returns:
            The parsed JSON response body (empty dict for empty bodies).

        Raises:
            RemoteRequestError: On any non-success response or transport failure.
        """
        try:
            return request.execute() or {}
        except HttpError as e:
            error = handle_http_error(e, resource_id)
            logger.warning("Drive request failed; status:%s; %s", error.status, error.message)
            raise error from e
        except RefreshError as e:
            logger.warning("Drive request rejected; the access token has expired")
            raise handle_refresh_error(e, resource_id) from e
        except (TransportError, OSError) as e:
            logger.warning("Drive request could not be sent: %s", e)
            raise RemoteRequestError(0, str(e), f"Network error: {e}", resource_id) from e
