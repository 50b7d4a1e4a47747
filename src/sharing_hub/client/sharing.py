"""Sharing and permissions mixin for DriveStoreClient."""
import logging

from ..utils.constants import GRANTABLE_ROLES, PERM_TYPE_USER, ROLE_WRITER
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)


class SharingMixin:
    """Mixin providing sharing and permission operations."""

    def grant_permission(
        self, token: str, resource_id: str, grantee_email: str, role: str = ROLE_WRITER
    ) -> None:
        """Share a resource with a user via email.

        Args:
            token: Bearer access token for this request.
            resource_id: The Drive file ID.
            grantee_email: Email address of the user.
            role: 'reader', 'commenter', or 'writer'.

        Raises:
            ValidationError: If an input is missing or the role is unknown.
            RemoteRequestError: If Drive rejects the grant.
        """
        if not resource_id or not resource_id.strip() or not grantee_email or not grantee_email.strip():
            raise ValidationError("Please provide a file ID and an email to share with")
        if role not in GRANTABLE_ROLES:
            raise ValidationError(
                f"Unsupported role '{role}'. Supported: {', '.join(GRANTABLE_ROLES)}"
            )

        permission = {
            'type': PERM_TYPE_USER,
            'role': role,
            'emailAddress': grantee_email.strip(),
        }

        service = self._drive(token)
        self._execute(
            service.permissions().create(
                fileId=resource_id.strip(),
                body=permission,
                sendNotificationEmail=True,
                **self._all_drives_kwargs(),
            ),
            resource_id=resource_id,
        )
        logger.info("Granted %s on %s", role, resource_id)
