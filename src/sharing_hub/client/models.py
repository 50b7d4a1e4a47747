"""Typed projections of Drive v3 resources.

Every raw JSON object returned by the Drive API is parsed into these
entities at the client boundary. Absent fields become explicit ``None``,
``Ownership.UNKNOWN`` or empty tuples.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from ..utils.constants import FOLDER_MIME_TYPE, SHARED_DRIVE_KEYS, SHORTCUT_MIME_TYPE


class ResourceKind(str, Enum):
    FOLDER = "folder"
    SHORTCUT = "shortcut"
    FILE = "file"

    @classmethod
    def from_mime_type(cls, mime_type: Optional[str]) -> "ResourceKind":
        if mime_type == FOLDER_MIME_TYPE:
            return cls.FOLDER
        if mime_type == SHORTCUT_MIME_TYPE:
            return cls.SHORTCUT
        return cls.FILE


class Ownership(str, Enum):
    OWNED = "owned"
    SHARED_WITH_ME = "shared_with_me"
    UNKNOWN = "unknown"

    @classmethod
    def from_owned_by_me(cls, owned_by_me: Any) -> "Ownership":
        if owned_by_me is True:
            return cls.OWNED
        if owned_by_me is False:
            return cls.SHARED_WITH_ME
        return cls.UNKNOWN


@dataclass(frozen=True)
class DriveContext:
    """Which drive a resource lives in. ``drive_id`` is set for shared drives."""

    drive_id: Optional[str] = None

    @property
    def is_shared_drive(self) -> bool:
        return self.drive_id is not None

    @classmethod
    def from_metadata(cls, raw: Mapping[str, Any]) -> "DriveContext":
        drive_id = next((raw[key] for key in SHARED_DRIVE_KEYS if raw.get(key)), None)
        return cls(drive_id=drive_id)


PERSONAL_DRIVE = DriveContext()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp as returned by Drive, or return None."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class RemoteResource:
    """One node in the remote store."""

    id: str
    name: str
    kind: ResourceKind
    parents: tuple[str, ...] = ()
    ownership: Ownership = Ownership.UNKNOWN
    drive_context: DriveContext = PERSONAL_DRIVE
    created_at: Optional[datetime] = None
    target_id: Optional[str] = None
    mime_type: Optional[str] = None
    description: Optional[str] = None
    web_view_link: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.kind is ResourceKind.FOLDER

    @property
    def is_shortcut(self) -> bool:
        return self.kind is ResourceKind.SHORTCUT

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "RemoteResource":
        """Map a raw Drive API file dict to a RemoteResource.

        Raises:
            ValueError: If the payload has no ``id``.
        """
        resource_id = raw.get("id")
        if not resource_id:
            raise ValueError("Drive resource payload has no id")

        mime_type = raw.get("mimeType")
        kind = ResourceKind.from_mime_type(mime_type)
        target_id = None
        if kind is ResourceKind.SHORTCUT:
            target_id = (raw.get("shortcutDetails") or {}).get("targetId")

        return cls(
            id=resource_id,
            name=raw.get("name") or "",
            kind=kind,
            parents=tuple(raw.get("parents") or ()),
            ownership=Ownership.from_owned_by_me(raw.get("ownedByMe")),
            drive_context=DriveContext.from_metadata(raw),
            created_at=parse_timestamp(raw.get("createdTime")),
            target_id=target_id,
            mime_type=mime_type,
            description=raw.get("description"),
            web_view_link=raw.get("webViewLink"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-friendly view for the presentation layer."""
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "parents": list(self.parents),
            "ownership": self.ownership.value,
            "drive_id": self.drive_context.drive_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "target_id": self.target_id,
            "mime_type": self.mime_type,
            "web_view_link": self.web_view_link,
        }


@dataclass(frozen=True)
class ResourceFilter:
    """Conjunction of predicates for a ``find`` call. ``None`` means unconstrained."""

    name: Optional[str] = None
    kind: Optional[ResourceKind] = None
    mime_type: Optional[str] = None
    parent_id: Optional[str] = None
    include_trashed: bool = False
    shared_with_me: Optional[bool] = None
    owned_by_me: Optional[bool] = None


@dataclass(frozen=True)
class CreateSpec:
    """Request body for a ``create`` call."""

    name: str
    kind: ResourceKind
    parents: tuple[str, ...] = ()
    target_id: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class UserProfile:
    """Subset of the OAuth2 userinfo payload shown to the user."""

    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "UserProfile":
        known = {"email", "name", "picture"}
        return cls(
            email=raw.get("email"),
            name=raw.get("name"),
            picture=raw.get("picture"),
            extra={k: v for k, v in raw.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"email": self.email, "name": self.name, "picture": self.picture}
