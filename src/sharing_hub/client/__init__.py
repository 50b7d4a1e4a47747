"""Google Drive store client - modular implementation.

This module provides a facade that combines all client mixins into
a single DriveStoreClient class.
"""
from .base import DriveClientBase
from .search import SearchMixin
from .files import FilesMixin
from .sharing import SharingMixin
from .models import (
    CreateSpec,
    DriveContext,
    Ownership,
    RemoteResource,
    ResourceFilter,
    ResourceKind,
    UserProfile,
)


class DriveStoreClient(
    DriveClientBase,
    SearchMixin,
    FilesMixin,
    SharingMixin,
):
    """Minimal Google Drive client used by the workspace engine.

    Combines the mixins into the find / create / get-by-id / grant surface.
    """
    pass


__all__ = [
    'DriveStoreClient',
    'CreateSpec',
    'DriveContext',
    'Ownership',
    'RemoteResource',
    'ResourceFilter',
    'ResourceKind',
    'UserProfile',
]
