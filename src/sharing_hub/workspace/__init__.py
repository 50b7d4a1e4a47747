"""
Workspace provisioning and reference-indexing engine.

- ErrorLedger: category-keyed failure notices
- ResourceProvisioner: search-before-create folders, including the app root
- ReferenceIndex: shortcuts from the app root to user-chosen folders
- SessionOrchestrator: login-driven state machine over the above
"""

from .ledger import ErrorLedger, ErrorNote
from .provisioner import ResourceProvisioner, folder_category
from .references import (
    AttachResult,
    ReferenceIndex,
    classify_context,
    reference_name,
    resolve_target_id,
)
from .session import AuthState, SessionOrchestrator, SessionSnapshot, SessionState

__all__ = [
    "ErrorLedger",
    "ErrorNote",
    "ResourceProvisioner",
    "folder_category",
    "AttachResult",
    "ReferenceIndex",
    "classify_context",
    "reference_name",
    "resolve_target_id",
    "AuthState",
    "SessionOrchestrator",
    "SessionSnapshot",
    "SessionState",
]
