"""
Session state machine for Sharing Hub.

The orchestrator owns the access token and everything derived from it. A
successful login fans out into two independent jobs on a thread pool: the
profile fetch, and app folder provisioning followed by the project reference
listing. Both report into the error ledger under their own categories.

Each login and logout starts a new session generation with its own ledger and
engine components. Jobs remember the generation they were started in and
drop their results if it has changed by the time they complete.
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar, Union

from ..auth.google_auth import AccessToken, IdentityCredential, fetch_user_profile
from ..client import CreateSpec, DriveStoreClient, RemoteResource, ResourceFilter, ResourceKind, UserProfile
from ..core import config
from ..utils.constants import (
    CATEGORY_APP_FOLDER,
    CATEGORY_DRIVE_LOGIN,
    CATEGORY_FILE_CREATE,
    CATEGORY_FILE_FETCH,
    CATEGORY_FILES_FETCH,
    CATEGORY_FOLDER_CREATE,
    CATEGORY_FOLDERS_FETCH,
    CATEGORY_ONE_TAP,
    CATEGORY_PROFILE,
    CATEGORY_REFERENCE_CREATE,
    CATEGORY_SHARE,
    CATEGORY_SHARED_FETCH,
    FOLDER_MIME_TYPE,
    ROLE_WRITER,
)
from ..utils.errors import RemoteRequestError, SharingHubError, ValidationError, format_error
from .ledger import ErrorLedger
from .provisioner import ResourceProvisioner
from .references import ReferenceIndex, classify_context

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_CONNECTED_MESSAGE = "Please connect Google Drive first"
NO_APP_ROOT_MESSAGE = "The app folder is not set up yet"


class AuthState(str, Enum):
    LOGGED_OUT = "logged_out"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    READY = "ready"


@dataclass
class SessionState:
    """Mutable session state. Only the orchestrator touches it, under its lock."""

    auth_state: AuthState = AuthState.LOGGED_OUT
    token: Optional[AccessToken] = None
    identity: Optional[IdentityCredential] = None
    profile: Optional[UserProfile] = None
    profile_loading: bool = False
    provisioning_loading: bool = False
    app_root: Optional[RemoteResource] = None
    references: List[RemoteResource] = field(default_factory=list)
    generation: int = 0


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session for the presentation layer."""

    auth_state: AuthState
    identity_known: bool
    profile: Optional[UserProfile]
    profile_loading: bool
    provisioning_loading: bool
    app_root_id: Optional[str]
    references: Tuple[RemoteResource, ...]
    errors: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "auth_state": self.auth_state.value,
            "identity_known": self.identity_known,
            "profile": self.profile.to_dict() if self.profile else None,
            "profile_loading": self.profile_loading,
            "provisioning_loading": self.provisioning_loading,
            "app_root_id": self.app_root_id,
            "references": [ref.to_dict() for ref in self.references],
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class _Engine:
    """Ledger and engine components bound to one session generation."""

    ledger: ErrorLedger
    provisioner: ResourceProvisioner
    index: ReferenceIndex


class SessionOrchestrator:
    """Drives login, provisioning, and user commands against one Drive account."""

    def __init__(
        self,
        client: Optional[DriveStoreClient] = None,
        profile_fetcher: Optional[Callable[[str], UserProfile]] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            client: Drive store client; a default DriveStoreClient if omitted.
            profile_fetcher: Callable taking a bearer token and returning the profile.
            executor: Pool that runs the login jobs.
        """
        self._client = client or DriveStoreClient()
        self._fetch_profile = profile_fetcher or fetch_user_profile
        self._executor = executor or ThreadPoolExecutor(
            max_workers=config.MAX_WORKERS, thread_name_prefix="sharing-hub"
        )
        self._lock = RLock()
        self._state = SessionState()
        self._engine = self._build_engine(ErrorLedger())

    # ------------------------------------------------------------------
    # Session plumbing
    # ------------------------------------------------------------------

    def _build_engine(self, ledger: ErrorLedger) -> _Engine:
        return _Engine(
            ledger=ledger,
            provisioner=ResourceProvisioner(self._client, ledger),
            index=ReferenceIndex(self._client, ledger),
        )

    @property
    def ledger(self) -> ErrorLedger:
        with self._lock:
            return self._engine.ledger

    @property
    def provisioner(self) -> ResourceProvisioner:
        with self._lock:
            return self._engine.provisioner

    @property
    def index(self) -> ReferenceIndex:
        with self._lock:
            return self._engine.index

    def _is_current(self, generation: int) -> bool:
        return self._state.generation == generation

    def _settle(self) -> None:
        """Move to READY once both login jobs have reported. Caller must hold lock."""
        if (
            self._state.auth_state is AuthState.AUTHENTICATED
            and not self._state.profile_loading
            and not self._state.provisioning_loading
        ):
            self._state.auth_state = AuthState.READY
            logger.info("Session ready")

    def _apply(self, generation: int, update: Callable[[SessionState], None]) -> bool:
        """Apply ``update`` to the session state if ``generation`` is still active."""
        with self._lock:
            if not self._is_current(generation):
                logger.info("Ignoring result from a previous session")
                return False
            update(self._state)
            self._settle()
            return True

    # ------------------------------------------------------------------
    # Identity provider events
    # ------------------------------------------------------------------

    def on_login_success(self, token: Union[AccessToken, str]) -> List[Future]:
        """
        Start a session with a fresh access token.

        Any previous token and everything derived from it are dropped. Error
        notes are carried over into the new session's ledger.

        Args:
            token: The access token from the identity provider.

        Returns:
            Futures for the profile job and the provisioning job.
        """
        if isinstance(token, str):
            token = AccessToken(value=token)
        if not token.value:
            self.on_login_error("Google Drive login returned no access token")
            return []

        with self._lock:
            self._state.generation += 1
            generation = self._state.generation
            self._engine = self._build_engine(self._engine.ledger.copy())
            engine = self._engine

            identity = self._state.identity
            self._state = SessionState(
                auth_state=AuthState.AUTHENTICATING,
                token=token,
                identity=identity,
                generation=generation,
            )
            engine.ledger.clear(CATEGORY_DRIVE_LOGIN)
            logger.info("Google Drive login succeeded; starting session %d", generation)

            self._state.profile_loading = True
            self._state.provisioning_loading = True
            self._state.auth_state = AuthState.AUTHENTICATED

        return [
            self._executor.submit(self._load_profile, token, generation, engine),
            self._executor.submit(self._provision_workspace, token, generation, engine),
        ]

    def on_login_error(self, message: Optional[str] = None) -> None:
        """Record a failed Drive login. The current session is left as it is."""
        logger.warning("Google Drive login failed: %s", message)
        self.ledger.set(CATEGORY_DRIVE_LOGIN, message or "Google Drive Login Failed")

    def on_one_tap_success(self, credential: IdentityCredential) -> None:
        """Record a confirmed identity. Does not touch the Drive session."""
        with self._lock:
            self._state.identity = credential
            self._engine.ledger.clear(CATEGORY_ONE_TAP)
        logger.info("Identity confirmed for %s", credential.email)

    def on_one_tap_failure(self, message: Optional[str] = None) -> None:
        logger.warning("One Tap login failed: %s", message)
        self.ledger.set(CATEGORY_ONE_TAP, message or "One Tap Login Failed")

    def logout(self) -> None:
        """Drop the token, identity, derived state, and every error note."""
        with self._lock:
            generation = self._state.generation + 1
            self._state = SessionState(generation=generation)
            self._engine = self._build_engine(ErrorLedger())
        logger.info("Logged out successfully")

    def shutdown(self) -> None:
        """Stop accepting login jobs. Jobs already running are not cancelled."""
        self._executor.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Login jobs
    # ------------------------------------------------------------------

    def _load_profile(self, token: AccessToken, generation: int, engine: _Engine) -> None:
        try:
            profile = self._fetch_profile(token.value)
        except SharingHubError as e:
            engine.ledger.set(CATEGORY_PROFILE, format_error(CATEGORY_PROFILE, e))
            profile = None
        except Exception as e:
            logger.exception("Unexpected error fetching profile")
            engine.ledger.set(CATEGORY_PROFILE, format_error(CATEGORY_PROFILE, e))
            profile = None
        else:
            engine.ledger.clear(CATEGORY_PROFILE)

        def update(state: SessionState) -> None:
            state.profile = profile
            state.profile_loading = False

        self._apply(generation, update)

    def _provision_workspace(self, token: AccessToken, generation: int, engine: _Engine) -> None:
        app_root: Optional[RemoteResource] = None
        references: Optional[List[RemoteResource]] = None
        try:
            app_root = engine.provisioner.ensure_app_root(token.value)
            references = engine.index.list_references(token.value, app_root.id)
        except SharingHubError as e:
            # ProvisioningError and RemoteRequestError are already in the ledger.
            logger.warning("Workspace provisioning incomplete: %s", e.message)
        except Exception as e:
            logger.exception("Unexpected error provisioning workspace")
            engine.ledger.set(CATEGORY_APP_FOLDER, format_error(CATEGORY_APP_FOLDER, e))

        def update(state: SessionState) -> None:
            if app_root is not None:
                state.app_root = app_root
            if references is not None:
                state.references = references
            state.provisioning_loading = False

        self._apply(generation, update)

    # ------------------------------------------------------------------
    # User commands
    # ------------------------------------------------------------------

    def _run_command(
        self,
        category: Optional[str],
        action: Callable[[str, _Engine, SessionState], T],
        needs_app_root: bool = False,
    ) -> Optional[T]:
        """
        Run a user command against the active session.

        Validation failures become uncategorized notes. Remote failures are
        recorded under ``category``; when ``category`` is None the engine
        component has already recorded them. Nothing is raised to the caller.
        """
        with self._lock:
            token = self._state.token
            engine = self._engine
            state = self._state
            app_root = self._state.app_root

        if token is None:
            engine.ledger.set_uncategorized(NOT_CONNECTED_MESSAGE)
            return None
        if needs_app_root and app_root is None:
            engine.ledger.set_uncategorized(NO_APP_ROOT_MESSAGE)
            return None

        try:
            result = action(token.value, engine, state)
        except ValidationError as e:
            engine.ledger.set_uncategorized(e.message)
            return None
        except SharingHubError as e:
            if category:
                engine.ledger.set(category, format_error(category, e))
            logger.warning("Command failed: %s", e.message)
            return None
        except Exception as e:
            logger.exception("Unexpected error running command")
            message = f"Unexpected error ({type(e).__name__}: {e})"
            if category:
                engine.ledger.set(category, f"{category} failed: {message}")
            else:
                engine.ledger.set_uncategorized(message)
            return None

        if category:
            engine.ledger.clear(category)
        return result

    def ensure_folder(self, name: str, parent_id: Optional[str] = None) -> Optional[RemoteResource]:
        """Find or create the folder ``name`` under ``parent_id`` (My Drive top if None)."""
        return self._run_command(
            None,
            lambda token, engine, _: engine.provisioner.ensure_folder(token, name, parent_id),
        )

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> Optional[RemoteResource]:
        """Create a folder without searching first."""

        def action(token: str, engine: _Engine, _: SessionState) -> RemoteResource:
            if not name or not name.strip():
                raise ValidationError("Please provide a folder name")
            return self._client.create(
                token,
                CreateSpec(
                    name=name.strip(),
                    kind=ResourceKind.FOLDER,
                    parents=(parent_id,) if parent_id else (),
                ),
            )

        return self._run_command(CATEGORY_FOLDER_CREATE, action)

    def refresh_references(self) -> Optional[List[RemoteResource]]:
        """Re-read the project reference index from Drive."""

        def action(token: str, engine: _Engine, state: SessionState) -> List[RemoteResource]:
            references = engine.index.list_references(token, state.app_root.id)
            self._apply(state.generation, lambda s: setattr(s, "references", references))
            return references

        return self._run_command(None, action, needs_app_root=True)

    def attach_reference(
        self,
        target: Union[RemoteResource, Mapping[str, Any]],
        context_label: Optional[str] = None,
    ) -> Optional[RemoteResource]:
        """
        Add a project reference to ``target``.

        ``target`` may be a RemoteResource or the raw metadata a folder picker
        returns; picker metadata without a MIME type is taken to be a folder.
        """

        def action(token: str, engine: _Engine, state: SessionState) -> RemoteResource:
            if isinstance(target, RemoteResource):
                resource, label = target, context_label
            else:
                if not target or not target.get("id"):
                    raise ValidationError("Please choose a folder to reference")
                resource = RemoteResource.from_api({"mimeType": FOLDER_MIME_TYPE, **target})
                label = context_label or classify_context(target)
            result = engine.index.attach_reference(token, state.app_root.id, resource, label)
            if result.references is not None:
                self._apply(
                    state.generation, lambda s: setattr(s, "references", result.references)
                )
            return result.reference

        return self._run_command(None, action, needs_app_root=True)

    def attach_reference_by_id(self, target_id: str) -> Optional[RemoteResource]:
        """Look up ``target_id`` directly, then add a project reference to it."""

        def action(token: str, engine: _Engine, state: SessionState) -> RemoteResource:
            try:
                target = self._client.get_by_id(token, target_id)
            except RemoteRequestError as e:
                engine.ledger.set(
                    CATEGORY_REFERENCE_CREATE, format_error(CATEGORY_REFERENCE_CREATE, e)
                )
                raise
            result = engine.index.attach_reference(token, state.app_root.id, target)
            if result.references is not None:
                self._apply(
                    state.generation, lambda s: setattr(s, "references", result.references)
                )
            return result.reference

        return self._run_command(None, action, needs_app_root=True)

    def create_file(self, name: str, parent_id: Optional[str] = None) -> Optional[RemoteResource]:
        """Create an empty application file, adding the app extension if missing."""

        def action(token: str, engine: _Engine, _: SessionState) -> RemoteResource:
            if not name or not name.strip():
                raise ValidationError("Please provide a file name")
            return self._client.create(
                token,
                CreateSpec(
                    name=config.app_file_name(name),
                    kind=ResourceKind.FILE,
                    parents=(parent_id,) if parent_id else (),
                    mime_type=config.APP_FILE_MIME_TYPE,
                ),
            )

        return self._run_command(CATEGORY_FILE_CREATE, action)

    def fetch_file_info(self, file_id: str) -> Optional[RemoteResource]:
        """Fetch metadata for any file or folder by id, listed or not."""

        def action(token: str, engine: _Engine, _: SessionState) -> RemoteResource:
            if not file_id or not file_id.strip():
                raise ValidationError("Please provide a file ID")
            return self._client.get_by_id(token, file_id)

        return self._run_command(CATEGORY_FILE_FETCH, action)

    def share_file(self, file_id: str, email: str, role: str = ROLE_WRITER) -> bool:
        """Grant ``email`` the given role on ``file_id``. Returns True on success."""

        def action(token: str, engine: _Engine, _: SessionState) -> bool:
            self._client.grant_permission(token, file_id, email, role)
            return True

        return bool(self._run_command(CATEGORY_SHARE, action))

    def list_folders(self) -> Optional[List[RemoteResource]]:
        """All non-trashed folders visible to the app, newest first."""
        return self._run_command(
            CATEGORY_FOLDERS_FETCH,
            lambda token, engine, _: self._client.find(
                token, ResourceFilter(kind=ResourceKind.FOLDER)
            ),
        )

    def list_shared_folders(self) -> Optional[List[RemoteResource]]:
        """Folders other users have shared with the current user."""
        return self._run_command(
            CATEGORY_SHARED_FETCH,
            lambda token, engine, _: self._client.find(
                token, ResourceFilter(kind=ResourceKind.FOLDER, shared_with_me=True)
            ),
        )

    def list_app_files(self) -> Optional[List[RemoteResource]]:
        """Files of the application's own MIME type, newest first."""
        return self._run_command(
            CATEGORY_FILES_FETCH,
            lambda token, engine, _: self._client.find(
                token, ResourceFilter(mime_type=config.APP_FILE_MIME_TYPE)
            ),
        )

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def auth_state(self) -> AuthState:
        with self._lock:
            return self._state.auth_state

    def snapshot(self) -> SessionSnapshot:
        """Recompute the read-only session view."""
        with self._lock:
            state = self._state
            return SessionSnapshot(
                auth_state=state.auth_state,
                identity_known=state.identity is not None,
                profile=state.profile,
                profile_loading=state.profile_loading,
                provisioning_loading=state.provisioning_loading,
                app_root_id=state.app_root.id if state.app_root else None,
                references=tuple(state.references),
                errors=tuple(self._engine.ledger.snapshot()),
            )
