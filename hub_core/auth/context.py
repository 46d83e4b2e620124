# =============================================================================
# hub_core/auth/context.py
# Auth Context: the current identity of one browser session
# =============================================================================
"""
The AuthContext owns the single current Identity of a session and is the
only place that mutates it. It is created at the composition root with a
credential store and a storage port, so tests can run it without Streamlit.

State machine::

    UNINITIALIZED --hydrate()--> LOADING --> AUTHENTICATED | ANONYMOUS
    ANONYMOUS --login()--> LOADING --> AUTHENTICATED | ANONYMOUS
    AUTHENTICATED --logout()--> ANONYMOUS
"""

from __future__ import annotations
import json
import threading
import time
from enum import Enum
from typing import Any, Callable, List, Optional, Union

from hub_core.config import HubSettings
from hub_core.errors import (
    InvalidCredentialsError,
    LoginInProgressError,
    MediGoHubError,
    StorageCorruptError,
    StorageError,
    fail_closed,
)
from hub_core.identity import (
    EMPTY_PERMISSIONS,
    Identity,
    ParentEntityType,
    PermissionSet,
    Role,
    VerificationStatus,
    parse_role,
)
from hub_core.logging import get_logger
from hub_core.navigation import NavigationEntry, navigation_for

from .directory import CredentialStore
from .storage import SessionStorage

logger = get_logger(__name__)


class AuthState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class AuthContext:
    """
    Session-scoped authentication state with derived predicates.

    Usage:
        auth = AuthContext(CredentialStore.from_accounts(), MemoryStorage())
        auth.hydrate()
        if auth.login("admin@medgohub.com", "platform123"):
            entries = auth.navigation()
    """

    def __init__(
        self,
        credentials: CredentialStore,
        storage: SessionStorage,
        settings: Optional[HubSettings] = None,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        self._credentials = credentials
        self._storage = storage
        self._settings = settings or HubSettings()
        self._sleep = sleep
        self._login_lock = threading.Lock()
        # Guards the identity commit; logout bumps the generation under it
        self._commit_lock = threading.Lock()
        self._generation = 0
        self._identity: Optional[Identity] = None
        self._state = AuthState.UNINITIALIZED

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._state is AuthState.AUTHENTICATED and self._identity is not None

    @property
    def is_loading(self) -> bool:
        return self._state is AuthState.LOADING

    @property
    def storage_key(self) -> str:
        return self._settings.storage_key

    # -------------------------------------------------------------------------
    # HYDRATION
    # -------------------------------------------------------------------------

    def hydrate(self) -> AuthState:
        """
        Restore the identity persisted in session storage.

        A missing record leaves the session ANONYMOUS. A record that does not
        parse into an active Identity is removed and also leaves the session
        ANONYMOUS; the problem is logged, never raised.
        """
        self._state = AuthState.LOADING
        key = self.storage_key

        try:
            raw = self._storage.get_item(key)
        except StorageError as e:
            logger.error(f"Session storage unreadable, continuing anonymous: {e}")
            return self._become_anonymous()

        if raw is None:
            return self._become_anonymous()

        try:
            identity = self._decode(raw)
        except StorageCorruptError as e:
            logger.warning(f"Discarding stored identity: {e}")
            self._discard_record()
            return self._become_anonymous()

        self._identity = identity
        self._state = AuthState.AUTHENTICATED
        logger.info(f"Session restored for {identity.email or identity.id}")
        return self._state

    def _decode(self, raw: Any) -> Identity:
        key = self.storage_key
        if not isinstance(raw, str):
            raise StorageCorruptError(
                f"Expected a JSON string, got {type(raw).__name__}", key=key
            )
        try:
            record = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise StorageCorruptError(f"Stored identity is not valid JSON: {e}", key=key) from e

        try:
            identity = Identity.from_dict(record)
        except MediGoHubError as e:
            raise StorageCorruptError(
                f"Stored identity has an unexpected shape: {e.message}", key=key
            ) from e

        if not identity.is_active:
            raise StorageCorruptError(
                f"Stored identity is {identity.status.value}", key=key
            )
        return identity

    def _discard_record(self) -> None:
        try:
            self._storage.remove_item(self.storage_key)
        except StorageError as e:
            logger.error(f"Could not remove corrupt identity record: {e}")

    def _become_anonymous(self) -> AuthState:
        self._identity = None
        self._state = AuthState.ANONYMOUS
        return self._state

    # -------------------------------------------------------------------------
    # LOGIN / LOGOUT
    # -------------------------------------------------------------------------

    def login(self, email: str, password: str) -> bool:
        """
        Authenticate against the credential store.

        Returns:
            True on success; False for any credential mismatch

        Raises:
            LoginInProgressError: if another login on this context is pending
            StorageError: if the identity could not be persisted
        """
        if not self._login_lock.acquire(blocking=False):
            logger.warning("Rejected login while another one is pending")
            raise LoginInProgressError()

        previous_identity = self._identity
        generation = self._generation
        self._state = AuthState.LOADING
        try:
            # Stands in for the round-trip to an auth backend
            delay = self._settings.login_delay_seconds
            if delay:
                self._sleep(delay)

            try:
                identity = self._credentials.verify(email, password)
            except InvalidCredentialsError:
                logger.warning(f"Login failed for {email!r}")
                identity = None

            with self._commit_lock:
                if self._generation != generation:
                    logger.warning(f"Discarding login for {email!r}: session was logged out")
                    return False

                if identity is None:
                    self._restore(previous_identity)
                    return False

                try:
                    self._storage.set_item(self.storage_key, json.dumps(identity.to_dict()))
                except StorageError:
                    self._restore(previous_identity)
                    raise

                self._identity = identity
                self._state = AuthState.AUTHENTICATED
            logger.info(f"Login succeeded for {identity.email} ({identity.role.value})")
            return True
        finally:
            self._login_lock.release()

    def _restore(self, identity: Optional[Identity]) -> None:
        self._identity = identity
        self._state = AuthState.AUTHENTICATED if identity else AuthState.ANONYMOUS

    def logout(self) -> None:
        """
        End the session. Safe to call when already anonymous.

        Memory is cleared even if the storage backend fails; that failure is
        then re-raised so the caller knows a record may remain. A login still
        pending when this runs is discarded.
        """
        with self._commit_lock:
            self._generation += 1
            was_authenticated = self._identity is not None
            try:
                self._storage.remove_item(self.storage_key)
            finally:
                self._become_anonymous()

        if was_authenticated:
            logger.info("User logged out")

    # -------------------------------------------------------------------------
    # PREDICATES
    # -------------------------------------------------------------------------

    @property
    def effective_permissions(self) -> PermissionSet:
        """
        Permissions the current identity may exercise.

        Unverified providers exercise none, whatever their stored grants.
        """
        identity = self._identity
        if identity is None:
            return EMPTY_PERMISSIONS
        if identity.role is Role.PROVIDER and not identity.is_verified_provider:
            return EMPTY_PERMISSIONS
        return identity.permissions

    @fail_closed(bool)
    def has_permission(self, permission: str) -> bool:
        return self.effective_permissions.allows(permission)

    @fail_closed(bool)
    def has_role(self, role: Union[Role, str]) -> bool:
        if self._identity is None:
            return False
        return self._identity.role is parse_role(role)

    @fail_closed(bool)
    def is_platform_user(self) -> bool:
        return self._identity is not None and self._identity.role is Role.PLATFORM

    @fail_closed(bool)
    def is_provider_verified(self) -> bool:
        """False when anonymous; non-provider identities count as verified."""
        identity = self._identity
        if identity is None:
            return False
        if identity.role is not Role.PROVIDER:
            return True
        return identity.verification_status is VerificationStatus.VERIFIED

    @fail_closed(bool)
    def can_manage_providers(self) -> bool:
        identity = self._identity
        if identity is None:
            return False
        return identity.role is Role.PLATFORM or self._is_platform_staff(identity)

    @fail_closed(bool)
    def can_manage_staff(self) -> bool:
        identity = self._identity
        if identity is None:
            return False
        return (
            identity.role is Role.PLATFORM
            or identity.is_verified_provider
            or self._is_platform_staff(identity)
        )

    @staticmethod
    def _is_platform_staff(identity: Identity) -> bool:
        return (
            identity.role is Role.STAFF
            and identity.parent_entity_type is ParentEntityType.PLATFORM
        )

    @fail_closed(str)
    def get_display_name(self) -> str:
        if self._identity is None:
            return ""
        return self._identity.label(self._settings.placeholder_name)

    @fail_closed(list)
    def navigation(self) -> List[NavigationEntry]:
        return navigation_for(self._identity)
