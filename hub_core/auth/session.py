# =============================================================================
# hub_core/auth/session.py
# Streamlit composition root for the Auth Context
# =============================================================================
"""
Wires settings, the credential store and the session storage into one
AuthContext per browser session. Pages only call ``get_auth_context()``.
"""

from __future__ import annotations

import streamlit as st

from hub_core.config import HubSettings, load_settings
from hub_core.errors import ErrorContext
from hub_core.logging import setup_logging, get_logger, LogContext

from .context import AuthContext, AuthState
from .directory import CredentialStore
from .storage import StreamlitSessionStorage

logger = get_logger(__name__)

AUTH_CONTEXT_KEY = "_auth_context"
LOGGING_FLAG_KEY = "_logging_configured"


@st.cache_resource(show_spinner=False)
def get_settings() -> HubSettings:
    return load_settings()


@st.cache_resource(show_spinner="Preparando credenciales...")
def get_credential_store(rounds: int) -> CredentialStore:
    """Hashing every demo password is slow, so the store is built once per process."""
    return CredentialStore.from_accounts(rounds=rounds)


def initialize_session_state() -> AuthContext:
    """
    Prepare logging and the auth context for this session.
    Call this at the start of every page.
    """
    settings = get_settings()

    if not st.session_state.get(LOGGING_FLAG_KEY, False):
        setup_logging(settings.log_level, log_to_file=settings.log_to_file)
        st.session_state[LOGGING_FLAG_KEY] = True

    return get_auth_context()


def get_auth_context() -> AuthContext:
    """Return this session's AuthContext, hydrating it on first use."""
    auth = st.session_state.get(AUTH_CONTEXT_KEY)
    if auth is None:
        settings = get_settings()
        auth = AuthContext(
            credentials=get_credential_store(settings.bcrypt_rounds),
            storage=StreamlitSessionStorage(),
            settings=settings,
        )
        st.session_state[AUTH_CONTEXT_KEY] = auth

    if auth.state is AuthState.UNINITIALIZED:
        with LogContext(logger, "Hydrating session"):
            auth.hydrate()
    return auth


def logout_user() -> None:
    """Log out and report storage failures to the user."""
    with ErrorContext("Cerrando sesión"):
        get_auth_context().logout()
