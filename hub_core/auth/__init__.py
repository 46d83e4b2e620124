"""
Authentication module for MediGo Hub.
Session-scoped auth context, demo credential store and route guard.

⚠️ DEMO ONLY - NOT FOR PRODUCTION USE
Credentials live in memory and the session record lives in Streamlit's
session state. A real deployment needs a server-side identity provider.
"""

from .storage import SessionStorage, MemoryStorage, StreamlitSessionStorage
from .directory import DEMO_ACCOUNTS, CredentialStore, hash_password, check_password
from .context import AuthContext, AuthState
from .guard import (
    AccessDecision,
    check_access,
    check_route_access,
    ensure_verified_provider,
    require_access,
)
from .session import get_auth_context, initialize_session_state, logout_user

__all__ = [
    "SessionStorage",
    "MemoryStorage",
    "StreamlitSessionStorage",
    "DEMO_ACCOUNTS",
    "CredentialStore",
    "hash_password",
    "check_password",
    "AuthContext",
    "AuthState",
    "AccessDecision",
    "check_access",
    "check_route_access",
    "ensure_verified_provider",
    "require_access",
    "get_auth_context",
    "initialize_session_state",
    "logout_user",
]
