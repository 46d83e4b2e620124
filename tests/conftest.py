# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import pytest
from typing import Dict
from unittest.mock import MagicMock


# =============================================================================
# SETTINGS & CREDENTIALS
# =============================================================================

@pytest.fixture
def hub_settings():
    """Fast settings: no simulated delay, cheapest bcrypt cost"""
    from hub_core.config import HubSettings

    return HubSettings(login_delay_seconds=0.0, bcrypt_rounds=4)


@pytest.fixture(scope="session")
def credential_store():
    """Demo accounts hashed once for the whole run"""
    from hub_core.auth import CredentialStore

    return CredentialStore.from_accounts(rounds=4)


@pytest.fixture(scope="session")
def demo_passwords() -> Dict[str, str]:
    """email -> plain-text demo password"""
    from hub_core.auth import DEMO_ACCOUNTS

    return {a["profile"]["email"]: a["password"] for a in DEMO_ACCOUNTS}


# =============================================================================
# AUTH CONTEXT FIXTURES
# =============================================================================

@pytest.fixture
def memory_storage():
    """Empty in-memory session storage"""
    from hub_core.auth import MemoryStorage

    return MemoryStorage()


@pytest.fixture
def auth(credential_store, memory_storage, hub_settings):
    """Fresh, not yet hydrated auth context"""
    from hub_core.auth import AuthContext

    return AuthContext(credential_store, memory_storage, settings=hub_settings)


@pytest.fixture
def login_as(auth, demo_passwords):
    """Log the ``auth`` fixture in as one of the demo accounts"""
    def _login(email: str):
        auth.hydrate()
        assert auth.login(email, demo_passwords[email])
        return auth

    return _login


# =============================================================================
# IDENTITY FIXTURES
# =============================================================================

@pytest.fixture
def make_identity():
    """Factory for identities with sensible defaults"""
    from hub_core.identity import Identity

    def _make(role="PLATFORM", permissions=(), **fields):
        fields.setdefault("id", "test-user")
        fields.setdefault("email", "test@medgohub.com")
        return Identity(role=role, permissions=list(permissions), **fields)

    return _make


@pytest.fixture
def platform_admin(make_identity):
    return make_identity("PLATFORM", ["all"], display_name="Admin")


@pytest.fixture
def platform_finance_staff(make_identity):
    return make_identity(
        "STAFF",
        ["billing_manage", "reports_view"],
        staff_type="FINANCE",
        parent_entity_type="PLATFORM",
        first_name="Ana",
        last_names="López",
    )


@pytest.fixture
def verified_pharmacy(make_identity):
    return make_identity(
        "PROVIDER",
        ["dashboard_access", "orders_process", "couriers_manage"],
        provider_type="PHARMACY",
        verification_status="VERIFIED",
        organization_name="Farmacia Central",
    )


@pytest.fixture
def pending_pharmacy(make_identity):
    """Unverified provider seeded with stale full grants"""
    return make_identity(
        "PROVIDER",
        ["all"],
        provider_type="PHARMACY",
        verification_status="PENDING",
    )


# =============================================================================
# MOCK FIXTURES
# =============================================================================

class ScriptStopped(Exception):
    """Raised by the mocked st.stop()"""


@pytest.fixture
def mock_streamlit(monkeypatch):
    """Mock Streamlit inside every hub_core module that renders"""
    import hub_core.auth.guard as guard
    import hub_core.auth.storage as storage
    import hub_core.errors.handlers as handlers
    import hub_core.config.settings as settings

    mock_st = MagicMock()
    mock_st.session_state = {}
    mock_st.secrets = {}
    mock_st.button.return_value = False
    mock_st.stop.side_effect = ScriptStopped
    mock_st.ScriptStopped = ScriptStopped

    for module in (guard, storage, handlers, settings):
        monkeypatch.setattr(module, "st", mock_st)

    yield mock_st
