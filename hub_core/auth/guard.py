# =============================================================================
# hub_core/auth/guard.py
# Route Guard: page-level access checks over the Auth Context
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Union

import streamlit as st

from hub_core.errors import MediGoHubError, UnverifiedProviderError
from hub_core.identity import Role, parse_role
from hub_core.logging import get_logger
from hub_core.navigation import NAVIGATION_SETS
from hub_core.registry import (
    category_for_provider_type,
    get_config_by_route,
    normalize_route,
    route_has_prefix,
)

from .context import AuthContext

logger = get_logger(__name__)

WELCOME_PAGE = "Welcome.py"
DASHBOARD_PAGE = "pages/01_Dashboard.py"
INTENDED_DESTINATION_KEY = "intended_destination"

# Reasons an AccessDecision can carry
UNAUTHENTICATED = "unauthenticated"
ROLE = "role"
PERMISSION = "permission"
UNVERIFIED = "unverified"

DENIAL_MESSAGES = {
    UNAUTHENTICATED: "Debe iniciar sesión para acceder a esta sección.",
    ROLE: "Su rol no tiene acceso a esta sección.",
    PERMISSION: "No tiene permisos para acceder a esta sección.",
    UNVERIFIED: "Su cuenta de proveedor aún no ha sido verificada.",
}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: Optional[str] = None

    @property
    def message(self) -> str:
        return DENIAL_MESSAGES.get(self.reason, "") if not self.allowed else ""


ALLOWED = AccessDecision(True)


def _deny(reason: str, detail: str = "") -> AccessDecision:
    logger.info(f"Access denied ({reason}) {detail}".rstrip())
    return AccessDecision(False, reason)


def _known_routes() -> FrozenSet[str]:
    return frozenset(
        entry.href for entries in NAVIGATION_SETS.values() for entry in entries
    )


# =============================================================================
# DECISIONS
# =============================================================================

def check_access(
    auth: AuthContext,
    required_permission: Optional[str] = None,
    required_roles: Optional[Iterable[Union[Role, str]]] = None,
) -> AccessDecision:
    """
    Decide whether the current session may render a page.

    Every requirement that is supplied must pass. An unverified provider is
    denied whenever a permission is required, whatever it holds.
    """
    if not auth.is_authenticated:
        return _deny(UNAUTHENTICATED)

    if isinstance(required_roles, str):
        required_roles = [required_roles]
    if required_roles:
        try:
            roles = {parse_role(role) for role in required_roles}
        except MediGoHubError as e:
            logger.error(f"Invalid role requirement: {e}")
            return _deny(ROLE, "invalid requirement")
        if not any(auth.has_role(role) for role in roles):
            return _deny(ROLE, f"needs one of {sorted(r.value for r in roles)}")

    if required_permission:
        if not auth.is_provider_verified():
            return _deny(UNVERIFIED, required_permission)
        if not auth.has_permission(required_permission):
            return _deny(PERMISSION, required_permission)

    return ALLOWED


def check_route_access(auth: AuthContext, route: str) -> AccessDecision:
    """
    Decide whether the current session may open ``route``.

    Provider category routes are checked against the capability registry;
    any other route must belong to an entry of the session's navigation.
    """
    if not auth.is_authenticated:
        return _deny(UNAUTHENTICATED)

    identity = auth.identity
    route = normalize_route(route)

    config = get_config_by_route(route)
    if config is not None:
        if identity.role is Role.PLATFORM:
            return ALLOWED
        if identity.role is not Role.PROVIDER:
            return _deny(ROLE, route)
        if not auth.is_provider_verified():
            return _deny(UNVERIFIED, route)
        if category_for_provider_type(identity.provider_type) is not config.category:
            return _deny(ROLE, f"{route} belongs to {config.category.value}")

        module = config.module_for_route(route)
        if module is None or not module.is_visible_to(auth.effective_permissions):
            return _deny(PERMISSION, route)
        return ALLOWED

    owners = [href for href in _known_routes() if route_has_prefix(route, href)]
    if not owners:
        return _deny(PERMISSION, f"{route} is not a known route")
    owner = max(owners, key=len)

    if any(entry.href == owner for entry in auth.navigation()):
        return ALLOWED
    if identity.role is Role.PROVIDER and not auth.is_provider_verified():
        return _deny(UNVERIFIED, route)
    return _deny(PERMISSION, route)


def ensure_verified_provider(auth: AuthContext) -> None:
    """
    Raises:
        UnverifiedProviderError: if the session is a provider that is not
            yet verified
    """
    identity = auth.identity
    if identity is not None and identity.role is Role.PROVIDER and not auth.is_provider_verified():
        status = identity.verification_status.value if identity.verification_status else None
        raise UnverifiedProviderError(
            "La cuenta del proveedor está pendiente de verificación",
            verification_status=status,
        )


# =============================================================================
# STREAMLIT WRAPPER
# =============================================================================

def require_access(
    auth: AuthContext,
    required_permission: Optional[str] = None,
    required_roles: Optional[Iterable[Union[Role, str]]] = None,
    route: Optional[str] = None,
) -> AccessDecision:
    """
    Protect the current page; call before rendering any content.

    On denial the denied state is rendered and the script run is stopped.

    Usage:
        auth = get_auth_context()
        require_access(auth, required_roles=["PLATFORM"])
    """
    decision = check_access(auth, required_permission, required_roles)
    if decision.allowed and route:
        decision = check_route_access(auth, route)

    if decision.allowed:
        return decision

    if decision.reason == UNAUTHENTICATED:
        if route:
            st.session_state[INTENDED_DESTINATION_KEY] = route
        st.warning(f"🔒 {decision.message}")
        if st.button("Ir a Iniciar Sesión", type="primary"):
            st.switch_page(WELCOME_PAGE)
        st.stop()
        return decision

    st.error("⛔ Acceso Denegado")
    st.markdown(decision.message)
    if auth.identity is not None:
        st.caption(f"Tu rol actual: {auth.identity.role.value}")
    if st.button("Volver al Dashboard"):
        st.switch_page(DASHBOARD_PAGE)
    st.stop()
    return decision
