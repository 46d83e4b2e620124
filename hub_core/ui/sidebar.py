# =============================================================================
# hub_core/ui/sidebar.py
# Sidebar brand, identity card and role navigation
# =============================================================================
"""
Renders the MediGo Hub sidebar for the current session.
Call ``render_sidebar(auth)`` right after st.set_page_config() on every page.
"""
from __future__ import annotations
from html import escape
from typing import List, Optional

import streamlit as st

from hub_core.auth import AuthContext, logout_user
from hub_core.navigation import NavigationEntry

from .icons import resolve_icon, with_icon
from .labels import detailed_role_name, role_color, verification_label

ACTIVE_ROUTE_KEY = "active_route"
HOME_ROUTE = "/dashboard"
DASHBOARD_PAGE = "pages/01_Dashboard.py"
WELCOME_PAGE = "Welcome.py"

SIDEBAR_CSS = """
<style>
section[data-testid="stSidebar"] .mg-brand-wrap {
    margin: 0 0 1.25rem 0;
    padding: 1.25rem 1rem;
    background: linear-gradient(135deg, rgba(8,47,73,0.95), rgba(12,74,110,0.9));
    border-radius: 14px;
    border: 1px solid rgba(34, 211, 238, 0.2);
}
.mg-brand-title {
    font-size: 1.25rem;
    font-weight: 800;
    background: linear-gradient(135deg, #ffffff 0%, #22d3ee 60%, #06b6d4 100%);
    -webkit-background-clip: text;
    -webkit-text-fill-color: transparent;
}
.mg-brand-tag {
    color: #94a3b8;
    font-size: 0.7rem;
    letter-spacing: 0.08em;
    text-transform: uppercase;
}
.mg-identity {
    margin: 0.5rem 0 1rem 0;
    padding: 0.85rem 1rem;
    border-radius: 12px;
    background: rgba(255, 255, 255, 0.04);
    border: 1px solid rgba(255, 255, 255, 0.08);
}
.mg-identity-name {
    color: #f8fafc;
    font-weight: 700;
}
.mg-role-badge {
    display: inline-block;
    margin-top: 0.4rem;
    padding: 0.15rem 0.6rem;
    border-radius: 999px;
    color: #ffffff;
    font-size: 0.7rem;
    font-weight: 600;
}
</style>
"""


def inject_sidebar_style() -> None:
    st.markdown(SIDEBAR_CSS, unsafe_allow_html=True)


def render_sidebar_brand() -> None:
    st.sidebar.markdown(
        """
        <div class="mg-brand-wrap">
            <div class="mg-brand-title">🩺 MediGo Hub</div>
            <div class="mg-brand-tag">Operaciones de salud</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_identity_card(auth: AuthContext) -> None:
    """Name, detailed role and verification status of the signed-in user."""
    identity = auth.identity
    if identity is None:
        return

    status = ""
    if identity.verification_status is not None:
        status = f"<div style='color:#94a3b8;font-size:0.75rem;margin-top:0.35rem;'>" \
                 f"Verificación: {verification_label(identity.verification_status)}</div>"

    st.sidebar.markdown(
        f"""
        <div class="mg-identity">
            <div class="mg-identity-name">{escape(auth.get_display_name())}</div>
            <div style="color:#cbd5e1;font-size:0.8rem;">{escape(identity.email)}</div>
            <span class="mg-role-badge" style="background:{role_color(identity.role)};">
                {detailed_role_name(identity)}
            </span>
            {status}
        </div>
        """,
        unsafe_allow_html=True,
    )


def active_route() -> str:
    return st.session_state.get(ACTIVE_ROUTE_KEY) or HOME_ROUTE


def render_navigation(auth: AuthContext) -> List[NavigationEntry]:
    """
    One sidebar button per visible entry, in navigation order.

    Non-operational entries (the pending-verification notice) are shown
    disabled. Clicking an entry opens it on the dashboard page.
    """
    entries = auth.navigation()
    if not entries:
        st.sidebar.info("Sin módulos disponibles para su cuenta.")
        return entries

    st.sidebar.markdown("**Navegación**")
    current = active_route()
    for entry in entries:
        label = with_icon(entry.icon, entry.title)
        clicked = st.sidebar.button(
            label,
            key=f"nav_{entry.href}_{entry.title}",
            help=entry.description,
            disabled=not entry.operational,
            type="primary" if entry.href == current else "secondary",
            use_container_width=True,
        )
        if clicked:
            open_route(entry.href)

    return entries


def open_route(route: str) -> None:
    st.session_state[ACTIVE_ROUTE_KEY] = route
    st.switch_page(DASHBOARD_PAGE)


def render_logout_button(auth: AuthContext) -> None:
    if not auth.is_authenticated:
        return
    st.sidebar.divider()
    if st.sidebar.button("🚪 Cerrar sesión", key="logout_button", use_container_width=True):
        logout_user()
        st.session_state.pop(ACTIVE_ROUTE_KEY, None)
        st.switch_page(WELCOME_PAGE)


def render_sidebar(auth: AuthContext) -> Optional[List[NavigationEntry]]:
    """Full sidebar; returns the rendered navigation entries."""
    inject_sidebar_style()
    render_sidebar_brand()
    if not auth.is_authenticated:
        return None

    render_identity_card(auth)
    entries = render_navigation(auth)
    render_logout_button(auth)
    return entries


def entry_header(entry: NavigationEntry) -> str:
    icon = resolve_icon(entry.icon)
    return f"{icon} {entry.title}".strip()
