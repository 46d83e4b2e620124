# =============================================================================
# 01_Dashboard.py - Role-based dashboard
# Shows the section selected in the sidebar navigation
# =============================================================================
"""
Dashboard - Entry point after login

The sidebar lists the navigation entries of the signed-in identity. The
selected entry is kept in session state and rendered here; every route is
checked by the route guard before anything is shown.
"""
from __future__ import annotations
import streamlit as st

from hub_core.auth import initialize_session_state, require_access
from hub_core.identity import Role
from hub_core.registry import get_config_by_route
from hub_core.ui import (
    active_route,
    detailed_role_name,
    entry_header,
    open_route,
    render_sidebar,
    resolve_icon,
    verification_label,
)

st.set_page_config(
    page_title="Dashboard - MediGo Hub",
    page_icon="🩺",
    layout="wide",
)

# ============================================================================
# AUTHENTICATION CHECK
# ============================================================================
auth = initialize_session_state()
require_access(auth)

entries = render_sidebar(auth) or []
if not entries:
    st.info("Su cuenta no tiene secciones disponibles. Contacte a soporte.")
    st.stop()

route = active_route()
if not any(entry.href == route for entry in entries):
    route = entries[0].href

require_access(auth, route=route)
entry = next(entry for entry in entries if entry.href == route)
identity = auth.identity

# ============================================================================
# HEADER
# ============================================================================
st.title(entry_header(entry))
st.caption(f"{auth.get_display_name()} · {detailed_role_name(identity)}")

# ============================================================================
# PENDING VERIFICATION
# ============================================================================
if not entry.operational:
    st.warning(entry.description)
    st.markdown(
        f"**Estado de verificación:** {verification_label(identity.verification_status)}"
    )
    if identity.license_number:
        st.markdown(f"**Licencia registrada:** {identity.license_number}")
    st.info("Recibirá acceso a los módulos de su categoría cuando el equipo de la "
            "plataforma complete la verificación.")
    st.stop()

# ============================================================================
# OVERVIEW
# ============================================================================
category = get_config_by_route(route)
is_home = entry.href == "/dashboard" or (
    category is not None and route == category.dashboard_route
)

if is_home:
    if category is not None:
        st.markdown(f"#### {resolve_icon(category.icon)} {category.display_name}")
        st.markdown(category.description)

    col1, col2, col3 = st.columns(3)
    col1.metric("Secciones disponibles", len(entries))
    col2.metric("Permisos", "Todos" if auth.effective_permissions.wildcard
                else len(auth.effective_permissions))
    col3.metric("Rol", identity.role.value)

    st.markdown("### Accesos rápidos")
    shortcuts = [e for e in entries if e.href != entry.href and e.operational]
    columns = st.columns(3)
    for index, shortcut in enumerate(shortcuts):
        with columns[index % 3]:
            with st.container(border=True):
                st.markdown(f"**{entry_header(shortcut)}**")
                st.caption(shortcut.description)
                if st.button("Abrir", key=f"open_{shortcut.href}_{shortcut.title}"):
                    open_route(shortcut.href)

    if identity.role is Role.PROVIDER and auth.is_provider_verified():
        st.divider()
        if st.button("Ver espacio de trabajo del proveedor"):
            st.switch_page("pages/03_Provider_Workspace.py")
    if identity.role is Role.PLATFORM:
        st.divider()
        if st.button("Ver catálogo de capacidades"):
            st.switch_page("pages/02_Capabilities.py")
    st.stop()

# ============================================================================
# SECTION
# ============================================================================
st.markdown(entry.description)
with st.container(border=True):
    st.markdown(f"**Ruta:** `{entry.href}`")
    if entry.is_core:
        st.markdown("**Acceso:** sección básica, siempre disponible")
    else:
        required = ", ".join(sorted(entry.required_permissions))
        st.markdown(f"**Permisos que habilitan esta sección:** {required}")
st.info("El contenido operativo de esta sección se gestiona fuera del hub de acceso.")
