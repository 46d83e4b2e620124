# =============================================================================
# 03_Provider_Workspace.py - Category workspace for verified providers
# =============================================================================
from __future__ import annotations
import streamlit as st

from hub_core.auth import ensure_verified_provider, initialize_session_state, require_access
from hub_core.errors import UnverifiedProviderError
from hub_core.identity import Role
from hub_core.registry import (
    category_for_provider_type,
    get_category_config,
    get_visible_modules,
)
from hub_core.ui import PROVIDER_TYPE_LABELS, open_route, render_sidebar, with_icon

st.set_page_config(
    page_title="Espacio de trabajo - MediGo Hub",
    page_icon="🏥",
    layout="wide",
)

auth = initialize_session_state()
require_access(auth, required_roles=[Role.PROVIDER])
render_sidebar(auth)

identity = auth.identity
st.title(f"🏥 {identity.organization_name or auth.get_display_name()}")
st.caption(PROVIDER_TYPE_LABELS.get(identity.provider_type, "Proveedor"))

try:
    ensure_verified_provider(auth)
except UnverifiedProviderError as e:
    st.warning(e.message)
    st.stop()

category = category_for_provider_type(identity.provider_type)
if category is None:
    st.info("Los especialistas trabajan desde las secciones de su menú lateral.")
    for entry in auth.navigation():
        st.markdown(f"- {with_icon(entry.icon, entry.title)}: {entry.description}")
    st.stop()

config = get_category_config(category)
st.markdown(config.description)

modules = get_visible_modules(category, auth.effective_permissions)
st.markdown(f"### Módulos habilitados ({len(modules)} de {len(config.modules)})")

columns = st.columns(3)
for index, module in enumerate(modules):
    with columns[index % 3]:
        with st.container(border=True):
            st.markdown(f"**{with_icon(module.icon, module.display_name)}**")
            st.caption(module.description)
            if st.button("Abrir", key=f"module_{module.id}"):
                open_route(module.route)

hidden = [m for m in config.modules if m not in modules]
if hidden:
    with st.expander("Módulos no habilitados para su cuenta"):
        for module in hidden:
            required = ", ".join(sorted(module.required_permissions))
            st.markdown(f"- {module.display_name} (requiere: {required})")
