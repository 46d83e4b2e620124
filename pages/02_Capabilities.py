# =============================================================================
# 02_Capabilities.py - Provider capability catalog (platform admins only)
# =============================================================================
from __future__ import annotations
import streamlit as st

from hub_core.auth import initialize_session_state, require_access
from hub_core.errors import safe_execute
from hub_core.identity import Role
from hub_core.registry import build_module_matrix, get_visible_modules, list_categories
from hub_core.ui import render_sidebar, resolve_icon, with_icon

st.set_page_config(
    page_title="Capacidades - MediGo Hub",
    page_icon="🧩",
    layout="wide",
)

auth = initialize_session_state()
require_access(auth, required_roles=[Role.PLATFORM])
render_sidebar(auth)

st.title("🧩 Catálogo de capacidades")
st.caption("Módulos y permisos declarados para cada categoría de proveedor")

configs = list_categories()
config = st.selectbox(
    "Categoría",
    configs,
    format_func=lambda c: f"{resolve_icon(c.icon)} {c.display_name}".strip(),
)

st.markdown(config.description)
with st.expander("Funcionalidades", expanded=False):
    for feature in config.features:
        st.markdown(f"- {feature}")

# ============================================================================
# MODULE MATRIX
# ============================================================================
st.markdown("### Módulos y permisos")
matrix = safe_execute(
    build_module_matrix,
    config.category,
    error_message="No se pudo construir la matriz de módulos",
)
if matrix is not None:
    st.dataframe(matrix, hide_index=True, use_container_width=True)

# ============================================================================
# GRANT SIMULATOR
# ============================================================================
st.markdown("### Simulador de permisos")
granted = st.multiselect(
    "Permisos otorgados",
    sorted(config.permissions),
    key=f"grant_{config.category.value}",
)
visible = get_visible_modules(config.category, granted)
st.caption(f"{len(visible)} de {len(config.modules)} módulos visibles")
for module in visible:
    badge = " · básico" if module.is_core else ""
    st.markdown(f"- {with_icon(module.icon, module.display_name)} `{module.route}`{badge}")
