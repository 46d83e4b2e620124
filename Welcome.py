from __future__ import annotations
import pandas as pd
import streamlit as st

from hub_core.auth import DEMO_ACCOUNTS, initialize_session_state
from hub_core.auth.guard import INTENDED_DESTINATION_KEY
from hub_core.errors import LoginInProgressError, StorageError, handle_error
from hub_core.identity import Identity
from hub_core.ui import detailed_role_name, open_route, render_sidebar

# ============================================================================
# PAGE CONFIGURATION
# ============================================================================
st.set_page_config(
    page_title="MediGo Hub - Iniciar sesión",
    page_icon="🩺",
    layout="centered",
)

auth = initialize_session_state()
render_sidebar(auth)

st.markdown(
    """
    <div style='text-align:center;margin:1.5rem 0 2rem 0;'>
        <div style='font-size:2.4rem;font-weight:800;color:#0891b2;'>🩺 MediGo Hub</div>
        <div style='color:#64748b;'>Centro de operaciones para plataforma, proveedores y personal</div>
    </div>
    """,
    unsafe_allow_html=True,
)


# ============================================================================
# SIGNED IN
# ============================================================================
if auth.is_authenticated:
    st.success(f"Sesión iniciada como **{auth.get_display_name()}**")
    if st.button("Ir al Dashboard", type="primary", use_container_width=True):
        open_route(st.session_state.pop(INTENDED_DESTINATION_KEY, None) or "/dashboard")
    st.stop()


# ============================================================================
# LOGIN FORM
# ============================================================================
with st.form("login_form"):
    email = st.text_input("Correo electrónico", placeholder="usuario@medgohub.com")
    password = st.text_input("Contraseña", type="password")
    submitted = st.form_submit_button(
        "Iniciar sesión",
        type="primary",
        disabled=auth.is_loading,
        use_container_width=True,
    )

if submitted:
    try:
        with st.spinner("Verificando credenciales..."):
            success = auth.login(email, password)
    except LoginInProgressError:
        st.info("Ya hay un inicio de sesión en curso. Espere un momento.")
    except StorageError as e:
        handle_error(e, user_message="No se pudo guardar la sesión")
    else:
        if success:
            open_route(st.session_state.pop(INTENDED_DESTINATION_KEY, None) or "/dashboard")
        else:
            st.error("Correo o contraseña incorrectos.")


# ============================================================================
# DEMO ACCOUNTS
# ============================================================================
with st.expander("Cuentas de demostración", expanded=False):
    rows = []
    for account in DEMO_ACCOUNTS:
        identity = Identity.from_dict(account["profile"])
        rows.append({
            "Correo": identity.email,
            "Contraseña": account["password"],
            "Rol": detailed_role_name(identity),
        })
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
