# contact_widget/ui.py
# =============================================================================
# Capa Streamlit del widget de contacto (solo presentación)
# - Estilos del botón flotante y de la tarjeta del formulario
# - Render del formulario a partir de ContactWidget.state
# - Callbacks que traducen eventos de Streamlit a toggle/update_field/submit
# =============================================================================

from typing import Callable

import streamlit as st

from contact_widget.form import ContactWidget

WIDGET_KEY = "contact_widget"        # Instancia del widget en session_state
EMAIL_KEY = "contact_email_input"    # Key del input de email
MESSAGE_KEY = "contact_message_input"  # Key del textarea de mensaje


# ────────────────────────────────────────────────────────
# 1) Estilos (contenedor flotante abajo a la derecha)
# ────────────────────────────────────────────────────────
def apply_widget_styles() -> None:
    st.markdown(
        """
        <style>
          .st-key-contact-fab{
            position:fixed; right:2.5rem; bottom:2.5rem; z-index:99999;
            display:flex; flex-direction:column; align-items:flex-end; max-width:380px;
          }
          .st-key-contact-card{
            background:#27272a; border-radius:12px; box-shadow:0 10px 35px rgba(0,0,0,.35);
            padding:1rem; margin-bottom:1rem;
          }
          .st-key-contact-card h3{ color:#e4e4e7; font-size:1.1rem; margin:0; }
          .st-key-contact-card small{ color:#a1a1aa; }
          .st-key-contact_toggle button{
            width:3.5rem; height:3.5rem; border-radius:999px; background:#3f3f46; color:#f4f4f5;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


# ────────────────────────────────────────────────────────
# 2) Estado compartido entre reruns
# ────────────────────────────────────────────────────────
def get_widget(factory: Callable[[], ContactWidget]) -> ContactWidget:
    """Devuelve el widget de la sesión (lo crea con factory la primera vez)."""
    if WIDGET_KEY not in st.session_state:
        st.session_state[WIDGET_KEY] = factory()
    for key in (EMAIL_KEY, MESSAGE_KEY):
        st.session_state.setdefault(key, "")
    return st.session_state[WIDGET_KEY]


def _sync_inputs(widget: ContactWidget) -> None:
    # Los inputs reflejan el estado tras reset/envío correcto.
    st.session_state[EMAIL_KEY] = widget.state.email.value
    st.session_state[MESSAGE_KEY] = widget.state.message.value


def _on_toggle(widget: ContactWidget) -> None:
    widget.toggle()
    _sync_inputs(widget)


def _on_change(widget: ContactWidget, field: str, key: str) -> None:
    widget.update_field(field, st.session_state[key])


def _on_submit(widget: ContactWidget) -> None:
    # Valores tecleados que aún no dispararon on_change.
    for field, key in (("email", EMAIL_KEY), ("message", MESSAGE_KEY)):
        if getattr(widget.state, field).value != st.session_state[key]:
            widget.update_field(field, st.session_state[key])
    widget.submit()
    _sync_inputs(widget)


# ────────────────────────────────────────────────────────
# 3) Render
# ────────────────────────────────────────────────────────
def render_contact_widget(widget: ContactWidget) -> None:
    """Pinta el botón flotante y, si está abierto, la tarjeta con el formulario."""
    state = widget.state
    with st.container(key="contact-fab"):
        if state.open:
            with st.container(key="contact-card"):
                st.markdown("### Have a question? Drop in your message 👇")
                st.markdown("<small>It won't take more than 10 seconds. Shoot your shot. 😉</small>", unsafe_allow_html=True)

                st.text_input(
                    "Email Address",
                    key=EMAIL_KEY,
                    placeholder="johndoe@xyz.com",
                    on_change=_on_change,
                    args=(widget, "email", EMAIL_KEY),
                )
                if state.email.error:
                    st.error(state.email.error)

                st.text_area(
                    "Message",
                    key=MESSAGE_KEY,
                    height=100,
                    placeholder="I'd love a compliment from you.",
                    on_change=_on_change,
                    args=(widget, "message", MESSAGE_KEY),
                )
                if state.message.error:
                    st.error(state.message.error)

                st.button(
                    "Submitting..." if state.loading else "Submit",
                    key="contact_submit",
                    type="primary",
                    on_click=_on_submit,
                    args=(widget,),
                )
                if state.success:
                    st.success(state.success)
                if state.error:
                    st.error(state.error)

        st.button("✖" if state.open else "💬", key="contact_toggle", on_click=_on_toggle, args=(widget,))
