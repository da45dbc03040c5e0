# streamlit_app.py  # Página del portfolio con el widget de contacto flotante.

# =================================================================================  # Separador visual.
# 💬 PORTFOLIO • Widget de contacto                                                  # Título de la app.
# ---------------------------------------------------------------------------------  # Separador.
# - Botón flotante que abre/cierra el formulario (email + mensaje).                 # Descripción 1.
# - Validación local antes de llamar a la API (/api/send-email).                    # Descripción 2.
# - API_BASE_URL en .env apunta al backend FastAPI (contact_api).                   # Descripción 3.
# =================================================================================  # Fin cabecera.

# 🐍 Importaciones                                                                  # Sección de imports.
# ---------------------------------------------------------------------------------
import streamlit as st  # Framework de UI.
from dotenv import load_dotenv  # Utilidad para cargar variables desde archivo .env.

from contact_widget.client import ContactApiClient  # Transporte HTTP hacia la API.
from contact_widget.form import ContactWidget  # Máquina de estados del formulario.
from contact_widget.ui import apply_widget_styles, get_widget, render_contact_widget  # Capa visual.

# ⚙️ Configuración inicial                                                           # Preparación previa.
# ---------------------------------------------------------------------------------
load_dotenv()  # Carga variables desde .env en os.environ (ej. API_BASE_URL).

st.set_page_config(page_title="Portfolio", page_icon="💬", layout="centered")  # ✅ Primera llamada Streamlit.
apply_widget_styles()  # Estilos del contenedor flotante.

# 🧩 Widget de contacto                                                              # Estado por sesión.
# ---------------------------------------------------------------------------------
widget = get_widget(lambda: ContactWidget(ContactApiClient.from_env()))  # Se crea una vez por sesión.
render_contact_widget(widget)  # Pinta botón y formulario según el estado.
