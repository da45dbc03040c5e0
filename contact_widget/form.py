# contact_widget/form.py                                                                     # Ruta y nombre del archivo del estado del widget.

# =================================================================================
# 💬 Estado del widget de contacto (máquina de estados, sin UI)
# ---------------------------------------------------------------------------------
# closed → open-idle → open-submitting → open-success | open-error
# - toggle(): abre/cierra y limpia TODO el estado.
# - update_field(): fija un valor y limpia solo el error de ese campo.
# - submit(): valida en orden fijo y, si todo pasa, envía por el cliente HTTP.
# La capa Streamlit (contact_widget/ui.py) solo pinta este estado.
# =================================================================================

import re                                                                                    # Validación del formato de email.
from enum import Enum                                                                        # Estados visibles del widget.
from typing import Literal, Optional                                                         # Tipos para anotar campos.

from loguru import logger                                                                    # Logger del proyecto.
from pydantic import BaseModel, Field                                                        # Registro estructurado del estado.

from contact_widget.client import ContactApiClient, ContactSubmissionError                   # Transporte HTTP hacia la API.

FieldName = Literal["email", "message"]                                                      # Campos del formulario.
FIELD_NAMES = ("email", "message")

# Textos fijos de la UI
EMAIL_EMPTY = "Oops! Email cannot be empty."
EMAIL_INVALID = "Please enter a valid email address"
MESSAGE_EMPTY = "Oops! Message cannot be empty."
SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon. 🚀"
FAILURE_MESSAGE = "Failed to send message. Please try again later."

# Forma de email local-part@dominio; no cubre todo RFC 5322 (rechaza casos raros).
EMAIL_REGEX = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r'@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))'
)


def is_valid_email(value: str) -> bool:
    """True si el email (en minúsculas) encaja completo con EMAIL_REGEX."""
    return EMAIL_REGEX.fullmatch(value.lower()) is not None


class WidgetStatus(str, Enum):                                                               # Estados observables.
    closed = "closed"
    idle = "open-idle"
    submitting = "open-submitting"
    success = "open-success"
    error = "open-error"


class FieldState(BaseModel):                                                                 # Par valor/error de un campo.
    value: str = ""
    error: Optional[str] = None


class ContactFormState(BaseModel):                                                           # Estado completo del widget.
    email: FieldState = Field(default_factory=FieldState)
    message: FieldState = Field(default_factory=FieldState)
    open: bool = False
    loading: bool = False
    success: Optional[str] = None
    error: Optional[str] = None


class ContactWidget:
    """Widget flotante de contacto: estado + validación local + envío."""

    def __init__(self, client: ContactApiClient):
        self.client = client                                                                 # Transporte inyectado (fake en tests).
        self.state = ContactFormState()                                                      # Estado inicial: cerrado y vacío.

    @property
    def status(self) -> WidgetStatus:
        s = self.state
        if not s.open:
            return WidgetStatus.closed
        if s.loading:
            return WidgetStatus.submitting
        if s.success:
            return WidgetStatus.success
        if s.error:
            return WidgetStatus.error
        return WidgetStatus.idle

    def toggle(self) -> None:
        """Abre/cierra el widget; en ambos sentidos el estado queda limpio."""
        self.state = ContactFormState(open=not self.state.open)

    def update_field(self, field: FieldName, value: str) -> None:
        if field not in FIELD_NAMES:
            raise ValueError(f"Campo desconocido: {field!r}")
        setattr(self.state, field, FieldState(value=value))                                 # Limpia solo el error de ese campo.

    def _validate(self) -> bool:
        """Primera regla que falla marca su campo y corta la validación."""
        email, message = self.state.email, self.state.message
        if not email.value:
            email.error = EMAIL_EMPTY
            return False
        if not is_valid_email(email.value):
            email.error = EMAIL_INVALID
            return False
        if not message.value:
            message.error = MESSAGE_EMPTY
            return False
        return True

    def submit(self) -> bool:
        """Valida y envía. Devuelve True solo si la API confirmó el envío."""
        if self.state.loading:                                                               # Ya hay un envío en curso.
            logger.warning("Envío ignorado: ya hay una solicitud en curso")
            return False
        if not self._validate():
            return False

        self.state.loading = True
        self.state.success = None
        self.state.error = None
        try:
            self.client.send(self.state.email.value, self.state.message.value)
        except ContactSubmissionError as e:
            logger.error("Error enviando el formulario de contacto: {}", e)
            self.state.error = FAILURE_MESSAGE                                              # Mensaje genérico, sin detalle.
            return False
        finally:
            self.state.loading = False

        self.state.success = SUCCESS_MESSAGE
        self.state.email = FieldState()
        self.state.message = FieldState()
        return True
