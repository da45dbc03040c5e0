# contact_widget/client.py  # Cliente HTTP del widget hacia /api/send-email.

# =================================================================================
# 🌐 Transporte del widget
# ---------------------------------------------------------------------------------
# POST JSON {email, message}. Cualquier respuesta no-2xx o fallo de red se
# convierte en ContactSubmissionError; el widget decide qué mostrar.
# =================================================================================

import os                                                                            # URL base y timeout desde el entorno.
from typing import Optional                                                          # Tipos opcionales.

import requests                                                                      # Cliente HTTP.

SEND_EMAIL_PATH = "/api/send-email"


class ContactSubmissionError(Exception):
    """El envío no llegó a completarse (red, timeout o respuesta no-2xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ContactApiClient:
    def __init__(self, base_url: str, timeout: float = 12, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")                                         # Sin barra final.
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "ContactApiClient":
        base_url = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")                # URL base de la API (fallback local).
        try:
            timeout = float(os.getenv("CONTACT_API_TIMEOUT", "12"))
        except ValueError:                                                           # Valor inválido → default.
            timeout = 12
        return cls(base_url, timeout=timeout)

    @property
    def url(self) -> str:
        return self.base_url + SEND_EMAIL_PATH

    def send(self, email: str, message: str) -> dict:
        """Envía el formulario y devuelve el JSON de éxito de la API."""
        try:
            r = self.session.post(self.url, json={"email": email, "message": message}, timeout=self.timeout)
        except requests.RequestException as e:
            raise ContactSubmissionError(f"{type(e).__name__}: {e}") from e

        try:
            data = r.json()
        except ValueError:                                                           # Cuerpo vacío o no-JSON.
            data = {}
        if not 200 <= r.status_code < 300:                                           # Solo 2xx cuenta como éxito (3xx incluido en fallo).
            detail = data.get("message") if isinstance(data, dict) else None
            raise ContactSubmissionError(detail or "Failed to send message", status_code=r.status_code)
        return data if isinstance(data, dict) else {}
