# conftest.py
# -------------------------------------------------------------------------------------
# Archivo: conftest.py (raíz del proyecto)
# Propósito: Fixtures compartidas para pytest.
#            - Settings explícitos (producción y desarrollo) sin leer el .env real.
#            - Proveedor de email falso que registra envíos y devuelve ids únicos.
#            - TestClient de FastAPI construido con create_app(settings, provider).
#            - Cliente HTTP falso para el widget (sin red).
# Los tests nunca tocan SendGrid ni una API en marcha.
# -------------------------------------------------------------------------------------

from __future__ import annotations  # Permite anotaciones de tipos adelantadas
from typing import List, Optional   # Tipos para los dobles de prueba

import pytest                       # Framework de testing
from fastapi.testclient import TestClient  # Cliente en memoria para la app FastAPI

from contact_api.config import Settings                              # Configuración inyectable
from contact_api.mailer import EmailProvider                         # Interfaz del proveedor
from contact_api.factory import create_app                           # Fábrica de la app (sin .env ni app global)
from contact_api.schemas import OutgoingEmail, ProviderError, SendResult
from contact_widget.client import ContactSubmissionError             # Error del transporte del widget


# =====================
# Dobles de prueba
# =====================
class FakeProvider(EmailProvider):
    """Registra cada envío; devuelve ids secuenciales o el error configurado."""

    name = "fake"

    def __init__(self, ids: Optional[List[str]] = None, error: Optional[ProviderError] = None,
                 raises: Optional[Exception] = None):
        self.sent: List[OutgoingEmail] = []                          # Mensajes recibidos
        self._ids = list(ids or [])                                  # Ids a devolver en orden
        self.error = error                                           # Error estructurado opcional
        self.raises = raises                                         # Excepción inesperada opcional

    def send(self, email: OutgoingEmail) -> SendResult:
        self.sent.append(email)
        if self.raises is not None:
            raise self.raises
        if self.error is not None:
            return SendResult(error=self.error)
        message_id = self._ids.pop(0) if self._ids else f"fake-{len(self.sent)}"
        return SendResult(id=message_id)


class FakeContactClient:
    """Sustituye a ContactApiClient: guarda las llamadas y puede simular fallos."""

    def __init__(self, fail: Optional[ContactSubmissionError] = None):
        self.calls: List[dict] = []
        self.fail = fail

    def send(self, email: str, message: str) -> dict:
        self.calls.append({"email": email, "message": message})
        if self.fail is not None:
            raise self.fail
        return {"success": True, "message": "Email sent successfully", "id": f"id-{len(self.calls)}"}


# =====================
# Fixtures
# =====================
@pytest.fixture()
def prod_settings() -> Settings:
    return Settings(
        environment="production",
        sendgrid_api_key="SG.test-key",
        contact_form_email="owner@example.com",
        public_site_url="https://portfolio.example.com",
        email_from="hi@portfolio.example.com",
        email_sender_name="Contact Form",
        dev_email_from="onboarding@example.com",
        dev_email_to="verified@example.com",
        site_name="Portfolio.example.com",
        owner_name="Romain",
    )


@pytest.fixture()
def dev_settings(prod_settings: Settings) -> Settings:
    return prod_settings.model_copy(update={"environment": "development"})


@pytest.fixture()
def fake_provider() -> FakeProvider:
    return FakeProvider(ids=["abc123"])


@pytest.fixture()
def client(prod_settings: Settings, fake_provider: FakeProvider) -> TestClient:
    return TestClient(create_app(prod_settings, provider=fake_provider))


@pytest.fixture()
def make_client():
    """Construye un TestClient con settings/proveedor a medida."""
    def _make(settings: Settings, provider) -> TestClient:
        return TestClient(create_app(settings, provider=provider))
    return _make


@pytest.fixture()
def fake_contact_client() -> FakeContactClient:
    return FakeContactClient()
