# tests/api/test_mailer.py                                                                  # Pruebas del mailer: proveedores, plantilla y composición

import pytest
from python_http_client.exceptions import UnauthorizedError

from contact_api.dispatch import dispatch_contact_email
from contact_api.mailer import (
    DryRunProvider,
    ProviderInitError,
    SendGridProvider,
    build_contact_html,
    build_provider,
    compose_contact_email,
    init_provider,
    mask_email,
)
from contact_api.schemas import OutgoingEmail


class _StubResponse:                                                                       # Respuesta mínima del SDK
    def __init__(self, status_code, headers):
        self.status_code = status_code
        self.headers = headers


class _StubSendGridClient:                                                                 # Sustituye a SendGridAPIClient
    def __init__(self, response=None, raises=None):
        self.response = response
        self.raises = raises
        self.messages = []

    def send(self, message):
        self.messages.append(message)
        if self.raises is not None:
            raise self.raises
        return self.response


OUTGOING = OutgoingEmail(
    sender_email="hi@portfolio.example.com",
    sender_name="Contact Form",
    to="owner@example.com",
    reply_to="visitor@example.org",
    subject="📨 New Message from Portfolio.example.com",
    html="<p>hi</p>",
)


# =======================
# 🏗️ Construcción del proveedor
# =======================
def test_missing_key_fails_initialization(prod_settings):
    settings = prod_settings.model_copy(update={"sendgrid_api_key": None})
    with pytest.raises(ProviderInitError, match="SENDGRID_API_KEY is not defined"):
        build_provider(settings)


def test_malformed_key_fails_initialization(prod_settings):
    settings = prod_settings.model_copy(update={"sendgrid_api_key": "re_123"})
    with pytest.raises(ProviderInitError, match="Must start with"):
        build_provider(settings)


def test_init_provider_returns_none_on_failure(prod_settings):
    settings = prod_settings.model_copy(update={"sendgrid_api_key": "nope"})
    assert init_provider(settings) is None


def test_valid_key_builds_sendgrid_provider(prod_settings):
    assert isinstance(build_provider(prod_settings), SendGridProvider)


def test_dry_run_needs_no_key(prod_settings):
    settings = prod_settings.model_copy(update={"dry_run": True, "sendgrid_api_key": None})
    provider = build_provider(settings)
    assert isinstance(provider, DryRunProvider)
    first, second = provider.send(OUTGOING), provider.send(OUTGOING)
    assert first.id and second.id and first.id != second.id


# =======================
# 🚚 SendGridProvider
# =======================
def test_sendgrid_success_uses_message_id_header():
    stub = _StubSendGridClient(response=_StubResponse(202, {"X-Message-Id": "msg-1"}))
    result = SendGridProvider("SG.x", client=stub).send(OUTGOING)
    assert result.id == "msg-1" and result.error is None
    payload = stub.messages[0].get()                                                       # JSON que iría a /v3/mail/send
    assert payload["reply_to"]["email"] == "visitor@example.org"
    assert payload["from"] == {"email": "hi@portfolio.example.com", "name": "Contact Form"}
    assert payload["personalizations"][0]["to"][0]["email"] == "owner@example.com"


def test_sendgrid_success_without_message_id_keeps_id_key(prod_settings):
    stub = _StubSendGridClient(response=_StubResponse(202, {}))
    result = SendGridProvider("SG.x", client=stub).send(OUTGOING)
    assert result.id == "" and result.error is None
    status_code, body = dispatch_contact_email({"email": "a@b.com", "message": "hi"}, prod_settings,
                                               SendGridProvider("SG.x", client=stub))
    assert status_code == 200
    assert body.to_body() == {"success": True, "message": "Email sent successfully", "id": ""}


def test_sendgrid_http_error_becomes_structured_error():
    body = b'{"errors": [{"message": "The provided authorization grant is invalid"}]}'
    stub = _StubSendGridClient(raises=UnauthorizedError(401, "Unauthorized", body, {}))
    result = SendGridProvider("SG.x", client=stub).send(OUTGOING)
    assert result.id is None
    assert result.error.name == "UnauthorizedError"
    assert result.error.message == "The provided authorization grant is invalid"


def test_sendgrid_error_without_json_body_falls_back_to_reason():
    stub = _StubSendGridClient(raises=UnauthorizedError(401, "Unauthorized", b"", {}))
    result = SendGridProvider("SG.x", client=stub).send(OUTGOING)
    assert result.error.message == "Unauthorized"


def test_sendgrid_non_2xx_without_exception_is_error():
    stub = _StubSendGridClient(response=_StubResponse(302, {}))
    result = SendGridProvider("SG.x", client=stub).send(OUTGOING)
    assert result.error is not None


# =======================
# 🧾 Plantilla y composición
# =======================
def test_html_embeds_user_content_without_escaping(prod_settings):
    html = build_contact_html(prod_settings, "<x>@example.com", "<b>hola</b>\nadiós")
    assert "<strong>Email:</strong> <x>@example.com" in html
    assert "<b>hola</b><br>adiós" in html
    assert "Hello Romain," in html
    assert "contact form on Portfolio.example.com" in html


def test_html_escaping_is_opt_in(prod_settings):
    settings = prod_settings.model_copy(update={"escape_html": True})
    html = build_contact_html(settings, "a@b.com", "<b>hola</b>\nadiós")
    assert "&lt;b&gt;hola&lt;/b&gt;<br>adiós" in html


def test_braces_in_message_are_kept_literally(prod_settings):
    html = build_contact_html(prod_settings, "a@b.com", "{owner} {0}")
    assert "{owner} {0}" in html


def test_compose_production_and_development(prod_settings, dev_settings):
    prod = compose_contact_email(prod_settings, "a@b.com", "hi")
    dev = compose_contact_email(dev_settings, "a@b.com", "hi")
    assert (prod.to, prod.subject) == ("owner@example.com", "📨 New Message from Portfolio.example.com")
    assert (dev.to, dev.subject) == ("verified@example.com", "[TEST] 📨 New Message from Portfolio.example.com")
    assert prod.reply_to == dev.reply_to == "a@b.com"


@pytest.mark.parametrize("raw, masked", [
    ("john.doe@example.com", "jo***@example.com"),
    ("ab", "ab***"),
    (None, "<no-email>"),
])
def test_mask_email(raw, masked):
    assert mask_email(raw) == masked
