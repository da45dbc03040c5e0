# contact_api/mailer.py  # Ruta y nombre del archivo.                                         # Indica el nombre del módulo y su ubicación.

# =================================================================================
# 📧 MÓDULO DE ENVÍO DE CORREOS (con soporte HTML)                                   # Describe propósito del módulo.
# ---------------------------------------------------------------------------------
# Proveedores (SendGrid real o DRY_RUN que solo loguea), composición del mensaje    # Explica funciones principales.
# según el modo (desarrollo/producción) y plantilla HTML del aviso de contacto.     # Indica funcionalidades cubiertas.
# =================================================================================

# 🐍 Importaciones
import html                                                                            # Escape opcional para valores libres en HTML.
import json                                                                            # Serialización JSON para webhook/errores SendGrid.
import uuid                                                                            # Ids sintéticos en DRY_RUN.
from typing import Optional                                                            # Tipos opcionales.

import requests                                                                        # HTTP simple para webhook opcional.
from loguru import logger                                                              # Logger estructurado para trazas legibles.
from python_http_client.exceptions import HTTPError                                    # Errores HTTP que lanza el SDK de SendGrid.
from sendgrid import SendGridAPIClient                                                 # Cliente oficial de SendGrid.
from sendgrid.helpers.mail import Mail, From, ReplyTo                                  # Construcción del mensaje.

from contact_api.config import Settings                                                # Configuración inyectada.
from contact_api.schemas import OutgoingEmail, ProviderError, SendResult               # Contrato con el proveedor.

SENDGRID_KEY_PREFIX = "SG."                                                            # Formato esperado de las API keys.


class ProviderInitError(RuntimeError):                                                 # Fallo al construir el proveedor.
    """El proveedor no pudo inicializarse (credencial ausente o mal formada)."""


# =================================================================================
# 🙈 Enmascarado de emails para logs
# =================================================================================
def mask_email(addr: Optional[str]) -> str:                                            # Enmascara emails en logs.
    if not addr or not isinstance(addr, str):                                          # Sin email (o tipo raro) → placeholder.
        return "<no-email>"
    addr = addr.strip()                                                                # Limpia espacios en blanco.
    if "@" not in addr or len(addr) < 3:                                               # Formato raro → enmascara parcialmente.
        return addr[:2] + "***"
    name, dom = addr.split("@", 1)                                                     # Divide en nombre y dominio.
    return name[:2] + "***@" + dom                                                     # Nombre parcial + dominio.


# =================================================================================
# 📢 Webhook de alertas (opcional)                                                     # Sección de webhook opcional.
# =================================================================================
def send_alert_webhook(url: Optional[str], title: str, message: str) -> None:         # Notifica errores por webhook.
    """Envía alerta a webhook si hay URL configurada; silencioso si no."""
    if not url:                                                                       # Si no hay URL configurada...
        return                                                                        # No hace nada (opcionalidad real).
    try:                                                                              # Intenta envío del webhook.
        payload = {"text": f"{title}\n{message}"}                                     # Payload simple (Slack/Teams compatible).
        headers = {"Content-Type": "application/json"}                                # Cabeceras JSON.
        requests.post(url, data=json.dumps(payload), headers=headers, timeout=5)      # POST con timeout de 5s.
    except requests.RequestException as e:                                            # Errores de red del webhook.
        logger.error(f"No se pudo notificar alerta por webhook: {e}")                # Se registra y no se propaga.


# =================================================================================
# 🚚 Proveedores
# =================================================================================
class EmailProvider:                                                                   # Capacidad "enviar mensaje".
    """Interfaz mínima: send(OutgoingEmail) → SendResult (id o error estructurado)."""

    name = "base"

    def send(self, email: OutgoingEmail) -> SendResult:
        raise NotImplementedError


class SendGridProvider(EmailProvider):                                                 # Proveedor real (SendGrid).
    name = "sendgrid"

    def __init__(self, api_key: str, client: Optional[SendGridAPIClient] = None):
        self._client = client or SendGridAPIClient(api_key)                            # Cliente API (una vez por proceso).

    def send(self, email: OutgoingEmail) -> SendResult:
        message = Mail(                                                                # Construye mensaje HTML.
            from_email=From(email.sender_email, email.sender_name),                    # Remitente con nombre.
            to_emails=email.to, subject=email.subject, html_content=email.html,        # Destinatario, asunto y cuerpo.
        )
        message.reply_to = ReplyTo(email.reply_to)                                     # Responder directamente al usuario.
        try:
            response = self._client.send(message)                                      # Envía y obtiene respuesta.
        except HTTPError as e:                                                         # 4xx/5xx de SendGrid.
            return SendResult(error=ProviderError(name=type(e).__name__, message=_sendgrid_error_message(e)))

        logger.info(
            "SendGrid response: {} | X-Message-Id: {}",
            response.status_code, response.headers.get("X-Message-Id"),
        )
        if 200 <= response.status_code < 300:                                          # Éxito si 2xx.
            message_id = response.headers.get("X-Message-Id")
            if not message_id:                                                         # Aceptado pero sin id: se entrega "".
                logger.warning("SendGrid aceptó el envío ({}) sin X-Message-Id", response.status_code)
                message_id = ""
            return SendResult(id=message_id)
        return SendResult(error=ProviderError(                                         # 3xx u otros códigos raros.
            name="application_error",
            message=f"SendGrid respondió con código {response.status_code}",
        ))


def _sendgrid_error_message(e: HTTPError) -> str:                                      # Extrae el primer mensaje del cuerpo.
    try:
        data = json.loads(e.body)
        errors = data.get("errors") or []
        if errors and errors[0].get("message"):
            return errors[0]["message"]
    except (TypeError, ValueError, AttributeError):                                    # Cuerpo vacío o no-JSON.
        pass
    return str(getattr(e, "reason", None) or e)                                        # Fallback: reason del HTTP.


class DryRunProvider(EmailProvider):                                                   # Simulación: solo loguea.
    name = "dry_run"

    def send(self, email: OutgoingEmail) -> SendResult:
        message_id = f"dry-run-{uuid.uuid4().hex}"                                     # Id sintético, distinto en cada envío.
        logger.info(
            "[DRY_RUN] Simular envío a {} | Reply-To: {} | Asunto: {} | id={}",
            email.to, mask_email(email.reply_to), email.subject, message_id,
        )
        return SendResult(id=message_id)


def build_provider(settings: Settings) -> EmailProvider:
    """Construye el proveedor según la configuración; lanza ProviderInitError si no es posible."""
    if settings.dry_run:                                                               # DRY_RUN no necesita credenciales.
        return DryRunProvider()
    key = settings.sendgrid_api_key
    if not key:
        raise ProviderInitError("SENDGRID_API_KEY is not defined")
    if not key.startswith(SENDGRID_KEY_PREFIX):
        raise ProviderInitError(f'Invalid API key format. Must start with "{SENDGRID_KEY_PREFIX}"')
    return SendGridProvider(key)


def init_provider(settings: Settings) -> Optional[EmailProvider]:
    """Intenta construir el proveedor una vez; si falla devuelve None y deja traza."""
    try:
        provider = build_provider(settings)
    except ProviderInitError as e:
        logger.error("Error inicializando el proveedor de email: {}", e)
        send_alert_webhook(settings.alert_webhook_url, "🚨 Mailer no inicializado", str(e))
        return None
    logger.info("Proveedor de email inicializado: {}", provider.name)
    return provider


# =================================================================================
# 🧾 Composición del mensaje
# =================================================================================
SUBJECT_TEMPLATE = "📨 New Message from {site}"                                        # Asunto base.
TEST_SUBJECT_PREFIX = "[TEST] "                                                        # Prefijo en desarrollo.


def compose_contact_email(settings: Settings, sender_email: str, message: str) -> OutgoingEmail:
    """
    Arma el mensaje según el modo. En desarrollo remitente y destinatario se fuerzan
    a las identidades verificadas (sandbox del proveedor) y el asunto lleva [TEST].
    """
    dev = settings.is_development
    subject = SUBJECT_TEMPLATE.format(site=settings.site_name)
    return OutgoingEmail(
        sender_email=settings.dev_email_from if dev else settings.email_from,
        sender_name=settings.dev_email_sender_name if dev else settings.email_sender_name,
        to=settings.dev_email_to if dev else settings.contact_form_email,
        reply_to=sender_email,                                                         # Siempre el email del usuario.
        subject=(TEST_SUBJECT_PREFIX + subject) if dev else subject,
        html=build_contact_html(settings, sender_email, message),
    )


# =================================================================================
# 🌐 Plantilla HTML
# =================================================================================
_DEV_BANNER_CSS = ".dev-banner { background: #fde68a; color: #92400e; padding: 10px; text-align: center; margin-bottom: 20px; }"
_DEV_BANNER = '<div class="dev-banner">⚠️ This is a test email from development environment</div>'
_DEV_FOOTER = '<p style="color: #92400e;">Note: In development mode, emails are only sent to verified addresses.</p>'

_CONTACT_HTML = """<!DOCTYPE html>
<html>
  <head>
    <style>
      body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
      .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
      .header {{ background-color: #1f2937; color: white; padding: 20px; border-radius: 8px; display: flex; align-items: center; gap: 15px; }}
      .header svg {{ width: 32px; height: 32px; }}
      .content {{ background-color: #f9fafb; padding: 20px; border-radius: 8px; margin-top: 20px; }}
      .footer {{ text-align: center; margin-top: 20px; color: #6b7280; font-size: 0.875rem; }}
      {dev_css}
    </style>
  </head>
  <body>
    <div class="container">
      {dev_banner}
      <div class="header">
        <svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round" style="color: #06b6d4;">
          <path d="M4 4h16c1.1 0 2 .9 2 2v12c0 1.1-.9 2-2 2H4c-1.1 0-2-.9-2-2V6c0-1.1.9-2 2-2z"></path>
          <polyline points="22,6 12,13 2,6"></polyline>
        </svg>
        <h1 style="margin: 0;">New Message from Your Website</h1>
      </div>
      <div class="content">
        <p>Hello {owner},</p>
        <p>You've received a new message from your website contact form.</p>

        <h2 style="color: #1f2937;">Sender Details</h2>
        <p><strong>Email:</strong> {email}</p>

        <h2 style="color: #1f2937;">Message</h2>
        <p style="background: white; padding: 15px; border-radius: 4px; border: 1px solid #e5e7eb;">
          {message}
        </p>

        <p style="margin-top: 20px;">
          To reply, you can either:
          <ul>
            <li>Use the reply-to address set in this email</li>
            <li>Click "Reply" in your email client</li>
          </ul>
        </p>
      </div>
      <div class="footer">
        <p>This message was sent from the contact form on {site}</p>
        {dev_footer}
      </div>
    </div>
  </body>
</html>
"""


def build_contact_html(settings: Settings, sender_email: str, message: str) -> str:
    """Ensambla el HTML. Sin escape por defecto: email y mensaje se insertan tal cual."""
    if settings.escape_html:                                                           # Opt-in: CONTACT_ESCAPE_HTML=1.
        sender_email = html.escape(sender_email)
        message = html.escape(message)
    dev = settings.is_development
    return _CONTACT_HTML.format(
        dev_css=_DEV_BANNER_CSS if dev else "",
        dev_banner=_DEV_BANNER if dev else "",
        dev_footer=_DEV_FOOTER if dev else "",
        owner=settings.owner_name,
        site=settings.site_name,
        email=sender_email,
        message=message.replace("\n", "<br>"),                                         # Saltos de línea → <br>.
    )
