# contact_api/dispatch.py  # Núcleo del envío: (payload, settings, proveedor) → (status, resultado).

# =================================================================================
# 🧠 Lógica de despacho del formulario de contacto
# ---------------------------------------------------------------------------------
# Función pura respecto a la request HTTP: no lee entorno ni estado global.
# Todos los fallos se convierten en un EmailDispatchResult con su código HTTP.
# =================================================================================

from typing import Any, Tuple

from loguru import logger

from contact_api.config import Settings
from contact_api.mailer import EmailProvider, compose_contact_email, mask_email, send_alert_webhook
from contact_api.schemas import EmailDispatchRequest, EmailDispatchResult

DispatchOutcome = Tuple[int, EmailDispatchResult]

FAILED_TO_SEND = "Failed to send email"


def not_initialized() -> DispatchOutcome:
    """Respuesta fija cuando el proveedor no arrancó."""
    return 500, EmailDispatchResult(
        success=False,
        message="Email service not initialized",
        error="Internal server error",
    )


def dispatch_contact_email(payload: Any, settings: Settings, provider: EmailProvider) -> DispatchOutcome:
    """
    Valida el payload, compone el correo y lo entrega al proveedor.
    Solo comprueba presencia de campos: el formato del email lo valida el widget.
    """
    try:
        body = payload if isinstance(payload, dict) else {}                            # Cuerpo no-objeto → vacío.
        email, message = body.get("email"), body.get("message")

        if not email or not message:                                                   # 1) Campos obligatorios.
            logger.error("Faltan campos obligatorios: email={} message={}", bool(email), bool(message))
            return 400, EmailDispatchResult(message="Email and message are required")

        if not settings.contact_form_email:                                            # 2) Destinatario configurado.
            logger.error(
                "CONTACT_FORM_EMAIL ausente en la configuración (environment={})",
                settings.environment,
            )
            send_alert_webhook(
                settings.alert_webhook_url,
                "🚨 Mailer config",
                "Falta CONTACT_FORM_EMAIL: el formulario de contacto no puede entregar mensajes.",
            )
            return 500, EmailDispatchResult(
                message="Email service configuration error",
                details="Recipient email is missing",
            )

        request = EmailDispatchRequest(email=email, message=message)                   # 3) Tipos estrictos (str).
        outgoing = compose_contact_email(settings, request.email, request.message)     # 4) Mensaje según el modo.
        logger.info(
            "Enviando correo de contacto: from={} to={} reply_to={} subject={!r} chars={} provider={}",
            outgoing.from_address, outgoing.to, mask_email(request.email), outgoing.subject,
            len(request.message), provider.name,
        )

        result = provider.send(outgoing)                                               # 5) Un solo intento, sin reintentos.
        if result.error:
            logger.error(
                "Error del proveedor ({}): {}", result.error.name, result.error.message,
            )
            send_alert_webhook(
                settings.alert_webhook_url,
                "🚨 Mailer error",
                f"No se pudo enviar el aviso de contacto de {mask_email(request.email)}: {result.error.message}",
            )
            return 500, EmailDispatchResult(success=False, message=FAILED_TO_SEND, error=result.error.message)

        logger.info("Correo de contacto enviado: id={}", result.id)
        return 200, EmailDispatchResult(success=True, message="Email sent successfully", id=result.id)

    except Exception as e:                                                             # Límite exterior: nada escapa.
        logger.exception("Error inesperado despachando el formulario de contacto")
        return 500, EmailDispatchResult(success=False, message=FAILED_TO_SEND, error=str(e))
