# ────────────────────────────────────────────────────────
# PRUEBA AISLADA · Envío de un aviso de contacto con el proveedor configurado
# ────────────────────────────────────────────────────────
"""
Propósito
- Comprobar credenciales y remitentes SIN pasar por la API HTTP.
- Con DRY_RUN=1 solo se loguea el envío (id sintético).

Cómo usar
- Configura SENDGRID_API_KEY, CONTACT_FORM_EMAIL, EMAIL_FROM (y APP_ENV) en tu .env.
- Ejecuta:  python scripts/send_test_email.py [email_remitente] [mensaje]
"""

# ── BLOQUE 1 · Carga de entorno ──────────────────────────────────────────────
import sys
from dotenv import load_dotenv

load_dotenv()

# ── BLOQUE 2 · Importar proyecto y logger ────────────────────────────────────
from loguru import logger
from contact_api.config import Settings
from contact_api.dispatch import dispatch_contact_email
from contact_api.mailer import init_provider

# ── BLOQUE 3 · Parámetros de prueba ──────────────────────────────────────────
SENDER = sys.argv[1] if len(sys.argv) > 1 else "visitor@example.com"
MESSAGE = sys.argv[2] if len(sys.argv) > 2 else "Hola!\nEsto es una prueba aislada del formulario de contacto."


def main() -> int:
    settings = Settings.from_env()
    logger.info(f"→ APP_ENV={settings.environment} | DRY_RUN={settings.dry_run}")
    provider = init_provider(settings)
    if provider is None:
        logger.error("Proveedor no inicializado: revisa SENDGRID_API_KEY (o usa DRY_RUN=1).")
        return 1

    status_code, result = dispatch_contact_email({"email": SENDER, "message": MESSAGE}, settings, provider)
    logger.info(f"→ HTTP equivalente: {status_code} | cuerpo: {result.to_body()}")
    return 0 if status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
