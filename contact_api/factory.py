# contact_api/factory.py                                                                          # Fábrica de la app, sin efectos al importar.

# =================================================================================
# 🏭 FÁBRICA DE LA APLICACIÓN API (FastAPI)
# ---------------------------------------------------------------------------------
# - Resuelve Settings (o usa los inyectados)
# - Construye el proveedor de email (o lo deja en None si falla)
# - Registra routers modulares (contact, meta)
# Importar este módulo no lee .env ni crea ninguna app.
# =================================================================================

from typing import Optional                                                                     # Tipos opcionales.

from fastapi import FastAPI                                                                     # Importa FastAPI para crear la aplicación.
from loguru import logger                                                                       # Importa logger para escribir trazas al arrancar.

from contact_api.config import Settings                                                         # Configuración inmutable.
from contact_api.mailer import EmailProvider, init_provider                                     # Fábrica del proveedor.
from contact_api.routers import contact, meta                                                   # Routers de la aplicación.

_UNSET = object()                                                                               # Centinela: "construye el proveedor desde Settings".


def create_app(settings: Optional[Settings] = None, provider=_UNSET) -> FastAPI:
    """
    Construye la app. Los tests pasan settings y un proveedor falso; en producción
    ambos se resuelven desde el entorno. provider=None simula un arranque fallido.
    """
    if settings is None:                                                                        # Sin settings explícitos...
        settings = Settings.from_env()                                                          # ...se leen del entorno.

    logger.info(                                                                                # Log de arranque (nunca la key).
        "[BOOT] APP_ENV={} | DRY_RUN={} | SG_KEY_SET={} | RECIPIENT_SET={}",
        settings.environment,
        settings.dry_run,
        "yes" if settings.sendgrid_api_key else "no",
        "yes" if settings.contact_form_email else "no",
    )

    email_provider: Optional[EmailProvider] = (                                                 # Proveedor compartido (solo lectura).
        init_provider(settings) if provider is _UNSET else provider
    )

    app = FastAPI(                                                                              # Crea la instancia de la aplicación FastAPI.
        title="Portfolio Contact API",                                                          # Título de la API (documentación OpenAPI).
        description="Recibe el formulario de contacto del portfolio y lo reenvía por email",    # Descripción corta de la API.
        version="1.0.0",                                                                        # Versión de la API.
    )
    app.state.settings = settings                                                               # Inyectado vía Depends(get_settings).
    app.state.email_provider = email_provider                                                   # Inyectado vía Depends(get_email_provider).

    app.include_router(contact.router)                                                          # Monta /api/send-email.
    app.include_router(meta.router)                                                             # Monta /api/health.
    return app
