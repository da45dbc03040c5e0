# contact_api/config.py  # Configuración central del servicio de contacto.                     # Indica el nombre del módulo y su ubicación.

# =================================================================================
# ⚙️ Configuración (resuelta UNA vez al arrancar)
# ---------------------------------------------------------------------------------
# Lee variables de entorno (.env vía python-dotenv) y las congela en un objeto
# Settings que se inyecta en la app. El handler nunca lee os.getenv directamente.
# =================================================================================

import os                                                                              # Acceso a variables de entorno.
from typing import List, Optional, Literal                                             # Tipos para anotar campos.

from pydantic import BaseModel, ConfigDict                                             # Modelo inmutable para la configuración.

LOCAL_DEV_ORIGIN = "http://localhost:3000"                                             # Origen del front en desarrollo local.

EnvironmentLiteral = Literal["development", "production"]                              # Modos soportados.


def _flag(name: str, default: str = "0") -> bool:                                      # Helper: lee banderas "1"/"0".
    return os.getenv(name, default).strip() == "1"                                     # Solo "1" activa la bandera.


def _clean(name: str) -> Optional[str]:                                                # Helper: lee y limpia un valor opcional.
    value = os.getenv(name, "").strip()                                                # Quita espacios accidentales.
    return value or None                                                               # Vacío → None.


class Settings(BaseModel):
    """Configuración inmutable del servicio (modo, remitentes, destinatario, CORS)."""
    environment: EnvironmentLiteral = "production"                                     # Modo de ejecución.
    sendgrid_api_key: Optional[str] = None                                             # Credencial del proveedor.
    contact_form_email: Optional[str] = None                                           # Destinatario configurado (producción).
    public_site_url: str = LOCAL_DEV_ORIGIN                                            # Origen público del sitio.

    email_from: str = "hi@example.com"                                                 # Remitente público (producción).
    email_sender_name: str = "Contact Form"                                            # Nombre visible del remitente.
    dev_email_from: str = "test@example.com"                                           # Remitente verificado para pruebas.
    dev_email_sender_name: str = "Portfolio (dev)"                                     # Nombre visible en pruebas.
    dev_email_to: str = "test@example.com"                                             # Destinatario verificado para pruebas.

    site_name: str = "my portfolio"                                                    # Nombre del sitio (asunto/pie).
    owner_name: str = "there"                                                          # Saludo del correo ("Hello <owner>").

    dry_run: bool = False                                                              # True → proveedor que solo loguea.
    escape_html: bool = False                                                          # True → escapa contenido del usuario.
    alert_webhook_url: Optional[str] = None                                            # Webhook opcional para alertas.

    model_config = ConfigDict(frozen=True)                                             # Se resuelve una vez y no se muta.

    @property
    def is_development(self) -> bool:                                                  # Atajo para ramas dev/prod.
        return self.environment == "development"

    @property
    def allowed_origins(self) -> List[str]:                                            # Lista blanca de orígenes CORS.
        return [self.public_site_url.rstrip("/"), LOCAL_DEV_ORIGIN]

    @classmethod
    def from_env(cls) -> "Settings":
        """Construye Settings desde el entorno; valores ausentes usan los defaults del modelo."""
        env = os.getenv("APP_ENV", "production").strip().lower()                       # Modo declarado.
        data = {
            "environment": "development" if env == "development" else "production",   # Cualquier otro valor → producción.
            "sendgrid_api_key": _clean("SENDGRID_API_KEY"),
            "contact_form_email": _clean("CONTACT_FORM_EMAIL"),
            "dry_run": _flag("DRY_RUN"),
            "escape_html": _flag("CONTACT_ESCAPE_HTML"),
            "alert_webhook_url": _clean("ALERT_WEBHOOK_URL"),
        }
        optional_texts = {                                                             # Campos de texto con default propio.
            "public_site_url": "PUBLIC_SITE_URL",
            "email_from": "EMAIL_FROM",
            "email_sender_name": "EMAIL_SENDER_NAME",
            "dev_email_from": "DEV_EMAIL_FROM",
            "dev_email_sender_name": "DEV_EMAIL_SENDER_NAME",
            "dev_email_to": "DEV_EMAIL_TO",
            "site_name": "SITE_NAME",
            "owner_name": "OWNER_NAME",
        }
        for field, var in optional_texts.items():                                      # Solo sobrescribe si hay valor.
            value = _clean(var)
            if value:
                data[field] = value
        return cls(**data)                                                             # Devuelve la configuración congelada.
