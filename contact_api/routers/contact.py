# contact_api/routers/contact.py  # Router del endpoint /api/send-email.                       # Comentario: indica la ubicación del módulo.

# =================================================================================
# ✉️ Router: Envío del formulario de contacto
# ---------------------------------------------------------------------------------
# - OPTIONS /api/send-email → preflight CORS (200, sin cuerpo).
# - POST    /api/send-email → valida y despacha el correo.
# - Cualquier otro método   → 405.
# CORS se resuelve aquí (eco del origen) porque el preflight debe responder 200
# con cuerpo vacío incluso sin cabecera Access-Control-Request-Method.
# =================================================================================

from json import JSONDecodeError                                         # Cuerpos que no son JSON válido.
from typing import Dict, Optional                                        # Tipado de cabeceras y proveedor.

from fastapi import APIRouter, Depends, Request, Response                # Router, dependencias y respuestas.
from fastapi.responses import JSONResponse                               # Respuestas JSON con status explícito.
from loguru import logger                                                # Logger del proyecto.

from contact_api.config import Settings                                  # Configuración inyectada.
from contact_api.dispatch import dispatch_contact_email, not_initialized # Núcleo de despacho.
from contact_api.mailer import EmailProvider                             # Tipo del proveedor.
from contact_api.schemas import EmailDispatchResult                      # Forma de la respuesta.

# 🧭 Configuración del router
# ---------------------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["contact"])                      # Prefijo común /api.

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]  # Se aceptan todos para poder responder 405 propio.


# 🛠️ Dependencias comunes
# ---------------------------------------------------------------------------------
def get_settings(request: Request) -> Settings:                          # Configuración resuelta al arrancar.
    return request.app.state.settings


def get_email_provider(request: Request) -> Optional[EmailProvider]:     # Proveedor (None si no arrancó).
    return request.app.state.email_provider


def cors_headers(origin: str, settings: Settings) -> Dict[str, str]:
    """Eco del origen si está permitido (o en desarrollo); si no, sin cabeceras CORS."""
    if settings.is_development or origin in settings.allowed_origins:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }
    return {}


def _json(status_code: int, result: EmailDispatchResult, headers: Dict[str, str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=result.to_body(), headers=headers)


# =================================================================================
# 📮 /api/send-email
# ---------------------------------------------------------------------------------
@router.api_route("/send-email", methods=ALL_METHODS)
async def send_email(
    request: Request,
    settings: Settings = Depends(get_settings),
    provider: Optional[EmailProvider] = Depends(get_email_provider),
):
    origin = request.headers.get("origin", "")                                         # Origen declarado por el navegador.
    headers = cors_headers(origin, settings)                                           # 1) CORS.
    logger.info("Solicitud de contacto: method={} origin={!r}", request.method, origin)

    if request.method == "OPTIONS":                                                    # Preflight: 200 sin cuerpo.
        return Response(status_code=200, headers=headers)

    if request.method != "POST":                                                       # Método no soportado.
        return _json(405, EmailDispatchResult(message="Method not allowed"), headers)

    if provider is None:                                                               # 2) Proveedor no inicializado.
        logger.error("Cliente del proveedor de email no inicializado")
        status_code, result = not_initialized()                                        # No se toca el cuerpo.
        return _json(status_code, result, headers)

    try:
        payload = await request.json()                                                 # Cuerpo JSON del widget.
    except (JSONDecodeError, UnicodeDecodeError):                                      # JSON inválido → payload vacío.
        logger.warning("Cuerpo de la solicitud no es JSON válido")
        payload = {}
    except Exception as e:                                                             # p. ej. RecursionError por anidamiento extremo.
        logger.warning("Cuerpo de la solicitud ilegible ({}): se trata como vacío", type(e).__name__)
        payload = {}

    status_code, result = dispatch_contact_email(payload, settings, provider)          # 3-6) Validación + envío.
    return _json(status_code, result, headers)
