# contact_api/routers/meta.py  # Router de salud para smoke tests y monitorización.

from fastapi import APIRouter, Request  # Importa el enrutador de FastAPI para definir rutas simples.
from typing import Dict, Union          # Tipado para claridad en la respuesta.

router = APIRouter(prefix="/api", tags=["meta"])  # Crea un router con prefijo /api.

@router.get("/health")
def get_health(request: Request) -> Dict[str, Union[str, bool]]:
    """
    Estado básico del servicio. 'email_service' es False si el proveedor no arrancó
    (credencial ausente o mal formada): el formulario respondería 500.
    """
    return {
        "status": "ok",
        "email_service": request.app.state.email_provider is not None,
        "environment": request.app.state.settings.environment,
    }
