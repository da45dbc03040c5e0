# contact_api/schemas.py  # Ruta y nombre del archivo de esquemas (Pydantic).                 # Indica dónde va este archivo en el proyecto.

# =================================================================================
# 📦 Schemas (MODELOS DE DATOS Pydantic)
# ---------------------------------------------------------------------------------
# - EmailDispatchRequest: payload que envía el widget ({email, message}).
# - EmailDispatchResult: respuesta JSON del endpoint (claves ausentes se omiten).
# - OutgoingEmail / ProviderError / SendResult: contrato con el proveedor.
# Ninguno se persiste: viven lo que dura una request.
# =================================================================================

from typing import Optional                                                                   # Tipos opcionales.

from pydantic import BaseModel, ConfigDict, StrictStr                                         # Modelos y str estricto (sin coerción).


# =================================================================================
# 📨 Payload de entrada
# =================================================================================
class EmailDispatchRequest(BaseModel):                                                        # Payload del formulario de contacto.
    email: StrictStr                                                                          # Email del remitente (sin validar formato).
    message: StrictStr                                                                        # Mensaje libre.

    model_config = ConfigDict(extra="ignore")                                                 # Campos extra del cliente se ignoran.


# =================================================================================
# 📤 Respuesta del endpoint
# =================================================================================
class EmailDispatchResult(BaseModel):                                                         # Cuerpo JSON devuelto al widget.
    success: Optional[bool] = None                                                            # Ausente en 400/405.
    message: str                                                                              # Texto corto del resultado.
    id: Optional[str] = None                                                                  # Id del proveedor (solo en éxito).
    error: Optional[str] = None                                                               # Detalle del error (500).
    details: Optional[str] = None                                                             # Diagnóstico de configuración (500).

    def to_body(self) -> dict:                                                                # Serializa omitiendo claves vacías.
        return self.model_dump(exclude_none=True)


# =================================================================================
# ✉️ Contrato con el proveedor
# =================================================================================
class OutgoingEmail(BaseModel):                                                               # Mensaje ya compuesto.
    sender_email: str                                                                         # Dirección del remitente.
    sender_name: str                                                                          # Nombre visible del remitente.
    to: str                                                                                   # Destinatario final.
    reply_to: str                                                                             # Responder-a (email del usuario).
    subject: str                                                                              # Asunto.
    html: str                                                                                 # Cuerpo HTML.

    @property
    def from_address(self) -> str:                                                            # Forma "Nombre <email>".
        return f"{self.sender_name} <{self.sender_email}>"


class ProviderError(BaseModel):                                                               # Error estructurado del proveedor.
    name: str
    message: str


class SendResult(BaseModel):                                                                  # Resultado del envío: id o error.
    id: Optional[str] = None
    error: Optional[ProviderError] = None
