# contact_api/main.py                                                                             # Ruta y nombre del archivo principal de la API.

# =================================================================================             # Separador visual de sección.
# 🧠 NÚCLEO DE LA APLICACIÓN API (FastAPI)                                                      # Título de la sección principal.
# ---------------------------------------------------------------------------------             # Separador de sección.
# - Carga .env una sola vez                                                                     # Lista responsabilidades del módulo.
# - Expone `app` para `uvicorn contact_api.main:app`                                            # Continua la lista.
# La construcción vive en contact_api.factory (importable sin efectos).                         # Los tests importan la fábrica.
# =================================================================================             # Fin del encabezado.

from pathlib import Path                                                                        # Importa Path para manipular rutas de archivos.

from dotenv import load_dotenv                                                                  # Importa load_dotenv para cargar variables desde .env.

from contact_api.factory import create_app                                                      # Fábrica de la app.

env_path = Path('.') / '.env'                                                                   # Construye la ruta al archivo .env en el directorio actual.
load_dotenv(dotenv_path=env_path)                                                               # Carga las variables de entorno desde el archivo .env.

app = create_app()                                                                              # App por defecto para `uvicorn contact_api.main:app`.
