from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, HTMLResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from coop_api.core import logger
from coop_api.core.logger import log_critical_error
from coop_api.core.discord_logger import send_discord_alert
from coop_api.core.errors import CoopAPIError
from coop_api.database import Base, engine
from coop_api.routers import api_router


# --- Configuración de FastAPI ---
api_description = """
API del backend de Coop para el emparejamiento de relays (cámaras del gallinero).

## Flujo de emparejamiento

1. El relay pide un código: `POST /api/relay/request_pairing_code`.
2. El usuario, autenticado en la app, lo reclama: `POST /api/relay/claim`.
3. El relay sondea `GET /api/relay/pairing?code=...` hasta ver `claimed`.
4. El relay obtiene su configuración: `GET /api/relay/config?relay_id=...`.
"""

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- CÓDIGO DE ARRANQUE (Startup) ---
    logger.info("🚀 Iniciando Coop API...")
    Base.metadata.create_all(bind=engine)
    send_discord_alert("Coop API iniciada correctamente.", level="INFO")

    yield

    # --- CÓDIGO DE CIERRE (Shutdown) ---
    logger.info("🛑 Deteniendo servicios...")
    engine.dispose()


app = FastAPI(
    title="Coop API",
    description=api_description,
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan
)


# --- Middleware CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Routers ---
app.include_router(api_router)

# --- Documentación Scalar ---
@app.get("/docs", response_class=HTMLResponse, tags=["Documentation"])
async def get_scalar_docs():
    return """
    <!doctype html>
    <html>
      <head>
        <title>Coop API - Scalar</title>
        <meta charset="utf-8" />
        <meta name="viewport" content="width=device-width, initial-scale=1" />
        <style>body { margin: 0; }</style>
      </head>
      <body>
        <script id="api-reference" data-url="/openapi.json"></script>
        <script src="https://cdn.jsdelivr.net/npm/@scalar/api-reference"></script>
      </body>
    </html>
    """


@app.get("/", tags=["Root"])
def read_root():
    return {"message": "Bienvenido a la API de Coop"}


@app.get("/health", tags=["Root"])
def health_check():
    return {"status": "ok"}


# --- Manejo de errores de dominio ---
@app.exception_handler(CoopAPIError)
async def coop_api_error_handler(request: Request, exc: CoopAPIError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


# --- Manejo global de errores ---
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    message = f"Error 500 en {request.url.path}: {exc}"
    log_critical_error(message)
    return JSONResponse(
        status_code=500,
        content={"detail": "Error interno del servidor."}
    )
