# coop_api/database/database.py

from coop_api.core import settings
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
import redis
from coop_api.core import logger

# --- Configuración de la base relacional ---
Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    # SQLite (tests / desarrollo local) no acepta los parámetros del pool de servidor
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    kwargs = dict(
        pool_size=8,
        max_overflow=4,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=1800,      # Reutilizar conexiones
        pool_pre_ping=True,     # Verifica que la conexión esté viva antes de usarla
        pool_use_lifo=True,
    )
    if url.startswith("postgresql"):
        # Ninguna consulta puede bloquear la petición indefinidamente
        kwargs["connect_args"] = {
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
        }
    return kwargs


engine = create_engine(
    settings.URL_DATABASE_SQL,
    echo=False,
    **_engine_kwargs(settings.URL_DATABASE_SQL)
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# --- Configuración de Redis (opcional, solo caché) ---
redis_client = None
if settings.URL_DATABASE_REDIS:
    try:
        redis_client = redis.from_url(
            settings.URL_DATABASE_REDIS,
            decode_responses=True,
            socket_timeout=2,
            socket_connect_timeout=2,
        )
        redis_client.ping()
        logger.info("Conexión con Redis establecida exitosamente.")
    except redis.exceptions.ConnectionError as e:
        logger.error(f"Error al conectar con Redis: {e}")
        redis_client = None
else:
    logger.info("URL_DATABASE_REDIS no configurada; caché deshabilitada.")

# --- Dependencia para inyectar Redis ---
# A diferencia de la base relacional, Redis es prescindible: sin él se consulta directo a la BD
def get_redis_client():
    yield redis_client
