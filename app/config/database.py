# app/config/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from .settings import settings

logger = logging.getLogger(__name__)

_url = make_url(settings.database_url_with_ssl)
_is_sqlite = _url.drivername.startswith("sqlite")

# Configuración del engine
engine_kwargs = {
    "echo": settings.debug
}

if _is_sqlite:
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    # Una sola conexión compartida para que el esquema en memoria persista
    if _url.database in (None, "", ":memory:"):
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs["pool_pre_ping"] = True
    engine_kwargs["pool_recycle"] = 300
    # SSL para PostgreSQL remoto en Render
    if "render" in settings.database_url:
        engine_kwargs["connect_args"] = {
            "sslmode": "require"
        }

# Create engine
engine = create_engine(
    settings.database_url_with_ssl,
    **engine_kwargs
)

if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        """SQLite ignora las FK si no se activan por conexión"""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """Crear tablas que todavía no existen"""
    # Registrar los modelos en Base.metadata
    from app.shared.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Tablas verificadas: %s", ", ".join(sorted(Base.metadata.tables)))
