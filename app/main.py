# app/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from app.config.settings import settings
from app.config.database import init_db
from app.core.middleware import setup_middleware, setup_exception_handlers
from app.api.v1.router import api_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.app_name} iniciando - versión {settings.version}")
    logger.info(f"Entorno: {'Development' if settings.debug else 'Production'}")
    logger.info(f"Autenticación: {'activada' if settings.auth_enabled else 'desactivada'}")
    logger.info(f"Zona horaria de referencia: {settings.timezone}")
    logger.info(f"Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")

    if settings.create_tables:
        init_db()

    yield

    # Shutdown
    logger.info(f"{settings.app_name} detenida")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Back office de punto de venta: clientes, servicios, ventas y facturación",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Root endpoint
@app.get("/")
def root():
    return {
        "message": f"{settings.app_name}",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }

@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
