# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.modules.clients.router import router as clients_router
from app.modules.service_types.router import router as service_types_router
from app.modules.sales.router import router as sales_router
from app.config.settings import settings


# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(
    clients_router,
    prefix="/clients",
    tags=["Clients"]
)

api_router.include_router(
    service_types_router,
    prefix="/service-types",
    tags=["Service Types"]
)

api_router.include_router(
    sales_router,
    prefix="/sales",
    tags=["Sales"]
)

@api_router.get("/")
def api_root():
    """Root endpoint de la API"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "docs": "/docs",
        "auth_enabled": settings.auth_enabled,
        "available_endpoints": {
            "authentication": "/api/v1/auth",
            "clients": "/api/v1/clients",
            "service_types": "/api/v1/service-types",
            "sales": "/api/v1/sales",
            "history": "/api/v1/sales/history",
            "summary": "/api/v1/sales/summary"
        }
    }
