# app/modules/service_types/__init__.py
"""
Módulo de Tipos de Servicio - Catálogo

Catálogo de servicios con su precio por defecto. Cada item de venta
referencia un tipo de servicio y puede cobrar un valor distinto al precio
por defecto.

Arquitectura:
- router.py: Endpoints del catálogo
- service.py: Lógica de negocio del catálogo
- repository.py: Acceso a datos del catálogo
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ServiceTypesService
from .repository import ServiceTypesRepository

__all__ = [
    "router",
    "ServiceTypesService",
    "ServiceTypesRepository"
]
