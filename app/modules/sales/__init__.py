# app/modules/sales/__init__.py
"""
Módulo de Ventas - Registro y Reportes

Este módulo maneja:
- Registro atómico de ventas (cabecera + items)
- Historial de ventas filtrado por rol
- Sumario de facturación del día y del mes

Las ventas son solo de inserción: no existen endpoints para editarlas
ni borrarlas.

Arquitectura:
- router.py: Endpoints de ventas
- service.py: Lógica de negocio de ventas
- repository.py: Acceso a datos de ventas
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]
