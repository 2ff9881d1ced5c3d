# app/modules/clients/__init__.py
"""
Módulo de Clientes

Alta y consulta de clientes referenciados por las ventas.
Las ventas solo leen id y nombre; nunca modifican un cliente.

Arquitectura:
- router.py: Endpoints de clientes
- service.py: Lógica de negocio de clientes
- repository.py: Acceso a datos de clientes
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ClientsService
from .repository import ClientsRepository

__all__ = [
    "router",
    "ClientsService",
    "ClientsRepository"
]
