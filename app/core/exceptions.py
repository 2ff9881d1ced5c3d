# app/core/exceptions.py
"""
Errores de dominio de la aplicación.

Cada error lleva su código HTTP y un ``error_code`` legible por máquina.
El handler registrado en ``app.main`` los convierte en ``ErrorResponse``
sin exponer detalles internos de la base de datos.
"""
from typing import Any, Dict, Optional
from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Campo obligatorio ausente o inválido; se detecta antes de escribir"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = "validation_error"


class AuthorizationError(AppError):
    """Credencial ausente, inválida o expirada"""
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "authorization_error"
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "No se pudieron validar las credenciales", details=None):
        super().__init__(message, details)


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "forbidden"

    def __init__(self, message: str = "Permisos insuficientes", details=None):
        super().__init__(message, details)


class PersistenceError(AppError):
    """Fallo del almacenamiento: conexión, restricción o transacción abortada"""
    error_code = "persistence_error"
