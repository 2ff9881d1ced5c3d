from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.config.settings import settings
from app.core.exceptions import AuthorizationError, ForbiddenError
from app.shared.database.models import User
from app.core.auth.service import AuthService
from app.core.auth.principal import (
    AuthenticatedPrincipal, Principal, Role, UnscopedPrincipal
)

# auto_error=False: la ausencia de token se reporta como AuthorizationError
security = HTTPBearer(auto_error=False)

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Obtener usuario actual desde el token"""

    if credentials is None:
        raise AuthorizationError("Token de acceso requerido")

    # Verificar token
    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        raise AuthorizationError("Token inválido o expirado")

    # Obtener user_id del payload
    user_id = payload.get("user_id")
    if user_id is None:
        raise AuthorizationError("Payload del token inválido")

    user = db.query(User).filter(User.id == user_id).first()

    if user is None:
        raise AuthorizationError("Usuario no encontrado")

    if not user.is_active:
        raise AuthorizationError("Usuario inactivo")

    return user

def get_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Principal:
    """Principal de la petición; sin autenticación todo es visible"""
    if not settings.auth_enabled:
        return UnscopedPrincipal()

    user = get_current_user(credentials, db)
    return AuthenticatedPrincipal(id=user.id, role=Role(user.role), name=user.name)

def require_roles(allowed_roles: List[Role]):
    """Factory para crear dependency que requiere roles específicos"""
    def role_checker(principal: Principal = Depends(get_principal)) -> Principal:
        if isinstance(principal, UnscopedPrincipal):
            return principal
        if principal.role not in allowed_roles:
            raise ForbiddenError(
                f"Rol '{principal.role.value}' no autorizado. "
                f"Roles permitidos: {[role.value for role in allowed_roles]}"
            )
        return principal
    return role_checker

def get_admin_principal(principal: Principal = Depends(require_roles([Role.ADMIN]))) -> Principal:
    """Dependency para administradores"""
    return principal
