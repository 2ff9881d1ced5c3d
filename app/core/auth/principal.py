# app/core/auth/principal.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Role(str, Enum):
    ADMIN = "admin"
    COLLABORATOR = "collaborator"


@dataclass(frozen=True)
class UnscopedPrincipal:
    """Identidad implícita cuando la autenticación está desactivada (equivale a admin)"""

    @property
    def operator_id(self) -> Optional[int]:
        return None

    @property
    def operator_scope(self) -> Optional[int]:
        return None


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    id: int
    role: Role
    name: str = ""

    @property
    def operator_id(self) -> Optional[int]:
        return self.id

    @property
    def operator_scope(self) -> Optional[int]:
        """None = sin filtro; en otro caso solo las ventas de ese operador"""
        if self.role == Role.ADMIN:
            return None
        return self.id


Principal = Union[UnscopedPrincipal, AuthenticatedPrincipal]
