from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from app.core.auth.principal import Role

class UserLogin(BaseModel):
    """Schema para login de usuario"""
    email: str = Field(..., description="Email del operador")
    password: str = Field(..., min_length=6, description="Contraseña del operador")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "colaborador@pdv.com",
                "password": "colaborador123"
            }
        }

class UserResponse(BaseModel):
    """Schema para respuesta de usuario"""
    id: int
    name: str
    email: str
    role: Role
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class TokenResponse(BaseModel):
    """Schema para respuesta de token"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class UserCreateRequest(BaseModel):
    """Schema para crear operador (admin only)"""
    name: str = Field(..., min_length=2, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)
    role: Role = Role.COLLABORATOR

    @field_validator('name', 'email')
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError('El campo no puede estar vacío')
        return v.strip()

    class Config:
        json_schema_extra = {
            "example": {
                "name": "María García",
                "email": "maria@pdv.com",
                "password": "password123",
                "role": "collaborator"
            }
        }
