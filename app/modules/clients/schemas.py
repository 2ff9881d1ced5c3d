from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from app.shared.schemas.common import BaseResponse

class ClientCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre del cliente")
    phone: Optional[str] = Field(None, max_length=50, description="Teléfono")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('El nombre es obligatorio')
        return v.strip()

    @field_validator('phone')
    @classmethod
    def normalize_phone(cls, v):
        if v is None:
            return None
        return v.strip() or None

class ClientInfo(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True

class ClientResponse(BaseResponse):
    client: ClientInfo

class ClientListResponse(BaseResponse):
    clients: List[ClientInfo]
    count: int
