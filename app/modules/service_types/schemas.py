from pydantic import BaseModel, Field, field_validator
from typing import List
from decimal import Decimal
from app.shared.schemas.common import BaseResponse

class ServiceTypeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre del servicio")
    default_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Precio por defecto")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('El nombre es obligatorio')
        return v.strip()

class ServiceTypeInfo(BaseModel):
    id: int
    name: str
    default_price: Decimal

    class Config:
        from_attributes = True

class ServiceTypeResponse(BaseResponse):
    service_type: ServiceTypeInfo

class ServiceTypeListResponse(BaseResponse):
    service_types: List[ServiceTypeInfo]
    count: int
