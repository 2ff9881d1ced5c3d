# app/modules/sales/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from app.shared.schemas.common import BaseResponse

class SaleItemRequest(BaseModel):
    service_type_id: Optional[int] = Field(None, description="Tipo de servicio prestado")
    charged_amount: Optional[Decimal] = Field(None, description="Valor cobrado (puede diferir del precio por defecto)")

class SaleCreateRequest(BaseModel):
    # Campos opcionales a nivel de schema: la presencia se valida en SalesService
    client_id: Optional[int] = Field(None, description="Cliente de la venta")
    total_amount: Optional[Decimal] = Field(None, description="Monto total informado por el caller")
    items: Optional[List[SaleItemRequest]] = Field(None, description="Items de la venta")

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 1,
                "total_amount": "80.00",
                "items": [
                    {"service_type_id": 1, "charged_amount": "50.00"},
                    {"service_type_id": 2, "charged_amount": "30.00"}
                ]
            }
        }

class SaleResponse(BaseResponse):
    sale_id: int
    total_amount: Decimal
    items_count: int
    created_at: datetime

class SaleLineView(BaseModel):
    id: int
    charged_amount: Decimal
    service_type_name: str

class SaleView(BaseModel):
    id: int
    total_amount: Decimal
    created_at: datetime
    client_name: str
    operator_name: Optional[str] = None
    items: List[SaleLineView]

class SaleHistoryResponse(BaseResponse):
    sales: List[SaleView]
    count: int

class RevenueSummaryResponse(BaseResponse):
    date: str
    month: str
    revenue_today: Decimal
    revenue_month: Decimal
    sales_today: int
    sales_month: int
