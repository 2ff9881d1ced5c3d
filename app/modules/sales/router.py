# app/modules/sales/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_principal
from app.core.auth.principal import Principal
from .service import SalesService
from .schemas import (
    SaleCreateRequest, SaleResponse, SaleHistoryResponse, RevenueSummaryResponse
)

router = APIRouter()

@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreateRequest,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """
    Registrar venta con múltiples items

    **Incluye:**
    - Cabecera con cliente, operador y total
    - Un item por servicio prestado, con su valor cobrado
    - Todo en una sola transacción: o se guarda todo o nada
    """
    service = SalesService(db)
    return service.record_sale(sale_data, principal)

@router.get("/history", response_model=SaleHistoryResponse)
def get_sales_history(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """
    Historial de ventas, más recientes primero

    Administradores ven todas las ventas; colaboradores solo las propias.
    """
    service = SalesService(db)
    return service.list_history(principal)

@router.get("/summary", response_model=RevenueSummaryResponse)
def get_revenue_summary(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """Facturación de hoy y del mes actual, con el mismo filtro por rol del historial"""
    service = SalesService(db)
    return service.summarize(principal)
