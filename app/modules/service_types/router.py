# app/modules/service_types/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_principal
from .service import ServiceTypesService
from .schemas import ServiceTypeCreateRequest, ServiceTypeResponse, ServiceTypeListResponse

router = APIRouter()

@router.get("", response_model=ServiceTypeListResponse)
def list_service_types(
    _principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """Listar catálogo de servicios ordenado por nombre"""
    service = ServiceTypesService(db)
    return service.list_service_types()

@router.post("", response_model=ServiceTypeResponse, status_code=status.HTTP_201_CREATED)
def create_service_type(
    service_data: ServiceTypeCreateRequest,
    _principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """
    Registrar tipo de servicio

    **Campos:**
    - name: obligatorio
    - default_price: obligatorio, mayor que cero
    """
    service = ServiceTypesService(db)
    return service.create_service_type(service_data)
