# app/modules/clients/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_principal
from .service import ClientsService
from .schemas import ClientCreateRequest, ClientResponse, ClientListResponse

router = APIRouter()

@router.get("", response_model=ClientListResponse)
def list_clients(
    _principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """Listar clientes ordenados por nombre"""
    service = ClientsService(db)
    return service.list_clients()

@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreateRequest,
    _principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """
    Registrar cliente

    **Campos:**
    - name: obligatorio
    - phone: opcional
    """
    service = ClientsService(db)
    return service.create_client(client_data)
