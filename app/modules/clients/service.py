# app/modules/clients/service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from .repository import ClientsRepository
from .schemas import ClientCreateRequest, ClientInfo, ClientResponse, ClientListResponse
from app.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

class ClientsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ClientsRepository(db)

    def create_client(self, client_data: ClientCreateRequest) -> ClientResponse:
        """Registrar cliente"""
        try:
            client = self.repository.create_client(client_data.name, client_data.phone)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error al adicionar cliente")
            raise PersistenceError("Error al adicionar cliente") from e

        logger.info(f"Cliente {client.id} registrado")
        return ClientResponse(
            success=True,
            message="Cliente registrado exitosamente",
            client=ClientInfo.model_validate(client)
        )

    def list_clients(self) -> ClientListResponse:
        try:
            clients = self.repository.list_clients()
        except SQLAlchemyError as e:
            logger.exception("Error al buscar clientes")
            raise PersistenceError("Error al buscar clientes") from e

        return ClientListResponse(
            success=True,
            message=f"{len(clients)} clientes",
            clients=[ClientInfo.model_validate(client) for client in clients],
            count=len(clients)
        )
