# app/modules/clients/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional

from app.shared.database.models import Client

class ClientsRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_client(self, name: str, phone: Optional[str]) -> Client:
        """Crear nuevo cliente"""
        client = Client(name=name, phone=phone)

        self.db.add(client)
        self.db.commit()
        self.db.refresh(client)
        return client

    def list_clients(self) -> List[Client]:
        """Clientes ordenados por nombre"""
        return self.db.query(Client).order_by(Client.name, Client.id).all()
