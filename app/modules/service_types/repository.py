# app/modules/service_types/repository.py
from sqlalchemy.orm import Session
from typing import List
from decimal import Decimal

from app.shared.database.models import ServiceType

class ServiceTypesRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_service_type(self, name: str, default_price: Decimal) -> ServiceType:
        """Crear tipo de servicio"""
        service_type = ServiceType(name=name, default_price=default_price)

        self.db.add(service_type)
        self.db.commit()
        self.db.refresh(service_type)
        return service_type

    def list_service_types(self) -> List[ServiceType]:
        return self.db.query(ServiceType).order_by(ServiceType.name, ServiceType.id).all()
