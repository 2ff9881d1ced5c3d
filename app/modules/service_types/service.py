# app/modules/service_types/service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from .repository import ServiceTypesRepository
from .schemas import (
    ServiceTypeCreateRequest, ServiceTypeInfo, ServiceTypeResponse, ServiceTypeListResponse
)
from app.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

class ServiceTypesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ServiceTypesRepository(db)

    def create_service_type(self, service_data: ServiceTypeCreateRequest) -> ServiceTypeResponse:
        """Registrar tipo de servicio en el catálogo"""
        try:
            service_type = self.repository.create_service_type(
                service_data.name, service_data.default_price
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error al adicionar tipo de servicio")
            raise PersistenceError("Error al adicionar tipo de servicio") from e

        logger.info(f"Tipo de servicio {service_type.id} registrado")
        return ServiceTypeResponse(
            success=True,
            message="Tipo de servicio registrado exitosamente",
            service_type=ServiceTypeInfo.model_validate(service_type)
        )

    def list_service_types(self) -> ServiceTypeListResponse:
        try:
            service_types = self.repository.list_service_types()
        except SQLAlchemyError as e:
            logger.exception("Error al buscar tipos de servicio")
            raise PersistenceError("Error al buscar tipos de servicio") from e

        return ServiceTypeListResponse(
            success=True,
            message=f"{len(service_types)} tipos de servicio",
            service_types=[ServiceTypeInfo.model_validate(st) for st in service_types],
            count=len(service_types)
        )
