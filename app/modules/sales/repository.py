# app/modules/sales/repository.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Any, List, Optional, Sequence
from datetime import datetime
import logging

from app.core.exceptions import PersistenceError
from app.shared.database.models import Client, Sale, SaleLineItem, ServiceType, User

logger = logging.getLogger(__name__)

class SalesRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_sale_atomic(self, command, operator_id: Optional[int]) -> Sale:
        """
        Crear venta e items en una única transacción.

        Proceso:
        1. Crear Sale y obtener su id (flush)
        2. Crear SaleLineItems en el orden recibido
        3. Commit único

        Cualquier fallo hace rollback completo: nunca queda una cabecera
        sin items ni items sin cabecera.

        Raises:
            PersistenceError: si la base de datos rechaza cualquier inserción
        """
        try:
            sale = Sale(
                client_id=command.client_id,
                operator_id=operator_id,
                total_amount=command.total_amount
            )

            self.db.add(sale)
            self.db.flush()  # Obtener sale.id

            line_items = [
                SaleLineItem(
                    sale_id=sale.id,
                    service_type_id=line.service_type_id,
                    charged_amount=line.charged_amount
                )
                for line in command.items
            ]
            self.db.add_all(line_items)
            self.db.flush()
            logger.info(f"Venta {sale.id}: {len(line_items)} items agregados")

            self.db.commit()
            self.db.refresh(sale)

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error en transacción de venta")
            raise PersistenceError("Error al registrar la venta") from e
        except BaseException:
            # Cancelación o error inesperado: nada queda confirmado
            self.db.rollback()
            raise

        logger.info(f"Transacción completada - Venta #{sale.id}")
        return sale

    def get_sale_headers(self, operator_id: Optional[int]) -> List[Any]:
        """
        Cabeceras visibles, más recientes primero.

        operator_id=None devuelve todas las ventas. El filtro se aplica aquí,
        antes de cargar los items.
        """
        query = (
            self.db.query(
                Sale.id,
                Sale.total_amount,
                Sale.created_at,
                Client.name.label("client_name"),
                User.name.label("operator_name")
            )
            .join(Client, Sale.client_id == Client.id)
            .outerjoin(User, Sale.operator_id == User.id)
        )

        if operator_id is not None:
            query = query.filter(Sale.operator_id == operator_id)

        return query.order_by(Sale.created_at.desc(), Sale.id.asc()).all()

    def get_items_for_sales(self, sale_ids: Sequence[int]) -> List[Any]:
        """Items de varias ventas en una sola consulta, en orden de inserción"""
        if not sale_ids:
            return []

        return (
            self.db.query(
                SaleLineItem.id,
                SaleLineItem.sale_id,
                SaleLineItem.charged_amount,
                ServiceType.name.label("service_type_name")
            )
            .join(ServiceType, SaleLineItem.service_type_id == ServiceType.id)
            .filter(SaleLineItem.sale_id.in_(list(sale_ids)))
            .order_by(SaleLineItem.sale_id, SaleLineItem.id)
            .all()
        )

    def get_sales_between(self, start: datetime, end: datetime, operator_id: Optional[int]) -> List[Any]:
        """Fecha y monto de las ventas con created_at en [start, end)"""
        query = self.db.query(Sale.created_at, Sale.total_amount).filter(
            Sale.created_at >= start,
            Sale.created_at < end
        )

        if operator_id is not None:
            query = query.filter(Sale.operator_id == operator_id)

        return query.all()
