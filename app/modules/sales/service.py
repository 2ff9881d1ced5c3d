# app/modules/sales/service.py
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple
from dateutil.relativedelta import relativedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from .repository import SalesRepository
from .schemas import (
    SaleCreateRequest, SaleResponse, SaleView, SaleLineView,
    SaleHistoryResponse, RevenueSummaryResponse
)
from app.core.auth.principal import Principal
from app.core.exceptions import PersistenceError, ValidationError
from app.core.timezone import get_reference_tz, now_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaleLine:
    service_type_id: int
    charged_amount: Decimal


@dataclass(frozen=True)
class SaleCommand:
    """Venta ya validada, lista para persistir"""
    client_id: int
    total_amount: Decimal
    items: Tuple[SaleLine, ...]


# Límites de las columnas Numeric(10, 2)
AMOUNT_DECIMAL_PLACES = 2
AMOUNT_STEP = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def _fits_amount_column(amount: Decimal) -> bool:
    """True si el monto se guarda sin redondeo ni desbordamiento"""
    return abs(amount) <= MAX_AMOUNT and amount == amount.quantize(AMOUNT_STEP)


def build_sale_command(sale_data: SaleCreateRequest) -> SaleCommand:
    """
    Validar los datos de la venta antes de cualquier escritura.

    Raises:
        ValidationError: si falta client_id, total_amount no es un número
            positivo, items está vacío o algún item está incompleto
    """
    if sale_data.client_id is None:
        raise ValidationError("Datos incompletos para registrar la venta: falta client_id",
                              details={"field": "client_id"})

    total_amount = _to_decimal(sale_data.total_amount)
    if total_amount is None or total_amount <= 0:
        raise ValidationError("El total de la venta debe ser un número positivo",
                              details={"field": "total_amount"})
    if not _fits_amount_column(total_amount):
        raise ValidationError(
            f"El total de la venta admite hasta {AMOUNT_DECIMAL_PLACES} decimales y un máximo de {MAX_AMOUNT}",
            details={"field": "total_amount"}
        )

    if not sale_data.items:
        raise ValidationError("La venta debe tener al menos un item",
                              details={"field": "items"})

    lines = []
    for index, item in enumerate(sale_data.items):
        charged_amount = _to_decimal(item.charged_amount)
        if item.service_type_id is None or charged_amount is None:
            raise ValidationError(f"Item {index} incompleto: se requiere service_type_id y charged_amount",
                                  details={"field": f"items[{index}]"})
        if not _fits_amount_column(charged_amount):
            raise ValidationError(
                f"Item {index}: el valor cobrado admite hasta {AMOUNT_DECIMAL_PLACES} decimales "
                f"y un máximo de {MAX_AMOUNT}",
                details={"field": f"items[{index}]"}
            )
        lines.append(SaleLine(service_type_id=item.service_type_id, charged_amount=charged_amount))

    return SaleCommand(
        client_id=sale_data.client_id,
        total_amount=total_amount,
        items=tuple(lines)
    )


class SalesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = SalesRepository(db)

    def record_sale(self, sale_data: SaleCreateRequest, principal: Principal) -> SaleResponse:
        """
        Registrar venta con sus items (transacción atómica en repository).

        El total lo informa el caller y no se compara contra la suma de
        los items; una diferencia solo queda en el log.
        """
        command = build_sale_command(sale_data)

        items_total = sum((line.charged_amount for line in command.items), Decimal("0"))
        if items_total != command.total_amount:
            logger.warning(
                f"Total informado {command.total_amount} difiere de la suma de items {items_total} "
                f"(cliente {command.client_id})"
            )

        logger.info(f"Iniciando venta - Operador: {principal.operator_id}, Cliente: {command.client_id}")
        sale = self.repository.create_sale_atomic(command, operator_id=principal.operator_id)

        return SaleResponse(
            success=True,
            message="Venta registrada con éxito",
            sale_id=sale.id,
            total_amount=sale.total_amount,
            items_count=len(command.items),
            created_at=sale.created_at
        )

    def list_history(self, principal: Principal) -> SaleHistoryResponse:
        """Historial de ventas visible para el principal, más recientes primero"""
        try:
            headers = self.repository.get_sale_headers(principal.operator_scope)
            items = self.repository.get_items_for_sales([header.id for header in headers])
        except SQLAlchemyError as e:
            logger.exception("Error al buscar historial")
            raise PersistenceError("Error al buscar historial") from e

        items_by_sale: Dict[int, List[SaleLineView]] = {}
        for item in items:
            items_by_sale.setdefault(item.sale_id, []).append(
                SaleLineView(
                    id=item.id,
                    charged_amount=item.charged_amount,
                    service_type_name=item.service_type_name
                )
            )

        sales = [self._to_sale_view(header, items_by_sale.get(header.id, [])) for header in headers]

        return SaleHistoryResponse(
            success=True,
            message=f"{len(sales)} ventas",
            sales=sales,
            count=len(sales)
        )

    def summarize(self, principal: Principal, now: Optional[datetime] = None) -> RevenueSummaryResponse:
        """
        Facturación del día y del mes calendario actual.

        Los límites son intervalos semiabiertos en la zona de referencia:
        [hoy 00:00, mañana 00:00) y [día 1 00:00, día 1 del mes siguiente 00:00).
        """
        if now is None:
            now = now_local()
        elif now.tzinfo is not None:
            now = now.astimezone(get_reference_tz()).replace(tzinfo=None)

        today_start = datetime.combine(now.date(), time.min)
        tomorrow_start = today_start + timedelta(days=1)
        month_start = today_start.replace(day=1)
        next_month_start = month_start + relativedelta(months=1)

        try:
            month_sales = self.repository.get_sales_between(
                month_start, next_month_start, principal.operator_scope
            )
        except SQLAlchemyError as e:
            logger.exception("Error al buscar el sumario")
            raise PersistenceError("Error al buscar el sumario") from e

        today_sales = [
            sale for sale in month_sales
            if today_start <= sale.created_at < tomorrow_start
        ]

        revenue_month = sum((sale.total_amount for sale in month_sales), Decimal("0"))
        revenue_today = sum((sale.total_amount for sale in today_sales), Decimal("0"))

        return RevenueSummaryResponse(
            success=True,
            message=f"Sumario del {now.date().isoformat()}",
            date=now.date().isoformat(),
            month=month_start.strftime("%Y-%m"),
            revenue_today=revenue_today,
            revenue_month=revenue_month,
            sales_today=len(today_sales),
            sales_month=len(month_sales)
        )

    # MÉTODOS PRIVADOS HELPERS

    @staticmethod
    def _to_sale_view(header, items: List[SaleLineView]) -> SaleView:
        return SaleView(
            id=header.id,
            total_amount=header.total_amount,
            created_at=header.created_at,
            client_name=header.client_name,
            operator_name=header.operator_name,
            items=items
        )
