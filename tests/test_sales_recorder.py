"""
Registro de ventas: validación previa, atomicidad cabecera + items y
traducción de errores de base de datos.
"""

import logging
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import PersistenceError, ValidationError
from app.modules.sales.schemas import SaleCreateRequest
from app.modules.sales.service import SalesService, build_sale_command
from app.shared.database.models import Sale, SaleLineItem


def _count_rows(db_session):
    return db_session.query(Sale).count(), db_session.query(SaleLineItem).count()


def _request(client_id, total, items):
    return SaleCreateRequest(
        client_id=client_id,
        total_amount=total,
        items=[{"service_type_id": st, "charged_amount": amount} for st, amount in items],
    )


@pytest.mark.unit
class TestRecordSale:

    def test_creates_header_and_all_items(self, db_session, catalog, collaborator, principal_for):
        service = SalesService(db_session)
        request = _request(catalog.maria.id, "80.00", [
            (catalog.corte.id, "50.00"),
            (catalog.barba.id, "30.00"),
        ])

        response = service.record_sale(request, principal_for(collaborator))

        assert response.success is True
        assert response.items_count == 2
        sale = db_session.get(Sale, response.sale_id)
        assert sale.client_id == catalog.maria.id
        assert sale.operator_id == collaborator.id
        assert sale.total_amount == Decimal("80.00")
        assert sale.created_at is not None
        assert [item.service_type_id for item in sale.items] == [catalog.corte.id, catalog.barba.id]
        assert _count_rows(db_session) == (1, 2)

    def test_line_items_keep_input_order(self, db_session, catalog, admin_user, principal_for):
        service = SalesService(db_session)
        items = [
            (catalog.barba.id, "25.00"),
            (catalog.corte.id, "45.00"),
            (catalog.barba.id, "30.00"),
        ]

        response = service.record_sale(_request(catalog.pedro.id, "100.00", items), principal_for(admin_user))

        stored = (
            db_session.query(SaleLineItem)
            .filter(SaleLineItem.sale_id == response.sale_id)
            .order_by(SaleLineItem.id)
            .all()
        )
        assert [(row.service_type_id, row.charged_amount) for row in stored] == [
            (st, Decimal(amount)) for st, amount in items
        ]

    def test_charged_amount_may_differ_from_default_price(self, db_session, catalog, unscoped):
        service = SalesService(db_session)

        response = service.record_sale(
            _request(catalog.maria.id, "40.00", [(catalog.corte.id, "40.00")]), unscoped
        )

        item = db_session.query(SaleLineItem).filter_by(sale_id=response.sale_id).one()
        assert item.charged_amount == Decimal("40.00")
        assert catalog.corte.default_price == Decimal("50.00")

    def test_unscoped_principal_records_without_operator(self, db_session, catalog, unscoped):
        response = SalesService(db_session).record_sale(
            _request(catalog.maria.id, "50.00", [(catalog.corte.id, "50.00")]), unscoped
        )

        assert db_session.get(Sale, response.sale_id).operator_id is None

    def test_total_is_not_checked_against_items(self, db_session, catalog, unscoped, caplog):
        service = SalesService(db_session)

        with caplog.at_level(logging.WARNING, logger="app.modules.sales.service"):
            response = service.record_sale(
                _request(catalog.maria.id, "70.00", [
                    (catalog.corte.id, "50.00"),
                    (catalog.barba.id, "30.00"),
                ]),
                unscoped,
            )

        assert db_session.get(Sale, response.sale_id).total_amount == Decimal("70.00")
        assert "difiere de la suma de items" in caplog.text


@pytest.mark.unit
class TestRecordSaleValidation:

    @pytest.mark.parametrize("payload, field", [
        ({"total_amount": "10.00", "items": [{"service_type_id": 1, "charged_amount": "10.00"}]}, "client_id"),
        ({"client_id": 1, "items": [{"service_type_id": 1, "charged_amount": "10.00"}]}, "total_amount"),
        ({"client_id": 1, "total_amount": "0", "items": [{"service_type_id": 1, "charged_amount": "10.00"}]}, "total_amount"),
        ({"client_id": 1, "total_amount": "-5.00", "items": [{"service_type_id": 1, "charged_amount": "10.00"}]}, "total_amount"),
        ({"client_id": 1, "total_amount": "10.00"}, "items"),
        ({"client_id": 1, "total_amount": "10.00", "items": []}, "items"),
        ({"client_id": 1, "total_amount": "10.00", "items": [{"charged_amount": "10.00"}]}, "items[0]"),
        ({"client_id": 1, "total_amount": "10.00", "items": [{"service_type_id": 1}]}, "items[0]"),
        ({"client_id": 1, "total_amount": "0.004", "items": [{"service_type_id": 1, "charged_amount": "10.00"}]}, "total_amount"),
        ({"client_id": 1, "total_amount": "10.001", "items": [{"service_type_id": 1, "charged_amount": "10.00"}]}, "total_amount"),
        ({"client_id": 1, "total_amount": "100000000.00", "items": [{"service_type_id": 1, "charged_amount": "10.00"}]}, "total_amount"),
        ({"client_id": 1, "total_amount": "20.00", "items": [
            {"service_type_id": 1, "charged_amount": "10.00"},
            {"service_type_id": 1, "charged_amount": "10.005"},
        ]}, "items[1]"),
        ({"client_id": 1, "total_amount": "10.00", "items": [{"service_type_id": 1, "charged_amount": "1E+9"}]}, "items[0]"),
    ])
    def test_invalid_input_raises_before_any_write(self, db_session, catalog, unscoped, payload, field):
        service = SalesService(db_session)

        with pytest.raises(ValidationError) as exc_info:
            service.record_sale(SaleCreateRequest(**payload), unscoped)

        assert exc_info.value.details == {"field": field}
        assert _count_rows(db_session) == (0, 0)

    def test_build_command_accepts_numeric_strings(self):
        command = build_sale_command(SaleCreateRequest(
            client_id=3,
            total_amount="19.90",
            items=[{"service_type_id": 7, "charged_amount": "19.90"}],
        ))

        assert command.total_amount == Decimal("19.90")
        assert command.items[0].service_type_id == 7
        assert command.items[0].charged_amount == Decimal("19.90")

    @pytest.mark.parametrize("amount", ["0.01", "12", "12.5", "12.500", "99999999.99"])
    def test_amounts_that_fit_the_column_are_accepted(self, amount):
        command = build_sale_command(SaleCreateRequest(
            client_id=3,
            total_amount=amount,
            items=[{"service_type_id": 7, "charged_amount": amount}],
        ))

        assert command.total_amount == Decimal(amount)
        assert command.items[0].charged_amount == Decimal(amount)

    def test_sub_cent_total_is_rejected_by_the_api(self, api_client, db_session, catalog, collaborator,
                                                   auth_headers):
        response = api_client.post(
            "/api/v1/sales",
            json={
                "client_id": catalog.maria.id,
                "total_amount": "0.004",
                "items": [{"service_type_id": catalog.corte.id, "charged_amount": "10.005"}],
            },
            headers=auth_headers(collaborator),
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "validation_error"
        assert body["details"] == {"field": "total_amount"}
        assert _count_rows(db_session) == (0, 0)


@pytest.mark.unit
class TestRecordSaleAtomicity:

    @pytest.mark.parametrize("n_items, failing_index", [
        (1, 0),
        (2, 0),
        (2, 1),
        (4, 2),
        (5, 4),
    ])
    def test_failing_item_leaves_no_rows(self, db_session, catalog, collaborator, principal_for,
                                         n_items, failing_index):
        items = [(catalog.corte.id, "10.00") for _ in range(n_items)]
        items[failing_index] = (999999, "10.00")  # tipo de servicio inexistente
        service = SalesService(db_session)

        with pytest.raises(PersistenceError):
            service.record_sale(
                _request(catalog.maria.id, str(10 * n_items), items), principal_for(collaborator)
            )

        assert _count_rows(db_session) == (0, 0)

    def test_unknown_client_leaves_no_rows(self, db_session, catalog, unscoped):
        with pytest.raises(PersistenceError):
            SalesService(db_session).record_sale(
                _request(424242, "50.00", [(catalog.corte.id, "50.00")]), unscoped
            )

        assert _count_rows(db_session) == (0, 0)

    def test_store_failure_during_items_rolls_back_header(self, db_session, catalog, unscoped, monkeypatch):
        def lost_connection(*args, **kwargs):
            raise OperationalError("INSERT INTO sale_line_items", {}, Exception("server closed the connection"))

        monkeypatch.setattr(db_session, "add_all", lost_connection)

        with pytest.raises(PersistenceError) as exc_info:
            SalesService(db_session).record_sale(
                _request(catalog.maria.id, "50.00", [(catalog.corte.id, "50.00")]), unscoped
            )

        monkeypatch.undo()
        assert "server closed" not in exc_info.value.message
        assert _count_rows(db_session) == (0, 0)

    def test_unexpected_error_rolls_back_and_propagates(self, db_session, catalog, unscoped, monkeypatch):
        def interrupted(*args, **kwargs):
            raise RuntimeError("cancelled")

        monkeypatch.setattr(db_session, "add_all", interrupted)

        with pytest.raises(RuntimeError):
            SalesService(db_session).record_sale(
                _request(catalog.maria.id, "50.00", [(catalog.corte.id, "50.00")]), unscoped
            )

        monkeypatch.undo()
        assert _count_rows(db_session) == (0, 0)

    def test_previous_sales_survive_a_failed_one(self, db_session, catalog, unscoped):
        service = SalesService(db_session)
        service.record_sale(_request(catalog.maria.id, "50.00", [(catalog.corte.id, "50.00")]), unscoped)

        with pytest.raises(PersistenceError):
            service.record_sale(
                _request(catalog.maria.id, "60.00", [(catalog.corte.id, "30.00"), (999999, "30.00")]),
                unscoped,
            )

        assert _count_rows(db_session) == (1, 1)


@pytest.mark.integration
class TestRecordSaleEndpoint:

    def test_post_sale_returns_201_with_id(self, api_client, db_session, catalog, collaborator, auth_headers):
        response = api_client.post(
            "/api/v1/sales",
            json={
                "client_id": catalog.maria.id,
                "total_amount": "80.00",
                "items": [
                    {"service_type_id": catalog.corte.id, "charged_amount": "50.00"},
                    {"service_type_id": catalog.barba.id, "charged_amount": "30.00"},
                ],
            },
            headers=auth_headers(collaborator),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["items_count"] == 2
        assert db_session.get(Sale, body["sale_id"]).operator_id == collaborator.id

    def test_empty_items_is_a_validation_error(self, api_client, db_session, catalog, collaborator, auth_headers):
        response = api_client.post(
            "/api/v1/sales",
            json={"client_id": catalog.maria.id, "total_amount": "10.00", "items": []},
            headers=auth_headers(collaborator),
        )

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "validation_error"
        assert _count_rows(db_session) == (0, 0)

    def test_malformed_amount_is_a_validation_error(self, api_client, db_session, catalog, collaborator,
                                                    auth_headers):
        response = api_client.post(
            "/api/v1/sales",
            json={
                "client_id": catalog.maria.id,
                "total_amount": "not-a-number",
                "items": [{"service_type_id": catalog.corte.id, "charged_amount": "10.00"}],
            },
            headers=auth_headers(collaborator),
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "validation_error"
        assert _count_rows(db_session) == (0, 0)

    def test_store_error_is_opaque(self, api_client, db_session, catalog, collaborator, auth_headers):
        response = api_client.post(
            "/api/v1/sales",
            json={
                "client_id": 987654,
                "total_amount": "10.00",
                "items": [{"service_type_id": catalog.corte.id, "charged_amount": "10.00"}],
            },
            headers=auth_headers(collaborator),
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "persistence_error"
        assert "FOREIGN KEY" not in body["message"]
        assert _count_rows(db_session) == (0, 0)

    def test_requires_credentials(self, api_client, db_session, catalog):
        response = api_client.post(
            "/api/v1/sales",
            json={
                "client_id": catalog.maria.id,
                "total_amount": "10.00",
                "items": [{"service_type_id": catalog.corte.id, "charged_amount": "10.00"}],
            },
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "authorization_error"
        assert _count_rows(db_session) == (0, 0)
