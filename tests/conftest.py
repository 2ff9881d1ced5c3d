"""
Configuración central de pytest.

La base de datos es SQLite en memoria (StaticPool), creada y destruida en
cada test. Las variables de entorno se fijan antes de importar la app para
que el engine y los settings las usen.
"""

import os
from decimal import Decimal
from types import SimpleNamespace

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CREATE_TABLES"] = "false"
os.environ["AUTH_ENABLED"] = "true"
os.environ["TIMEZONE"] = "America/Sao_Paulo"

import pytest
from fastapi.testclient import TestClient

from app.config.database import Base, SessionLocal, engine
from app.core.auth.principal import AuthenticatedPrincipal, Role, UnscopedPrincipal
from app.core.auth.service import AuthService
from app.main import app
from app.shared.database.models import Client, Sale, SaleLineItem, ServiceType, User

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt es lento: un único hash para toda la sesión"""
    return AuthService.get_password_hash(TEST_PASSWORD)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api_client(db_session):
    return TestClient(app)


def _make_user(db_session, password_hash, name, email, role):
    user = User(name=name, email=email, password_hash=password_hash, role=role, is_active=True)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session, password_hash):
    return _make_user(db_session, password_hash, "Ana Admin", "admin@pdv.com", "admin")


@pytest.fixture
def collaborator(db_session, password_hash):
    return _make_user(db_session, password_hash, "Juan Colaborador", "juan@pdv.com", "collaborator")


@pytest.fixture
def other_collaborator(db_session, password_hash):
    return _make_user(db_session, password_hash, "Lucia Colaboradora", "lucia@pdv.com", "collaborator")


@pytest.fixture
def principal_for():
    def _principal(user):
        return AuthenticatedPrincipal(id=user.id, role=Role(user.role), name=user.name)
    return _principal


@pytest.fixture
def unscoped():
    return UnscopedPrincipal()


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = AuthService.create_access_token(
            {"user_id": user.id, "email": user.email, "role": user.role}
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def catalog(db_session):
    """Cliente y dos tipos de servicio"""
    maria = Client(name="Maria Souza", phone="11999990000")
    pedro = Client(name="Pedro Lima")
    corte = ServiceType(name="Corte", default_price=Decimal("50.00"))
    barba = ServiceType(name="Barba", default_price=Decimal("30.00"))
    db_session.add_all([maria, pedro, corte, barba])
    db_session.commit()
    return SimpleNamespace(maria=maria, pedro=pedro, corte=corte, barba=barba)


@pytest.fixture
def add_sale(db_session):
    """Insertar una venta con fecha explícita, sin pasar por el servicio"""
    def _add_sale(client, total, created_at, items, operator=None):
        sale = Sale(
            client_id=client.id,
            operator_id=operator.id if operator else None,
            total_amount=Decimal(total),
            created_at=created_at,
        )
        db_session.add(sale)
        db_session.flush()
        for service_type, amount in items:
            db_session.add(SaleLineItem(
                sale_id=sale.id,
                service_type_id=service_type.id,
                charged_amount=Decimal(amount),
            ))
        db_session.commit()
        return sale
    return _add_sale
