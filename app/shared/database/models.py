# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime,
    Numeric, ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship

from app.config.database import Base
from app.core.timezone import now_local


# =====================================================
# OPERADORES
# =====================================================

class User(Base):
    """Modelo de Operador (admin o colaborador)"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), default='collaborator', nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'collaborator')", name='users_role_check'),
    )

    # Relationships
    sales = relationship("Sale", back_populates="operator")


# =====================================================
# CATÁLOGO
# =====================================================

class Client(Base):
    """Modelo de Cliente"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50))

    # Relationships
    sales = relationship("Sale", back_populates="client")


class ServiceType(Base):
    """Modelo de Tipo de Servicio"""
    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    default_price = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        CheckConstraint('default_price > 0', name='service_types_default_price_check'),
    )


# =====================================================
# VENTAS (solo inserción, nunca se actualizan ni borran)
# =====================================================

class Sale(Base):
    """Modelo de Venta (cabecera)"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    # NULL solo para ventas registradas con autenticación desactivada
    operator_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_local, index=True)

    __table_args__ = (
        CheckConstraint('total_amount > 0', name='sales_total_amount_check'),
    )

    # Relationships
    client = relationship("Client", back_populates="sales")
    operator = relationship("User", back_populates="sales")
    items = relationship("SaleLineItem", back_populates="sale", order_by="SaleLineItem.id")


class SaleLineItem(Base):
    """Modelo de Item de Venta"""
    __tablename__ = "sale_line_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=False)
    charged_amount = Column(Numeric(10, 2), nullable=False)

    # Relationships
    sale = relationship("Sale", back_populates="items")
    service_type = relationship("ServiceType")
