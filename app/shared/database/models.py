# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric, ForeignKey, Enum, func
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()

# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


USER_ROLES = ("admin", "user")
EXPENSE_STATUSES = ("pending", "approved", "rejected")


# =====================================================
# USUARIOS
# =====================================================

class User(Base, TimestampMixin):
    """Modelo de Usuario"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(*USER_ROLES, name="user_role"), nullable=False, default="user")

    # Relationships
    expenses = relationship(
        "Expense",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Expense.id"
    )


# =====================================================
# GASTOS
# =====================================================

class Expense(Base, TimestampMixin):
    """Modelo de Gasto"""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=False)
    status = Column(Enum(*EXPENSE_STATUSES, name="expense_status"), nullable=False, default="pending")

    # Relationships
    user = relationship("User", back_populates="expenses")
    receipts = relationship(
        "Receipt",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="Receipt.id"
    )


# =====================================================
# RECIBOS
# =====================================================

class Receipt(Base, TimestampMixin):
    """Modelo de Recibo (comprobante del gasto)"""
    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True, index=True)
    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(1024), nullable=False)
    filename = Column(String(255), nullable=False)
    thumbnail_url = Column(String(1024))
    delete_url = Column(String(1024))

    # Relationships
    expense = relationship("Expense", back_populates="receipts")
