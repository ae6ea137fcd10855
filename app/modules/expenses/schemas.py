from pydantic import Field, field_validator
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime
from app.shared.schemas.common import CamelModel

ExpenseStatus = Literal["pending", "approved", "rejected"]


class ExpenseCreateRequest(CamelModel):
    amount: Decimal = Field(..., max_digits=10, decimal_places=2, description="Monto del gasto")
    description: str = Field(..., max_length=255, description="Descripción del gasto")
    category: str = Field(..., max_length=255, description="Categoría del gasto")
    date: datetime = Field(..., description="Fecha del gasto")
    status: ExpenseStatus = "pending"

    @field_validator('description', 'category')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('El campo no puede estar vacío')
        return v.strip()


class ExpenseUpdateRequest(CamelModel):
    """Actualización parcial: solo se aplican los campos enviados con valor"""
    amount: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    date: Optional[datetime] = None
    status: Optional[ExpenseStatus] = None

    @field_validator('description', 'category')
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ExpenseResponse(CamelModel):
    id: int
    amount: float
    description: str
    category: str
    date: datetime
    status: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExpenseReceiptInfo(CamelModel):
    id: int
    image_url: str
    file_name: str
    expense_id: int


class ExpenseWithReceiptsResponse(ExpenseResponse):
    receipts: List[ExpenseReceiptInfo] = []
