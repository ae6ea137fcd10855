# app/modules/expenses/router.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.config.settings import Settings, get_settings
from app.shared.schemas.common import ErrorResponse
from .service import ExpensesService
from .schemas import (
    ExpenseCreateRequest, ExpenseUpdateRequest, ExpenseResponse, ExpenseWithReceiptsResponse
)

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Gasto no encontrado"}}


@router.get("", response_model=List[ExpenseWithReceiptsResponse])
async def get_expenses(db: Session = Depends(get_db)):
    """
    Obtener todos los gastos

    **Incluye:**
    - Recibos asociados a cada gasto (id, imageUrl, fileName, expenseId)
    """
    service = ExpensesService(db)
    return await service.list_expenses()


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Datos inválidos"}}
)
async def create_expense(
    expense_data: ExpenseCreateRequest,
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """
    Crear un nuevo gasto

    **Validaciones:**
    - amount, description, category y date son obligatorios
    - El monto debe ser mayor a 0
    """
    service = ExpensesService(db, default_user_id=settings.default_user_id)
    return await service.create_expense(expense_data)


@router.get("/{expense_id}", response_model=ExpenseResponse, responses=NOT_FOUND)
async def get_expense(expense_id: int, db: Session = Depends(get_db)):
    """Obtener un gasto por ID"""
    service = ExpensesService(db)
    return await service.get_expense(expense_id)


@router.put("/{expense_id}", response_model=ExpenseResponse, responses=NOT_FOUND)
async def update_expense(
    expense_id: int,
    patch: ExpenseUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Actualizar un gasto (parcial)

    Solo se modifican los campos enviados con valor; un campo vacío o en cero
    conserva el valor actual.
    """
    service = ExpensesService(db)
    return await service.update_expense(expense_id, patch)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    """Eliminar un gasto y sus recibos"""
    service = ExpensesService(db)
    await service.delete_expense(expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
