# app/modules/expenses/service.py
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InternalError, NotFoundError, ValidationError
from app.shared.database.models import Expense, User
from app.shared.schemas.common import supplied_fields
from .repository import ExpensesRepository
from .schemas import (
    ExpenseCreateRequest, ExpenseUpdateRequest, ExpenseResponse,
    ExpenseReceiptInfo, ExpenseWithReceiptsResponse
)

logger = logging.getLogger(__name__)

EXPENSE_REQUIRED_FIELDS = ("amount", "description", "category", "date", "status")


class ExpensesService:
    def __init__(self, db: Session, default_user_id: int = 1):
        self.db = db
        self.repository = ExpensesRepository(db)
        # Sin autenticación real, todo gasto se asigna al usuario por defecto
        self.default_user_id = default_user_id

    async def create_expense(self, expense_data: ExpenseCreateRequest) -> ExpenseResponse:
        """Crear nuevo gasto"""
        if expense_data.amount <= 0:
            raise ValidationError("El monto debe ser un número positivo")

        if not self.db.query(User).filter(User.id == self.default_user_id).first():
            raise NotFoundError("Usuario no encontrado")

        try:
            expense = self.repository.create_expense(expense_data.model_dump(), self.default_user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error al crear el gasto")
            raise InternalError("Error al crear el gasto", details=str(e))

        logger.info(f"Gasto {expense.id} creado por usuario {expense.user_id}: {expense.amount}")
        return ExpenseResponse.model_validate(expense)

    async def list_expenses(self) -> List[ExpenseWithReceiptsResponse]:
        """Obtener todos los gastos con sus recibos"""
        expenses = self.repository.get_expenses_with_receipts()

        return [
            ExpenseWithReceiptsResponse(
                **ExpenseResponse.model_validate(expense).model_dump(),
                receipts=[
                    ExpenseReceiptInfo(
                        id=receipt.id,
                        image_url=receipt.url,
                        file_name=receipt.filename,
                        expense_id=receipt.expense_id
                    )
                    for receipt in expense.receipts
                ]
            )
            for expense in expenses
        ]

    async def get_expense(self, expense_id: int) -> ExpenseResponse:
        return ExpenseResponse.model_validate(self._get_or_404(expense_id))

    async def update_expense(self, expense_id: int, patch: ExpenseUpdateRequest) -> ExpenseResponse:
        """Actualización parcial del gasto"""
        expense = self._get_or_404(expense_id)

        updates = supplied_fields(patch, EXPENSE_REQUIRED_FIELDS)
        if "amount" in updates and updates["amount"] < 0:
            raise ValidationError("El monto debe ser un número positivo")

        try:
            expense = self.repository.update_expense(expense, updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error al actualizar el gasto {expense_id}")
            raise InternalError("Error al actualizar el gasto", details=str(e))

        return ExpenseResponse.model_validate(expense)

    async def delete_expense(self, expense_id: int) -> None:
        expense = self._get_or_404(expense_id)

        try:
            self.repository.delete_expense(expense)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error al eliminar el gasto {expense_id}")
            raise InternalError("Error al eliminar el gasto", details=str(e))

        logger.info(f"🗑️ Gasto {expense_id} eliminado junto con sus recibos")

    def _get_or_404(self, expense_id: int) -> Expense:
        expense = self.repository.get_expense_by_id(expense_id)
        if not expense:
            raise NotFoundError("Gasto no encontrado")
        return expense
