# app/modules/expenses/repository.py
from sqlalchemy.orm import Session, selectinload
from typing import List, Dict, Any, Optional

from app.shared.database.models import Expense


class ExpensesRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_expense(self, expense_data: Dict[str, Any], user_id: int) -> Expense:
        """Crear nuevo gasto"""
        expense = Expense(
            user_id=user_id,
            amount=expense_data['amount'],
            description=expense_data['description'],
            category=expense_data['category'],
            date=expense_data['date'],
            status=expense_data.get('status') or 'pending'
        )

        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        return expense

    def get_expenses_with_receipts(self) -> List[Expense]:
        """Obtener todos los gastos con sus recibos"""
        return self.db.query(Expense).options(
            selectinload(Expense.receipts)
        ).order_by(Expense.id).all()

    def get_expense_by_id(self, expense_id: int) -> Optional[Expense]:
        return self.db.query(Expense).filter(Expense.id == expense_id).first()

    def update_expense(self, expense: Expense, updates: Dict[str, Any]) -> Expense:
        """Aplicar cambios ya filtrados al gasto"""
        for field, value in updates.items():
            setattr(expense, field, value)

        self.db.commit()
        self.db.refresh(expense)
        return expense

    def delete_expense(self, expense: Expense) -> None:
        """Eliminar gasto; sus recibos se eliminan en cascada"""
        self.db.delete(expense)
        self.db.commit()
