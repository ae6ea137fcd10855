# app/modules/receipts/repository.py
from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional

from app.shared.database.models import Receipt


class ReceiptsRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_receipt(self, receipt_data: Dict[str, Any]) -> Receipt:
        """Crear nuevo recibo"""
        receipt = Receipt(
            expense_id=receipt_data['expense_id'],
            url=receipt_data['url'],
            filename=receipt_data['filename'],
            thumbnail_url=receipt_data.get('thumbnail_url'),
            delete_url=receipt_data.get('delete_url')
        )

        self.db.add(receipt)
        self.db.commit()
        self.db.refresh(receipt)
        return receipt

    def get_receipts(self) -> List[Receipt]:
        return self.db.query(Receipt).order_by(Receipt.id).all()

    def get_receipts_by_expense(self, expense_id: int) -> List[Receipt]:
        """Obtener recibos de un gasto"""
        return self.db.query(Receipt).filter(
            Receipt.expense_id == expense_id
        ).order_by(Receipt.id).all()

    def get_receipt_by_id(self, receipt_id: int) -> Optional[Receipt]:
        return self.db.query(Receipt).filter(Receipt.id == receipt_id).first()

    def update_receipt(self, receipt: Receipt, updates: Dict[str, Any]) -> Receipt:
        for field, value in updates.items():
            setattr(receipt, field, value)

        self.db.commit()
        self.db.refresh(receipt)
        return receipt

    def delete_receipt(self, receipt: Receipt) -> None:
        self.db.delete(receipt)
        self.db.commit()
