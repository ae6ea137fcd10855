# app/modules/users/repository.py
from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional

from app.shared.database.models import User


class UsersRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_user(self, name: str, email: str, password_hash: str, role: str) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role
        )

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def update_user(self, user: User, updates: Dict[str, Any]) -> User:
        for field, value in updates.items():
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user: User) -> None:
        """Eliminar usuario; sus gastos y recibos se eliminan en cascada"""
        self.db.delete(user)
        self.db.commit()
