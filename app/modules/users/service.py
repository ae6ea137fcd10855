# app/modules/users/service.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth.service import AuthService
from app.core.exceptions import AuthenticationError, InternalError, NotFoundError, ValidationError
from app.shared.database.models import User
from app.shared.schemas.common import supplied_fields
from .repository import UsersRepository
from .schemas import UserCreateRequest, UserUpdateRequest, UserResponse, UserLogin, LoginResponse

logger = logging.getLogger(__name__)

USER_REQUIRED_FIELDS = ("name", "email", "password", "role")


class UsersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = UsersRepository(db)

    async def create_user(self, user_data: UserCreateRequest) -> UserResponse:
        """Registrar usuario con contraseña hasheada"""
        if self.repository.get_user_by_email(user_data.email):
            raise ValidationError("El email ya está registrado")

        try:
            user = self.repository.create_user(
                name=user_data.name.strip(),
                email=user_data.email,
                password_hash=AuthService.get_password_hash(user_data.password),
                role=user_data.role
            )
        except IntegrityError:
            self.db.rollback()
            raise ValidationError("El email ya está registrado")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error al crear el usuario")
            raise InternalError("Error al crear el usuario", details=str(e))

        logger.info(f"Usuario {user.id} creado con rol {user.role}")
        return UserResponse.model_validate(user)

    async def list_users(self) -> List[UserResponse]:
        return [UserResponse.model_validate(u) for u in self.repository.get_users()]

    async def update_user(self, user_id: int, patch: UserUpdateRequest) -> UserResponse:
        user = self._get_or_404(user_id)
        updates = supplied_fields(patch, USER_REQUIRED_FIELDS)

        if "email" in updates and updates["email"] != user.email:
            if self.repository.get_user_by_email(updates["email"]):
                raise ValidationError("El email ya está registrado")

        if "password" in updates:
            updates["password_hash"] = AuthService.get_password_hash(updates.pop("password"))

        try:
            user = self.repository.update_user(user, updates)
        except IntegrityError:
            self.db.rollback()
            raise ValidationError("El email ya está registrado")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error al actualizar el usuario {user_id}")
            raise InternalError("Error al actualizar el usuario", details=str(e))

        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: int) -> None:
        user = self._get_or_404(user_id)

        try:
            self.repository.delete_user(user)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error al eliminar el usuario {user_id}")
            raise InternalError("Error al eliminar el usuario", details=str(e))

        logger.info(f"🗑️ Usuario {user_id} eliminado")

    async def login(self, credentials: UserLogin) -> LoginResponse:
        """Verificar credenciales; no se emite token"""
        user = self.repository.get_user_by_email(credentials.email.strip().lower())

        if not user or not AuthService.verify_password(credentials.password, user.password_hash):
            raise AuthenticationError()

        return LoginResponse(
            message="Inicio de sesión exitoso",
            user=UserResponse.model_validate(user)
        )

    def _get_or_404(self, user_id: int) -> User:
        user = self.repository.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("Usuario no encontrado")
        return user
