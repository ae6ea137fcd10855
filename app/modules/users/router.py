# app/modules/users/router.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.shared.schemas.common import ErrorResponse
from .service import UsersService
from .schemas import UserCreateRequest, UserUpdateRequest, UserResponse, UserLogin, LoginResponse

router = APIRouter()
login_router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Usuario no encontrado"}}


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Datos inválidos o email registrado"}}
)
async def create_user(user_data: UserCreateRequest, db: Session = Depends(get_db)):
    """Registrar un nuevo usuario"""
    service = UsersService(db)
    return await service.create_user(user_data)


@router.get("", response_model=List[UserResponse])
async def get_users(db: Session = Depends(get_db)):
    """Obtener todos los usuarios"""
    service = UsersService(db)
    return await service.list_users()


@router.put("/{user_id}", response_model=UserResponse, responses=NOT_FOUND)
async def update_user(user_id: int, patch: UserUpdateRequest, db: Session = Depends(get_db)):
    """Actualizar un usuario (parcial)"""
    service = UsersService(db)
    return await service.update_user(user_id, patch)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_user(user_id: int, db: Session = Depends(get_db)):
    """Eliminar un usuario junto con sus gastos"""
    service = UsersService(db)
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@login_router.post(
    "",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse, "description": "Email o contraseña incorrectos"}}
)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Verificar credenciales de usuario

    **Body:**
    ```json
        {
            "email": "user@example.com",
            "password": "password123"
        }
    ```
    """
    service = UsersService(db)
    return await service.login(credentials)
