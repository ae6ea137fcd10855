from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional
from datetime import datetime
from app.shared.schemas.common import CamelModel

UserRole = Literal["admin", "user"]


class UserCreateRequest(CamelModel):
    """Schema para crear usuario"""
    name: str = Field(..., min_length=2, max_length=255)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
    password: str = Field(..., min_length=6)
    role: UserRole = "user"

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "María García",
                "email": "maria@espacionova.org",
                "password": "password123",
                "role": "user"
            }
        }
    )

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class UserUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, pattern=r"^$|^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
    password: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if v and len(v) < 6:
            raise ValueError('La contraseña debe tener al menos 6 caracteres')
        return v


class UserResponse(CamelModel):
    """Schema para respuesta de usuario"""
    id: int
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserLogin(BaseModel):
    """Schema para login de usuario"""
    email: str = Field(..., description="Email del usuario")
    password: str = Field(..., description="Contraseña del usuario")


class LoginResponse(BaseModel):
    message: str
    user: UserResponse
