# app/modules/users/__init__.py
"""
Módulo de Usuarios

Arquitectura:
- router.py: Endpoints de usuarios y login
- service.py: Registro, actualización y verificación de credenciales
- repository.py: Acceso a datos de usuarios
- schemas.py: Modelos de request/response
"""

from .router import router, login_router
from .service import UsersService
from .repository import UsersRepository

__all__ = [
    "router",
    "login_router",
    "UsersService",
    "UsersRepository"
]
