"""Credenciales de usuario"""

from .service import AuthService

__all__ = ["AuthService"]
