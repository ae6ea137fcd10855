# app/core/exceptions.py
from fastapi import HTTPException, status
from typing import Any, Optional


class AppError(HTTPException):
    """Error de aplicación con detalle opcional para el cliente"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, details: Optional[Any] = None, headers: Optional[dict] = None):
        super().__init__(status_code=self.status_code, detail=detail, headers=headers)
        self.details = details


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Email o contraseña incorrectos"):
        super().__init__(detail)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(AppError):
    """Falla del host de imágenes o de una descarga remota"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
