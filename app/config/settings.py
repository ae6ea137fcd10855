# app/config/settings.py
from fastapi import Request
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    # App Info
    app_name: str = "Finanzas Espacio Nova API"
    version: str = "1.0.0"
    environment: str = Field(
        "production",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV", "environment"),
    )

    # Database
    database_url: str = "sqlite:///./finanzas.db"
    db_pool_size: int = 5
    db_max_overflow: int = 0
    db_pool_timeout: int = 30
    db_pool_recycle: int = 10

    # External Services
    imgbb_api_key: Optional[str] = None
    imgbb_upload_url: str = "https://api.imgbb.com/1/upload"
    http_timeout: float = 30.0

    # File Upload
    max_image_size: int = 10 * 1024 * 1024
    allowed_image_formats: set = {"image/jpeg", "image/png", "image/webp", "image/jpg", "image/gif"}

    # Reglas de negocio
    default_user_id: int = 1
    receipts_empty_as_not_found: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def debug(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def database_url_with_ssl(self) -> str:
        """Normalizar esquema postgres:// y agregar SSL en producción"""
        url = self.database_url
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        if url.startswith("postgresql") and self.environment.lower() == "production":
            if "sslmode=" not in url:
                separator = "&" if "?" in url else "?"
                url = f"{url}{separator}sslmode=require"
        return url


settings = Settings()


def get_settings(request: Request) -> Settings:
    """Dependency con la configuración de la aplicación en curso"""
    return request.app.state.settings
