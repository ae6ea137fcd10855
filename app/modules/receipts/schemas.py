from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from app.shared.schemas.common import CamelModel


class ReceiptCreateRequest(CamelModel):
    url: str = Field(..., max_length=1024, description="URL de la imagen del recibo")
    filename: str = Field(..., max_length=255, description="Nombre del archivo")
    expense_id: int = Field(..., description="ID del gasto asociado")
    thumbnail_url: Optional[str] = Field(None, max_length=1024)
    delete_url: Optional[str] = Field(None, max_length=1024)

    @field_validator('url', 'filename')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('El campo no puede estar vacío')
        return v.strip()


class ReceiptUpdateRequest(CamelModel):
    """url y filename conservan su valor si llegan vacíos; thumbnailUrl y deleteUrl aceptan null"""
    url: Optional[str] = Field(None, max_length=1024)
    filename: Optional[str] = Field(None, max_length=255)
    thumbnail_url: Optional[str] = Field(None, max_length=1024)
    delete_url: Optional[str] = Field(None, max_length=1024)

    @field_validator('url', 'filename')
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ReceiptResponse(CamelModel):
    id: int
    url: str
    filename: str
    thumbnail_url: Optional[str] = None
    delete_url: Optional[str] = None
    expense_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UploadImageData(BaseModel):
    """Campos tal como los devuelve el host de imágenes"""
    url: str
    delete_url: Optional[str] = None
    thumbnail: Optional[str] = None


class UploadData(CamelModel):
    receipt: ReceiptResponse
    image_data: UploadImageData


class UploadResponse(BaseModel):
    message: str
    data: UploadData
