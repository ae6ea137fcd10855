# app/modules/receipts/router.py
from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.config.settings import Settings, get_settings
from app.shared.schemas.common import ErrorResponse
from app.shared.services.imgbb_service import ImgBBService, get_image_host
from .service import ReceiptsService
from .schemas import ReceiptCreateRequest, ReceiptUpdateRequest, ReceiptResponse, UploadResponse

router = APIRouter()
upload_router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Recibo no encontrado"}}


@router.post(
    "",
    response_model=ReceiptResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse, "description": "Gasto no encontrado"}}
)
async def create_receipt(receipt_data: ReceiptCreateRequest, db: Session = Depends(get_db)):
    """Crear un recibo con la URL de una imagen ya alojada"""
    service = ReceiptsService(db)
    return await service.create_receipt(receipt_data)


@router.get("", response_model=List[ReceiptResponse])
async def get_receipts(db: Session = Depends(get_db)):
    """Obtener todos los recibos"""
    service = ReceiptsService(db)
    return await service.list_receipts()


@router.get(
    "/expense/{expense_id}",
    response_model=List[ReceiptResponse],
    responses={404: {"model": ErrorResponse, "description": "No se encontraron recibos para este gasto"}}
)
async def get_receipts_by_expense(
    expense_id: int,
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Obtener recibos por ID de gasto"""
    service = ReceiptsService(db, empty_as_not_found=settings.receipts_empty_as_not_found)
    return await service.list_receipts_by_expense(expense_id)


@router.put("/{receipt_id}", response_model=ReceiptResponse, responses=NOT_FOUND)
async def update_receipt(
    receipt_id: int,
    patch: ReceiptUpdateRequest,
    db: Session = Depends(get_db)
):
    """Actualizar un recibo (parcial)"""
    service = ReceiptsService(db)
    return await service.update_receipt(receipt_id, patch)


@router.delete("/{receipt_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_receipt(receipt_id: int, db: Session = Depends(get_db)):
    """Eliminar un recibo"""
    service = ReceiptsService(db)
    await service.delete_receipt(receipt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{receipt_id}/download", responses=NOT_FOUND)
async def download_receipt(
    receipt_id: int,
    image_host: ImgBBService = Depends(get_image_host),
    db: Session = Depends(get_db)
):
    """Descargar la imagen del recibo como archivo adjunto"""
    service = ReceiptsService(db, image_host=image_host)
    return await service.download_receipt(receipt_id)


@upload_router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Datos inválidos"},
        404: {"model": ErrorResponse, "description": "Gasto no encontrado"},
        500: {"model": ErrorResponse, "description": "Error del host de imágenes"}
    }
)
async def upload_receipt(
    file: Optional[UploadFile] = File(None, description="Imagen del recibo"),
    expense_id: Optional[int] = Form(None, alias="expenseId", description="ID del gasto asociado"),
    image_host: ImgBBService = Depends(get_image_host),
    db: Session = Depends(get_db)
):
    """
    Subir una imagen de recibo

    **Flujo:**
    - Valida archivo y gasto
    - Sube la imagen a ImgBB
    - Registra el recibo con url, miniatura y URL de borrado
    """
    service = ReceiptsService(db, image_host=image_host)
    return await service.upload_receipt(file, expense_id)
