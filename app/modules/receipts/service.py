# app/modules/receipts/service.py
import logging
from typing import List, Optional
from urllib.parse import quote

from fastapi import UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.background import BackgroundTask

from app.core.exceptions import InternalError, NotFoundError, ValidationError
from app.modules.expenses.repository import ExpensesRepository
from app.shared.database.models import Receipt
from app.shared.schemas.common import supplied_fields
from app.shared.services.imgbb_service import ImgBBService
from .repository import ReceiptsRepository
from .schemas import (
    ReceiptCreateRequest, ReceiptUpdateRequest, ReceiptResponse,
    UploadData, UploadImageData, UploadResponse
)

logger = logging.getLogger(__name__)

RECEIPT_REQUIRED_FIELDS = ("url", "filename")


def attachment_disposition(filename: str) -> str:
    """Content-Disposition con nombre ASCII de respaldo y nombre UTF-8 (RFC 5987)"""
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace("\\", "_").replace('"', "_")
    if not fallback.strip(" .") or fallback.startswith("."):
        fallback = "recibo" + (fallback if fallback.startswith(".") else "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


class ReceiptsService:
    def __init__(
        self,
        db: Session,
        image_host: Optional[ImgBBService] = None,
        empty_as_not_found: bool = True
    ):
        self.db = db
        self.repository = ReceiptsRepository(db)
        self.expenses = ExpensesRepository(db)
        self.image_host = image_host
        self.empty_as_not_found = empty_as_not_found

    async def create_receipt(self, receipt_data: ReceiptCreateRequest) -> ReceiptResponse:
        """Crear recibo con URL proporcionada por el cliente"""
        self._ensure_expense_exists(receipt_data.expense_id)
        receipt = self._persist(receipt_data.model_dump())
        return ReceiptResponse.model_validate(receipt)

    async def list_receipts(self) -> List[ReceiptResponse]:
        return [ReceiptResponse.model_validate(r) for r in self.repository.get_receipts()]

    async def list_receipts_by_expense(self, expense_id: int) -> List[ReceiptResponse]:
        """Obtener recibos de un gasto; sin resultados se responde 404 si así está configurado"""
        receipts = self.repository.get_receipts_by_expense(expense_id)

        if not receipts and self.empty_as_not_found:
            raise NotFoundError("No se encontraron recibos para este gasto")

        return [ReceiptResponse.model_validate(r) for r in receipts]

    async def update_receipt(self, receipt_id: int, patch: ReceiptUpdateRequest) -> ReceiptResponse:
        receipt = self._get_or_404(receipt_id)
        updates = supplied_fields(patch, RECEIPT_REQUIRED_FIELDS)

        try:
            receipt = self.repository.update_receipt(receipt, updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error al actualizar el recibo {receipt_id}")
            raise InternalError("Error al actualizar el recibo", details=str(e))

        return ReceiptResponse.model_validate(receipt)

    async def delete_receipt(self, receipt_id: int) -> None:
        receipt = self._get_or_404(receipt_id)

        try:
            self.repository.delete_receipt(receipt)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error al eliminar el recibo {receipt_id}")
            raise InternalError("Error al eliminar el recibo", details=str(e))

        logger.info(f"🗑️ Recibo {receipt_id} eliminado")

    async def upload_receipt(
        self,
        file: Optional[UploadFile],
        expense_id: Optional[int]
    ) -> UploadResponse:
        """
        Subir imagen de recibo al host de imágenes y registrar el recibo

        La imagen subida no se elimina del host si luego falla el registro en BD.
        """
        if file is None or not file.filename:
            raise ValidationError("No se ha proporcionado ningún archivo")

        if expense_id is None:
            raise ValidationError("Se requiere el ID del gasto (expenseId)")

        self._ensure_expense_exists(expense_id)

        image_data = await self.image_host.upload_receipt_image(file)

        receipt = self._persist({
            "expense_id": expense_id,
            "url": image_data["url"],
            "filename": file.filename,
            "thumbnail_url": image_data.get("thumbnail"),
            "delete_url": image_data.get("delete_url")
        })

        logger.info(f"✅ Recibo {receipt.id} creado para gasto {expense_id}")

        return UploadResponse(
            message="Recibo creado exitosamente",
            data=UploadData(
                receipt=ReceiptResponse.model_validate(receipt),
                image_data=UploadImageData(**image_data)
            )
        )

    async def download_receipt(self, receipt_id: int) -> StreamingResponse:
        """Re-transmitir la imagen remota del recibo como adjunto"""
        receipt = self._get_or_404(receipt_id)

        upstream, close = await self.image_host.open_stream(receipt.url)
        media_type = upstream.headers.get("content-type", "application/octet-stream")

        try:
            return StreamingResponse(
                upstream.aiter_bytes(),
                media_type=media_type,
                headers={"Content-Disposition": attachment_disposition(receipt.filename)},
                background=BackgroundTask(close)
            )
        except Exception:
            await close()
            raise

    def _persist(self, receipt_data: dict) -> Receipt:
        try:
            return self.repository.create_receipt(receipt_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error al crear el recibo")
            raise InternalError("Error al crear el recibo", details=str(e))

    def _ensure_expense_exists(self, expense_id: int) -> None:
        if not self.expenses.get_expense_by_id(expense_id):
            raise NotFoundError("Gasto no encontrado")

    def _get_or_404(self, receipt_id: int) -> Receipt:
        receipt = self.repository.get_receipt_by_id(receipt_id)
        if not receipt:
            raise NotFoundError("Recibo no encontrado")
        return receipt
