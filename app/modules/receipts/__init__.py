# app/modules/receipts/__init__.py
"""
Módulo de Recibos - Comprobantes de Gastos

- Registro de recibos con URL directa
- Subida de imágenes a ImgBB
- Descarga de la imagen como adjunto
- Consulta por gasto

Arquitectura:
- router.py: Endpoints de recibos y subida
- service.py: Lógica de negocio de recibos
- repository.py: Acceso a datos de recibos
- schemas.py: Modelos de request/response
"""

from .router import router, upload_router
from .service import ReceiptsService
from .repository import ReceiptsRepository

__all__ = [
    "router",
    "upload_router",
    "ReceiptsService",
    "ReceiptsRepository"
]
