# app/shared/services/imgbb_service.py
import base64
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import httpx
from fastapi import Request, UploadFile

from app.config.settings import Settings
from app.core.exceptions import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class ImgBBService:
    """Cliente del host de imágenes ImgBB para comprobantes de gastos"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.imgbb_api_key
        self.upload_url = settings.imgbb_upload_url
        self.timeout = settings.http_timeout
        self.max_image_size = settings.max_image_size
        self.allowed_formats = settings.allowed_image_formats
        self.transport = transport
        self.configured = bool(self.api_key)

        if not self.configured:
            logger.warning("⚠️ ImgBB no está configurado (falta IMGBB_API_KEY)")

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=timeout or self.timeout,
            transport=self.transport,
            follow_redirects=True
        )

    async def upload_receipt_image(self, image_file: UploadFile) -> Dict[str, Any]:
        """
        Subir imagen de recibo a ImgBB

        Args:
            image_file: Archivo recibido en el formulario multipart

        Returns:
            dict: url, delete_url y thumbnail devueltos por ImgBB

        Raises:
            ValidationError: Si el archivo no es una imagen válida o excede el tamaño
            UpstreamError: Si ImgBB no está configurado o falla la subida
        """
        if not self.configured:
            raise UpstreamError("Error al procesar el recibo", details="ImgBB no está configurado")

        content_type = image_file.content_type or ""
        if content_type not in self.allowed_formats:
            raise ValidationError(
                "El archivo debe ser una imagen válida",
                details=f"Tipos permitidos: {', '.join(sorted(self.allowed_formats))}"
            )

        await image_file.seek(0)
        file_content = await image_file.read()

        if not file_content:
            raise ValidationError("No se ha proporcionado ningún archivo")

        if len(file_content) > self.max_image_size:
            raise ValidationError(
                f"La imagen no debe superar {self.max_image_size // (1024 * 1024)}MB"
            )

        encoded_image = base64.b64encode(file_content).decode("ascii")

        logger.info(f"📤 Subiendo imagen a ImgBB: {image_file.filename} ({len(file_content)} bytes)")

        try:
            async with self._client() as client:
                response = await client.post(
                    self.upload_url,
                    params={"key": self.api_key},
                    data={"image": encoded_image, "name": image_file.filename or "receipt"}
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Error comunicándose con ImgBB: {str(e)}")
            raise UpstreamError("Error al procesar el recibo", details=str(e))

        if response.status_code != 200:
            error_detail = self._error_detail(response)
            logger.error(f"❌ ImgBB respondió {response.status_code}: {error_detail}")
            raise UpstreamError("Error al procesar el recibo", details=error_detail)

        try:
            data = response.json().get("data") or {}
        except ValueError:
            data = {}
        if "url" not in data:
            raise UpstreamError("Error al procesar el recibo", details="ImgBB no retornó URL válida")

        logger.info(f"✅ Imagen subida exitosamente: {data['url']}")

        return {
            "url": data["url"],
            "delete_url": data.get("delete_url"),
            "thumbnail": (data.get("thumb") or {}).get("url")
        }

    async def open_stream(self, url: str) -> Tuple[httpx.Response, Callable[[], Awaitable[None]]]:
        """
        Abrir la descarga de un recurso remoto como stream

        Returns:
            (respuesta, cerrar): la respuesta sin leer y la corrutina que libera la conexión
        """
        client = self._client()
        response = None

        async def close():
            if response is not None:
                await response.aclose()
            await client.aclose()

        try:
            response = await client.send(client.build_request("GET", url), stream=True)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            await close()
            logger.error(f"❌ Error descargando {url}: {str(e)}")
            raise UpstreamError("Error al descargar el recibo", details=str(e))

        return response, close

    def health_check(self) -> dict:
        """Estado de configuración del host de imágenes"""
        return {
            "service": "imgbb",
            "configured": self.configured,
            "status": "configured" if self.configured else "not_configured"
        }

    @staticmethod
    def _error_detail(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            return response.text
        return body.get("error", body) if isinstance(body, dict) else body


def get_image_host(request: Request) -> ImgBBService:
    """Dependency que entrega el cliente de ImgBB de la aplicación"""
    return request.app.state.image_host
