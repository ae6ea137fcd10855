# app/main.py
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import httpx
from fastapi import FastAPI

from app.config.database import Database
from app.config.settings import Settings, settings as default_settings
from app.core.middleware import setup_middleware, setup_exception_handlers
from app.api.router import api_router
from app.shared.services.imgbb_service import ImgBBService

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    image_transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """Construir la aplicación con su propia base de datos y cliente de imágenes"""
    settings = settings or default_settings
    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"🚀 {settings.app_name} iniciando...")
        logger.info(f"📍 Version: {settings.version}")
        logger.info(f"🌍 Environment: {'Development' if settings.debug else settings.environment.capitalize()}")
        logger.info(f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")
        database.create_all()

        yield

        # Shutdown
        database.dispose()
        logger.info(f"🛑 {settings.app_name} detenida")

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="API para gestionar gastos, recibos y usuarios de Espacio Nova",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.db = database
    app.state.image_host = ImgBBService(settings, transport=image_transport)
    app.state.started_at = time.monotonic()

    # Setup middleware
    setup_middleware(app)
    setup_exception_handlers(app, debug=settings.debug)

    # Include routers
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "message": "API Finanzas Espacio Nova funcionando correctamente",
            "version": settings.version,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "OK",
            "timestamp": datetime.now().isoformat(),
            "uptime": round(time.monotonic() - app.state.started_at, 3),
            "service": settings.app_name,
            "version": settings.version,
            "database": {
                "status": "Connected" if database.ping() else "Disconnected"
            },
            "image_host": app.state.image_host.health_check()
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug
    )
