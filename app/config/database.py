# app/config/database.py
import logging

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .settings import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine y fábrica de sesiones construidos a partir de la configuración"""

    def __init__(self, settings: Settings):
        engine_kwargs = {
            "pool_pre_ping": True,
            "echo": False,
        }

        if settings.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in settings.database_url or settings.database_url == "sqlite://":
                engine_kwargs["poolclass"] = StaticPool
        else:
            # Pool acotado: máximo de conexiones, timeout de adquisición y reciclaje de inactivas
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_timeout=settings.db_pool_timeout,
                pool_recycle=settings.db_pool_recycle,
            )

        self.engine = create_engine(settings.database_url_with_ssl, **engine_kwargs)

        if settings.is_sqlite:
            # SQLite no aplica claves foráneas (ni ON DELETE CASCADE) si no se activan por conexión
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        from app.shared.database.models import Base

        Base.metadata.create_all(bind=self.engine)
        logger.info("✅ Modelos sincronizados con la base de datos")

    def ping(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"❌ Error de base de datos: {e}")
            return False

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """Database dependency for FastAPI"""
    db: Session = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()
