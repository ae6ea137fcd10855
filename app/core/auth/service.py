import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# Password context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Servicio de credenciales: hash y verificación de contraseñas"""

    @staticmethod
    def _truncate(password: str) -> str:
        # bcrypt solo considera los primeros 72 bytes
        return password.encode('utf-8')[:72].decode('utf-8', errors='ignore')

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verificar contraseña"""
        try:
            return pwd_context.verify(AuthService._truncate(plain_password), hashed_password)
        except ValueError as e:
            logger.warning(f"Hash de contraseña inválido: {e}")
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Generar hash de contraseña"""
        return pwd_context.hash(AuthService._truncate(password))
