"""
Utilidades de seguridad: hashing de contraseñas.
"""

import secrets
import string

from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()

# ── Hashing de contraseñas ───────────────────────────
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Genera hash bcrypt de una contraseña."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica una contraseña contra su hash bcrypt."""
    return pwd_context.verify(plain_password, hashed_password)


# ── Contraseñas aleatorias ───────────────────────────
_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*"


def generate_password(length: int = 12) -> str:
    """Genera una contraseña aleatoria criptográficamente segura."""
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))
