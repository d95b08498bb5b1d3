"""
Gestión de JWT.
El access token dura 24 horas y solo lleva el id del usuario; el resto
de atributos se vuelve a leer de la DB en cada petición.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from app.config import get_settings

settings = get_settings()


class TokenType:
    ACCESS = "access"


def create_access_token(user_id: UUID) -> str:
    """Crea un access token JWT firmado."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": TokenType.ACCESS,
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_ACCESS_TOKEN_EXPIRE_HOURS),
    }

    return jwt.encode(
        payload,
        settings.jwt_signing_key,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_token(token: str) -> dict:
    """
    Decodifica y verifica un token JWT.
    Lanza jwt.InvalidTokenError si el token es inválido o expirado.
    """
    return jwt.decode(
        token,
        settings.jwt_verifying_key,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
