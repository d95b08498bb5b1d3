"""
Dependencies de FastAPI para autenticación y autorización por rol.
"""

from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.jwt import TokenType, decode_token
from app.core.exceptions import CredentialsException, ForbiddenException
from app.models.user import User, UserRole, UserStatus
from app.storage import Storage, get_storage

# ── Security scheme ──────────────────────────────────
# auto_error=False: la ausencia del header se reporta como 401 propio.
security = HTTPBearer(auto_error=False)


# ── Token payload tipado ─────────────────────────────
class TokenPayload:
    """Datos extraídos del token JWT decodificado."""

    def __init__(self, payload: dict):
        self.user_id: UUID = UUID(payload["sub"])
        self.token_type: str = payload.get("type", TokenType.ACCESS)


# ── Obtener usuario actual ───────────────────────────
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    storage: Storage = Depends(get_storage),
) -> User:
    """
    Dependency que:
    1. Decodifica el JWT del header Authorization
    2. Carga el usuario de la DB (no se confía en claims viejos)
    """
    if credentials is None:
        raise CredentialsException("Token de acceso requerido")

    try:
        token_data = TokenPayload(decode_token(credentials.credentials))
    except (jwt.InvalidTokenError, ValueError):
        raise CredentialsException("Token inválido o expirado")

    if token_data.token_type != TokenType.ACCESS:
        raise CredentialsException("Tipo de token inválido")

    user = await storage.get_user(token_data.user_id)
    if user is None or user.status != UserStatus.ACTIVE:
        raise CredentialsException("Token inválido")

    return user


# ── Factory de dependency con roles ──────────────────
def require_role(*allowed_roles: UserRole):
    """
    Factory que crea un dependency que verifica el rol del usuario.

    Uso:
        @router.get("/admin-only")
        async def admin_endpoint(user: User = Depends(require_role(UserRole.SUPERADMIN))):
            ...
    """

    async def _check_role(
        user: User = Depends(get_current_user),
    ) -> User:
        if user.role not in allowed_roles:
            raise ForbiddenException("Permisos insuficientes")
        return user

    return _check_role
