"""
Servicio de autenticación: login y registro.
"""

import logging

from app.auth.jwt import create_access_token
from app.core.exceptions import (
    ConflictException,
    CredentialsException,
    ForbiddenException,
    ValidationException,
)
from app.core.security import hash_password, verify_password
from app.models.user import User, UserRole, UserStatus
from app.schemas.auth import LoginRequest, LoginResponse, PublicUser, RegisterRequest
from app.storage import Storage

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email o contraseña incorrectos"


async def login(storage: Storage, data: LoginRequest) -> LoginResponse:
    """
    Autentica un usuario con email y contraseña.
    El mensaje de error es el mismo para cualquier fallo.
    """
    user = await storage.get_user_by_email(data.email)

    if not user:
        logger.warning("Login fallido: usuario no encontrado para email=%s", data.email)
        raise CredentialsException(INVALID_CREDENTIALS)

    if not verify_password(data.password, user.password):
        logger.warning("Login fallido: contraseña incorrecta para user_id=%s", user.id)
        raise CredentialsException(INVALID_CREDENTIALS)

    if user.status != UserStatus.ACTIVE:
        logger.warning("Login fallido: usuario inactivo user_id=%s", user.id)
        raise CredentialsException(INVALID_CREDENTIALS)

    token = create_access_token(user.id)
    logger.info("Login exitoso user_id=%s role=%s", user.id, user.role.value)

    return LoginResponse(token=token, user=PublicUser.model_validate(user))


async def register(storage: Storage, data: RegisterRequest) -> User:
    """Registra un usuario doctor o laboratorio. Nunca un superadmin."""
    if data.role == UserRole.SUPERADMIN:
        raise ForbiddenException("No se permite registrar usuarios superadmin")

    if await storage.get_user_by_email(data.email):
        raise ConflictException("El email ya está registrado")

    if data.lab_id is not None and not await storage.get_laboratory(data.lab_id):
        raise ValidationException("Laboratorio no encontrado")

    user = await storage.create_user({
        "name": data.name,
        "email": data.email,
        "password": hash_password(data.password),
        "phone": data.phone,
        "role": data.role,
        "status": data.status,
        "lab_id": data.lab_id,
    })
    logger.info("Usuario registrado user_id=%s role=%s", user.id, user.role.value)
    return user
