"""
Servicio de usuarios: perfil propio, listado global y cambio de estado.
"""

import logging
from uuid import UUID

from app.core.exceptions import NotFoundException, ValidationException
from app.models.user import User, UserStatus
from app.schemas.user import UserMe, UserResponse
from app.storage import Storage

logger = logging.getLogger(__name__)


async def _lab_name(storage: Storage, lab_id: UUID | None) -> str | None:
    if lab_id is None:
        return None
    lab = await storage.get_laboratory(lab_id)
    return lab.name if lab else None


async def get_me(storage: Storage, user: User) -> UserMe:
    return UserMe(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        lab_id=user.lab_id,
        lab_name=await _lab_name(storage, user.lab_id),
    )


async def _to_response(storage: Storage, user: User) -> UserResponse:
    response = UserResponse.model_validate(user)
    response.lab_name = await _lab_name(storage, user.lab_id)
    return response


async def list_users(storage: Storage) -> list[UserResponse]:
    users = await storage.list_users()
    lab_names = {lab.id: lab.name for lab in await storage.list_laboratories()}

    result = []
    for user in users:
        response = UserResponse.model_validate(user)
        response.lab_name = lab_names.get(user.lab_id) if user.lab_id else None
        result.append(response)
    return result


async def update_status(
    storage: Storage, actor: User, user_id: UUID, status: UserStatus
) -> UserResponse:
    if user_id == actor.id:
        raise ValidationException("No puede cambiar su propio estado")

    user = await storage.update_user(user_id, {"status": status})
    if not user:
        raise NotFoundException("Usuario")

    logger.info("Usuario %s cambiado a %s por user_id=%s", user_id, status.value, actor.id)
    return await _to_response(storage, user)
