"""
Endpoints de usuarios: perfil propio y administración global.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user, require_role
from app.auth.rbac import roles_for
from app.models.user import User
from app.schemas.user import UserMe, UserResponse, UserStatusUpdate
from app.services import user_service
from app.storage import Storage, get_storage

router = APIRouter()


@router.get("/me", response_model=UserMe)
async def get_me(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Datos del usuario autenticado con el nombre de su laboratorio."""
    return await user_service.get_me(storage, user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    user: User = Depends(require_role(*roles_for("user", "list"))),
    storage: Storage = Depends(get_storage),
):
    return await user_service.list_users(storage)


@router.patch("/{user_id}/status", response_model=UserResponse)
async def update_user_status(
    user_id: UUID,
    data: UserStatusUpdate,
    user: User = Depends(require_role(*roles_for("user", "update_status"))),
    storage: Storage = Depends(get_storage),
):
    """Activa o desactiva un usuario. Un usuario inactivo no puede iniciar sesión."""
    return await user_service.update_status(storage, user, user_id, data.status)
