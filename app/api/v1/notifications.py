"""
Endpoints de notificaciones del usuario autenticado.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.models.user import User
from app.schemas.notification import NotificationResponse
from app.services import notification_service
from app.storage import Storage, get_storage

router = APIRouter()


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Más recientes primero, sin paginación."""
    return await notification_service.list_notifications(storage, user)


@router.put("/{notification_id}/read", status_code=204)
async def mark_notification_read(
    notification_id: UUID,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    await notification_service.mark_read(storage, user, notification_id)
