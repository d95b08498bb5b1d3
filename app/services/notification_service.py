"""
Servicio de notificaciones: registro de mensajes por destinatario.
"""

import logging
from uuid import UUID

from app.core.exceptions import NotFoundException
from app.models.notification import Notification, NotificationStatus, NotificationType
from app.models.user import User, UserRole
from app.storage import Storage

logger = logging.getLogger(__name__)


def recipient_ids_for(user: User) -> list[UUID]:
    """
    Destinatarios que ve un usuario. Un laboratorio también recibe
    los mensajes dirigidos al id de su laboratorio (new_order).
    """
    ids = [user.id]
    if user.role == UserRole.LABORATORIO and user.lab_id is not None:
        ids.append(user.lab_id)
    return ids


async def notify(
    storage: Storage,
    recipient_id: UUID,
    type: NotificationType,
    message: str,
) -> Notification:
    notification = await storage.create_notification({
        "user_id": recipient_id,
        "type": type.value,
        "message": message,
        "status": NotificationStatus.UNREAD.value,
    })
    logger.debug("Notificación %s creada para %s", type.value, recipient_id)
    return notification


async def list_notifications(storage: Storage, user: User) -> list[Notification]:
    return await storage.list_notifications(recipient_ids_for(user))


async def mark_read(storage: Storage, user: User, notification_id: UUID) -> None:
    """Solo un destinatario puede marcarla; para el resto no existe."""
    notification = await storage.get_notification(notification_id)
    if not notification or notification.user_id not in recipient_ids_for(user):
        raise NotFoundException("Notificación", "Notificación no encontrada")

    await storage.mark_notification_read(notification_id)
