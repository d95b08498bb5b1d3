"""
Modelos SQLAlchemy: exportar todos para que Alembic los detecte.
"""

from app.models.user import User, UserRole, UserStatus
from app.models.laboratory import Laboratory
from app.models.order import Order, OrderMaterial, OrderStatus, ToothCondition
from app.models.order_sequence import OrderSequence
from app.models.notification import Notification, NotificationStatus, NotificationType

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "Laboratory",
    "Order",
    "OrderMaterial",
    "OrderStatus",
    "ToothCondition",
    "OrderSequence",
    "Notification",
    "NotificationStatus",
    "NotificationType",
]
