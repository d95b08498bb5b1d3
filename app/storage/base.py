"""
Interfaz de almacenamiento: CRUD por entidad consumido por los servicios.

Las actualizaciones son incondicionales (last-write-wins) y devuelven
None cuando la fila no existe.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from app.models.laboratory import Laboratory
from app.models.notification import Notification
from app.models.order import Order
from app.models.user import User, UserRole


class Storage(ABC):

    # ── Usuarios ─────────────────────────────────────
    @abstractmethod
    async def get_user(self, user_id: UUID) -> User | None: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    async def list_users(
        self, role: UserRole | None = None, lab_id: UUID | None = None
    ) -> list[User]: ...

    @abstractmethod
    async def create_user(self, data: dict) -> User: ...

    @abstractmethod
    async def update_user(self, user_id: UUID, data: dict) -> User | None: ...

    @abstractmethod
    async def delete_user(self, user_id: UUID) -> bool: ...

    # ── Laboratorios ─────────────────────────────────
    @abstractmethod
    async def get_laboratory(self, lab_id: UUID) -> Laboratory | None: ...

    @abstractmethod
    async def get_laboratory_by_name(self, name: str) -> Laboratory | None: ...

    @abstractmethod
    async def list_laboratories(self) -> list[Laboratory]: ...

    @abstractmethod
    async def create_laboratory(self, data: dict) -> Laboratory: ...

    @abstractmethod
    async def update_laboratory(self, lab_id: UUID, data: dict) -> Laboratory | None: ...

    @abstractmethod
    async def delete_laboratory(self, lab_id: UUID) -> bool: ...

    # ── Órdenes ──────────────────────────────────────
    @abstractmethod
    async def get_order(self, order_id: UUID) -> Order | None: ...

    @abstractmethod
    async def list_orders(self) -> list[Order]: ...

    @abstractmethod
    async def list_orders_by_doctor(self, doctor_id: UUID) -> list[Order]: ...

    @abstractmethod
    async def list_orders_by_lab(self, lab_id: UUID) -> list[Order]: ...

    @abstractmethod
    async def create_order(self, data: dict) -> Order:
        """Inserta la orden asignando el siguiente order_number."""

    @abstractmethod
    async def update_order(self, order_id: UUID, data: dict) -> Order | None: ...

    # ── Notificaciones ───────────────────────────────
    @abstractmethod
    async def get_notification(self, notification_id: UUID) -> Notification | None: ...

    @abstractmethod
    async def list_notifications(self, recipient_ids: list[UUID]) -> list[Notification]: ...

    @abstractmethod
    async def create_notification(self, data: dict) -> Notification: ...

    @abstractmethod
    async def mark_notification_read(self, notification_id: UUID) -> bool: ...
