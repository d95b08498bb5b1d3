"""
Implementación de Storage sobre SQLAlchemy async.
"""

from typing import TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException
from app.database import Base
from app.models.laboratory import Laboratory
from app.models.notification import Notification, NotificationStatus
from app.models.order import Order
from app.models.order_sequence import OrderSequence
from app.models.user import User, UserRole
from app.storage.base import Storage

ModelT = TypeVar("ModelT", bound=Base)

ORDER_SEQUENCE_NAME = "orders"
DUPLICATE_EMAIL = "El email ya está registrado"


class SQLStorage(Storage):
    def __init__(self, db: AsyncSession):
        self.db = db

    # ── Helpers ──────────────────────────────────────
    async def _insert(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        await self.db.flush()
        # Cargar columnas con server_default (created_at, updated_at)
        await self.db.refresh(obj)
        return obj

    async def _update(self, model: type[ModelT], pk, data: dict) -> ModelT | None:
        obj = await self.db.get(model, pk)
        if obj is None:
            return None
        for key, value in data.items():
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _delete(self, model: type[Base], pk) -> bool:
        obj = await self.db.get(model, pk)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self.db.flush()
        return True

    # ── Usuarios ─────────────────────────────────────
    async def get_user(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def list_users(
        self, role: UserRole | None = None, lab_id: UUID | None = None
    ) -> list[User]:
        query = select(User)
        if role:
            query = query.where(User.role == role)
        if lab_id:
            query = query.where(User.lab_id == lab_id)
        result = await self.db.execute(query.order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def create_user(self, data: dict) -> User:
        try:
            return await self._insert(User(**data))
        except IntegrityError as exc:
            # Otra petición registró el mismo email entre la consulta y el INSERT
            raise ConflictException(DUPLICATE_EMAIL) from exc

    async def update_user(self, user_id: UUID, data: dict) -> User | None:
        try:
            return await self._update(User, user_id, data)
        except IntegrityError as exc:
            raise ConflictException(DUPLICATE_EMAIL) from exc

    async def delete_user(self, user_id: UUID) -> bool:
        return await self._delete(User, user_id)

    # ── Laboratorios ─────────────────────────────────
    async def get_laboratory(self, lab_id: UUID) -> Laboratory | None:
        return await self.db.get(Laboratory, lab_id)

    async def get_laboratory_by_name(self, name: str) -> Laboratory | None:
        result = await self.db.execute(
            select(Laboratory).where(Laboratory.name == name).limit(1)
        )
        return result.scalar_one_or_none()

    async def list_laboratories(self) -> list[Laboratory]:
        result = await self.db.execute(select(Laboratory).order_by(Laboratory.name))
        return list(result.scalars().all())

    async def create_laboratory(self, data: dict) -> Laboratory:
        return await self._insert(Laboratory(**data))

    async def update_laboratory(self, lab_id: UUID, data: dict) -> Laboratory | None:
        return await self._update(Laboratory, lab_id, data)

    async def delete_laboratory(self, lab_id: UUID) -> bool:
        return await self._delete(Laboratory, lab_id)

    # ── Órdenes ──────────────────────────────────────
    async def _lock_order_sequence(self) -> OrderSequence | None:
        result = await self.db.execute(
            select(OrderSequence)
            .where(OrderSequence.name == ORDER_SEQUENCE_NAME)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def _create_order_sequence(self) -> None:
        """Crea la fila de la secuencia; si otra petición ya la creó, no hace nada."""
        dialect = self.db.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        await self.db.execute(
            insert(OrderSequence)
            .values(name=ORDER_SEQUENCE_NAME, last_number=0)
            .on_conflict_do_nothing(index_elements=["name"])
        )

    async def _next_order_number(self) -> int:
        """Incrementa la secuencia de órdenes bajo SELECT FOR UPDATE."""
        seq = await self._lock_order_sequence()
        if seq is None:
            await self._create_order_sequence()
            seq = await self._lock_order_sequence()

        seq.last_number += 1
        await self.db.flush()
        return seq.last_number

    async def get_order(self, order_id: UUID) -> Order | None:
        return await self.db.get(Order, order_id)

    async def list_orders(self) -> list[Order]:
        result = await self.db.execute(select(Order).order_by(Order.order_number.desc()))
        return list(result.scalars().all())

    async def list_orders_by_doctor(self, doctor_id: UUID) -> list[Order]:
        result = await self.db.execute(
            select(Order)
            .where(Order.doctor_id == doctor_id)
            .order_by(Order.order_number.desc())
        )
        return list(result.scalars().all())

    async def list_orders_by_lab(self, lab_id: UUID) -> list[Order]:
        result = await self.db.execute(
            select(Order)
            .where(Order.lab_id == lab_id)
            .order_by(Order.order_number.desc())
        )
        return list(result.scalars().all())

    async def create_order(self, data: dict) -> Order:
        order_number = await self._next_order_number()
        return await self._insert(Order(**data, order_number=order_number))

    async def update_order(self, order_id: UUID, data: dict) -> Order | None:
        return await self._update(Order, order_id, data)

    # ── Notificaciones ───────────────────────────────
    async def get_notification(self, notification_id: UUID) -> Notification | None:
        return await self.db.get(Notification, notification_id)

    async def list_notifications(self, recipient_ids: list[UUID]) -> list[Notification]:
        result = await self.db.execute(
            select(Notification)
            .where(Notification.user_id.in_(recipient_ids))
            .order_by(Notification.created_at.desc())
        )
        return list(result.scalars().all())

    async def create_notification(self, data: dict) -> Notification:
        return await self._insert(Notification(**data))

    async def mark_notification_read(self, notification_id: UUID) -> bool:
        notification = await self._update(
            Notification, notification_id, {"status": NotificationStatus.READ.value}
        )
        return notification is not None
