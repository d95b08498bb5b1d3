"""
Servicio de órdenes de trabajo: creación por doctor o laboratorio,
actualización, avance, archivado y lectura con nombres resueltos.
"""

import logging
from uuid import UUID

from app.auth.rbac import can_update_progress, ensure_order_access
from app.config import get_settings
from app.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from app.models.notification import NotificationType
from app.models.order import Order, OrderStatus
from app.models.user import User, UserRole
from app.schemas.order import (
    LabOrderSummary,
    OrderCreate,
    OrderDetailResponse,
    OrderProgressUpdate,
    OrderResponse,
    OrderUpdate,
    odontograma_to_storage,
)
from app.services.notification_service import notify
from app.storage import Storage

logger = logging.getLogger(__name__)

UNKNOWN_DOCTOR = "Unknown Doctor"
UNKNOWN_LAB = "Unknown Lab"


# ── Máquina de estados ──────────────────────────────

ORDER_STATUS_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDIENTE: frozenset({
        OrderStatus.INICIADA, OrderStatus.EN_PROCESO, OrderStatus.CANCELADA,
    }),
    OrderStatus.INICIADA: frozenset({OrderStatus.EN_PROCESO, OrderStatus.CANCELADA}),
    OrderStatus.EN_PROCESO: frozenset({OrderStatus.TERMINADA, OrderStatus.CANCELADA}),
    OrderStatus.TERMINADA: frozenset(),
    OrderStatus.CANCELADA: frozenset(),
}

# Avance por defecto cuando el laboratorio no lo indica.
# cancelada conserva el avance que tenía.
STATUS_PROGRESS: dict[OrderStatus, int] = {
    OrderStatus.PENDIENTE: 0,
    OrderStatus.INICIADA: 25,
    OrderStatus.EN_PROCESO: 50,
    OrderStatus.TERMINADA: 100,
}


def is_allowed_transition(current: OrderStatus, new: OrderStatus) -> bool:
    if current == new:
        return True
    return new in ORDER_STATUS_TRANSITIONS.get(current, frozenset())


def _check_transition(current: OrderStatus, new: OrderStatus) -> None:
    # Permisivo salvo que se active ENFORCE_STATUS_TRANSITIONS
    if not get_settings().ENFORCE_STATUS_TRANSITIONS:
        return
    if not is_allowed_transition(current, new):
        raise ConflictException(
            f"Transición de estado no permitida: de {current.value} a {new.value}"
        )


# ── Helpers ─────────────────────────────────────────

async def _get_order_or_404(storage: Storage, order_id: UUID) -> Order:
    order = await storage.get_order(order_id)
    if not order:
        raise NotFoundException("Orden", "Orden no encontrada")
    return order


async def _resolve_assignable_doctor(
    storage: Storage, doctor_id: UUID, lab_id: UUID
) -> User:
    """El doctor debe existir, tener rol doctor y ser del mismo laboratorio."""
    doctor = await storage.get_user(doctor_id)
    if not doctor:
        raise ValidationException("Doctor no encontrado")
    if doctor.role != UserRole.DOCTOR:
        raise ValidationException("Rol de usuario inválido: debe ser doctor")
    if doctor.lab_id != lab_id:
        raise ForbiddenException(
            "No se pueden asignar órdenes a doctores de otros laboratorios"
        )
    return doctor


async def _resolve_names(
    storage: Storage, orders: list[Order]
) -> tuple[dict[UUID, str], dict[UUID, str]]:
    doctor_names: dict[UUID, str] = {}
    for doctor_id in {o.doctor_id for o in orders if o.doctor_id}:
        doctor = await storage.get_user(doctor_id)
        if doctor:
            doctor_names[doctor_id] = doctor.name

    lab_names: dict[UUID, str] = {}
    for lab_id in {o.lab_id for o in orders}:
        lab = await storage.get_laboratory(lab_id)
        if lab:
            lab_names[lab_id] = lab.name

    return doctor_names, lab_names


async def enrich_orders(storage: Storage, orders: list[Order]) -> list[OrderDetailResponse]:
    """Agrega doctor_name y lab_name; referencias colgantes usan un texto fijo."""
    doctor_names, lab_names = await _resolve_names(storage, orders)
    return [
        OrderDetailResponse(
            **OrderResponse.model_validate(order).model_dump(),
            doctor_name=doctor_names.get(order.doctor_id, UNKNOWN_DOCTOR),
            lab_name=lab_names.get(order.lab_id, UNKNOWN_LAB),
        )
        for order in orders
    ]


async def scoped_orders(storage: Storage, user: User) -> list[Order]:
    """doctor: las suyas; laboratorio: las de su lab; superadmin: todas."""
    if user.role == UserRole.DOCTOR:
        return await storage.list_orders_by_doctor(user.id)
    if user.role == UserRole.LABORATORIO:
        if user.lab_id is None:
            return []
        return await storage.list_orders_by_lab(user.lab_id)
    if user.role == UserRole.SUPERADMIN:
        return await storage.list_orders()
    return []


# ── Lectura ─────────────────────────────────────────

async def list_orders(storage: Storage, user: User) -> list[OrderDetailResponse]:
    orders = await scoped_orders(storage, user)
    return await enrich_orders(storage, orders)


async def get_order(storage: Storage, user: User, order_id: UUID) -> OrderDetailResponse:
    order = await _get_order_or_404(storage, order_id)
    ensure_order_access(user, order)
    return (await enrich_orders(storage, [order]))[0]


async def list_lab_orders(storage: Storage, lab_id: UUID) -> list[LabOrderSummary]:
    orders = await storage.list_orders_by_lab(lab_id)
    doctor_names, _ = await _resolve_names(storage, orders)
    return [
        LabOrderSummary(
            id=o.id,
            order_number=o.order_number,
            doctor_id=o.doctor_id,
            doctor_name=doctor_names.get(o.doctor_id, UNKNOWN_DOCTOR),
            status=o.status,
            value=o.value,
            services=o.services,
            progress_percentage=o.progress_percentage,
            archivado=o.archivado,
            created_at=o.created_at,
        )
        for o in orders
    ]


# ── Creación ────────────────────────────────────────

async def create_order(storage: Storage, user: User, data: OrderCreate) -> Order:
    """
    Crea una orden en estado pendiente.

    - doctor: doctor_id y lab_id salen de la sesión; avisa al laboratorio.
    - laboratorio: lab_id sale de la sesión; doctorId opcional del mismo
      laboratorio, al que se le avisa de la asignación.
    """
    if user.role not in (UserRole.DOCTOR, UserRole.LABORATORIO):
        raise ForbiddenException("Permisos insuficientes")
    if user.lab_id is None:
        raise ValidationException("El usuario no tiene un laboratorio asignado")

    if user.role == UserRole.DOCTOR:
        doctor_id = user.id
    else:
        doctor_id = None
        if data.doctor_id:
            doctor = await _resolve_assignable_doctor(storage, data.doctor_id, user.lab_id)
            doctor_id = doctor.id

    fields = data.model_dump(exclude={"doctor_id", "odontograma", "material"})
    order = await storage.create_order({
        **fields,
        "material": data.material.value if data.material else None,
        "odontograma": odontograma_to_storage(data.odontograma),
        "doctor_id": doctor_id,
        "lab_id": user.lab_id,
        "status": OrderStatus.PENDIENTE,
        "progress_percentage": "0",
        "archivado": False,
    })

    if user.role == UserRole.DOCTOR:
        await notify(
            storage, user.lab_id, NotificationType.NEW_ORDER,
            f"Nueva orden #{order.order_number} de {user.name}",
        )
    elif doctor_id:
        await notify(
            storage, doctor_id, NotificationType.ORDER_ASSIGNED,
            f"Se te asignó la orden #{order.order_number}",
        )

    logger.info(
        "Orden #%s creada por user_id=%s role=%s lab_id=%s",
        order.order_number, user.id, user.role.value, user.lab_id,
    )
    return order


# ── Actualización ───────────────────────────────────

async def update_order(
    storage: Storage, user: User, order_id: UUID, data: OrderUpdate
) -> Order:
    order = await _get_order_or_404(storage, order_id)
    ensure_order_access(user, order)

    changes = data.model_dump(exclude_unset=True)

    if "odontograma" in changes:
        changes["odontograma"] = odontograma_to_storage(data.odontograma or {})
    if changes.get("material") is not None:
        changes["material"] = data.material.value
    if "progress_percentage" in changes:
        if data.progress_percentage is None:
            del changes["progress_percentage"]
        else:
            changes["progress_percentage"] = str(data.progress_percentage)
    for required in ("services", "status"):
        if required in changes and changes[required] is None:
            del changes[required]

    # Solo laboratorio y superadmin reasignan el doctor
    if "doctor_id" in changes:
        if user.role == UserRole.DOCTOR:
            del changes["doctor_id"]
        elif changes["doctor_id"] is not None:
            await _resolve_assignable_doctor(storage, changes["doctor_id"], order.lab_id)

    previous_status = order.status
    previous_doctor = order.doctor_id
    new_status = changes.get("status")
    if new_status is not None:
        _check_transition(previous_status, new_status)

    updated = await storage.update_order(order.id, changes)
    if not updated:
        raise NotFoundException("Orden", "Orden no encontrada")

    if updated.doctor_id and updated.doctor_id != previous_doctor:
        await notify(
            storage, updated.doctor_id, NotificationType.ORDER_ASSIGNED,
            f"Se te asignó la orden #{updated.order_number}",
        )
    if new_status is not None and new_status != previous_status and updated.doctor_id:
        await notify(
            storage, updated.doctor_id, NotificationType.ORDER_STATUS_CHANGED,
            f"Tu orden #{updated.order_number} cambió a {new_status.value}",
        )

    return updated


async def update_progress(
    storage: Storage, user: User, order_id: UUID, data: OrderProgressUpdate
) -> Order:
    """Avance reportado por el laboratorio; sin status se asume en_proceso."""
    order = await _get_order_or_404(storage, order_id)
    if not can_update_progress(user, order):
        raise ForbiddenException("Permisos insuficientes sobre esta orden")

    new_status = data.status or OrderStatus.EN_PROCESO
    _check_transition(order.status, new_status)

    if data.progress_percentage is not None:
        progress = str(data.progress_percentage)
    elif new_status in STATUS_PROGRESS:
        progress = str(STATUS_PROGRESS[new_status])
    else:
        progress = order.progress_percentage

    previous_status = order.status
    updated = await storage.update_order(
        order.id, {"status": new_status, "progress_percentage": progress}
    )
    if not updated:
        raise NotFoundException("Orden", "Orden no encontrada")

    if new_status != previous_status and updated.doctor_id:
        await notify(
            storage, updated.doctor_id, NotificationType.ORDER_STATUS_CHANGED,
            f"Tu orden #{updated.order_number} cambió a {new_status.value}",
        )

    logger.info(
        "Orden #%s: avance %s%% (%s) por user_id=%s",
        updated.order_number, progress, new_status.value, user.id,
    )
    return updated


async def archive_order(
    storage: Storage, user: User, order_id: UUID, archivado: bool
) -> Order:
    """Archivar u ocultar una orden; no genera notificación."""
    order = await _get_order_or_404(storage, order_id)
    ensure_order_access(user, order)

    updated = await storage.update_order(order.id, {"archivado": archivado})
    if not updated:
        raise NotFoundException("Orden", "Orden no encontrada")

    logger.info(
        "Orden #%s %s por user_id=%s",
        updated.order_number, "archivada" if archivado else "desarchivada", user.id,
    )
    return updated
