"""
Servicio de doctores: cuentas con rol doctor administradas por su laboratorio.
"""

import logging
from uuid import UUID

from app.auth.rbac import can_manage_doctor
from app.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from app.core.security import hash_password
from app.models.user import User, UserRole, UserStatus
from app.schemas.doctor import DoctorCreate, DoctorUpdate
from app.storage import Storage

logger = logging.getLogger(__name__)


async def _get_manageable_doctor(storage: Storage, actor: User, doctor_id: UUID) -> User:
    doctor = await storage.get_user(doctor_id)
    if not doctor or doctor.role != UserRole.DOCTOR:
        raise NotFoundException("Doctor")
    if not can_manage_doctor(actor, doctor):
        raise ForbiddenException("No puede gestionar doctores de otros laboratorios")
    return doctor


async def list_doctors(
    storage: Storage, actor: User, lab_id: UUID | None = None
) -> list[User]:
    """laboratorio: los de su lab. superadmin: todos o filtrados por lab_id."""
    if actor.role == UserRole.LABORATORIO:
        if actor.lab_id is None:
            return []
        return await storage.list_users(role=UserRole.DOCTOR, lab_id=actor.lab_id)
    return await storage.list_users(role=UserRole.DOCTOR, lab_id=lab_id)


async def get_doctor(storage: Storage, actor: User, doctor_id: UUID) -> User:
    return await _get_manageable_doctor(storage, actor, doctor_id)


async def create_doctor(storage: Storage, actor: User, data: DoctorCreate) -> User:
    """Rol doctor, estado activo y el laboratorio del usuario que lo crea."""
    if actor.lab_id is None:
        raise ValidationException("El usuario no tiene un laboratorio asignado")

    if await storage.get_user_by_email(data.email):
        raise ConflictException("Email ya está en uso. Intenta con otro email.")

    doctor = await storage.create_user({
        "name": data.name,
        "email": data.email,
        "password": hash_password(data.password),
        "phone": data.phone,
        "role": UserRole.DOCTOR,
        "status": UserStatus.ACTIVE,
        "lab_id": actor.lab_id,
    })
    logger.info("Doctor creado id=%s lab_id=%s", doctor.id, actor.lab_id)
    return doctor


async def update_doctor(
    storage: Storage, actor: User, doctor_id: UUID, data: DoctorUpdate
) -> User:
    doctor = await _get_manageable_doctor(storage, actor, doctor_id)

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes and changes["email"] != doctor.email:
        if await storage.get_user_by_email(changes["email"]):
            raise ConflictException("Email ya está en uso. Intenta con otro email.")

    updated = await storage.update_user(doctor.id, changes)
    if not updated:
        raise NotFoundException("Doctor")
    return updated


async def delete_doctor(storage: Storage, actor: User, doctor_id: UUID) -> None:
    """Un doctor con órdenes no se elimina."""
    doctor = await _get_manageable_doctor(storage, actor, doctor_id)

    if await storage.list_orders_by_doctor(doctor.id):
        raise ValidationException(
            "No se puede eliminar un doctor con órdenes. "
            "Reasigne o cancele sus órdenes primero."
        )

    if not await storage.delete_user(doctor.id):
        raise NotFoundException("Doctor")
    logger.info("Doctor eliminado id=%s por user_id=%s", doctor_id, actor.id)
