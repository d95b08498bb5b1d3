"""
Servicio de laboratorios (tenants). Solo superadmin los administra.

Eliminar un laboratorio no toca sus usuarios ni sus órdenes; las
lecturas posteriores muestran "Unknown Lab".
"""

import logging
from uuid import UUID

from app.core.exceptions import ForbiddenException, NotFoundException
from app.models.laboratory import Laboratory
from app.models.user import User, UserRole, UserStatus
from app.schemas.laboratory import LaboratoryCreate, LaboratoryUpdate, LabStatusResponse
from app.storage import Storage

logger = logging.getLogger(__name__)


async def get_laboratory(storage: Storage, lab_id: UUID) -> Laboratory:
    lab = await storage.get_laboratory(lab_id)
    if not lab:
        raise NotFoundException("Laboratorio")
    return lab


async def list_laboratories(storage: Storage) -> list[Laboratory]:
    return await storage.list_laboratories()


async def create_laboratory(storage: Storage, data: LaboratoryCreate) -> Laboratory:
    lab = await storage.create_laboratory(data.model_dump())
    logger.info("Laboratorio creado id=%s name=%s", lab.id, lab.name)
    return lab


async def update_laboratory(
    storage: Storage, lab_id: UUID, data: LaboratoryUpdate
) -> Laboratory:
    changes = data.model_dump(exclude_unset=True)
    # name, address, phone y status no admiten null
    changes = {k: v for k, v in changes.items() if v is not None or k == "email"}

    lab = await storage.update_laboratory(lab_id, changes)
    if not lab:
        raise NotFoundException("Laboratorio")
    return lab


async def delete_laboratory(storage: Storage, lab_id: UUID) -> None:
    if not await storage.delete_laboratory(lab_id):
        raise NotFoundException("Laboratorio")
    logger.info("Laboratorio eliminado id=%s", lab_id)


async def update_status(
    storage: Storage, lab_id: UUID, status: UserStatus
) -> LabStatusResponse:
    lab = await storage.update_laboratory(lab_id, {"status": status})
    if not lab:
        raise NotFoundException("Laboratorio")

    logger.info("Laboratorio %s cambiado a %s", lab_id, status.value)
    return LabStatusResponse(
        id=lab.id,
        name=lab.name,
        status=lab.status,
        message=f"Estado del laboratorio cambiado a {status.value}",
    )


async def list_lab_users(storage: Storage, lab_id: UUID) -> list[User]:
    await get_laboratory(storage, lab_id)
    return await storage.list_users(lab_id=lab_id)


async def list_lab_doctors(storage: Storage, actor: User, lab_id: UUID) -> list[User]:
    await get_laboratory(storage, lab_id)
    if actor.role == UserRole.LABORATORIO and actor.lab_id != lab_id:
        raise ForbiddenException("No puede ver doctores de otros laboratorios")
    return await storage.list_users(role=UserRole.DOCTOR, lab_id=lab_id)
