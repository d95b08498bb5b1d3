"""
Endpoints de laboratorios (solo superadmin, salvo el listado de doctores).
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from app.auth.dependencies import require_role
from app.auth.rbac import roles_for
from app.models.user import User
from app.schemas.doctor import DoctorResponse
from app.schemas.laboratory import (
    LabStatusResponse,
    LabStatusUpdate,
    LaboratoryCreate,
    LaboratoryResponse,
    LaboratoryUpdate,
)
from app.schemas.order import LabOrderSummary
from app.schemas.user import LabUserResponse
from app.services import laboratory_service, order_service
from app.storage import Storage, get_storage

router = APIRouter()


@router.get("", response_model=list[LaboratoryResponse])
async def list_laboratories(
    user: User = Depends(require_role(*roles_for("laboratory", "read"))),
    storage: Storage = Depends(get_storage),
):
    return await laboratory_service.list_laboratories(storage)


@router.post("", response_model=LaboratoryResponse, status_code=201)
async def create_laboratory(
    data: LaboratoryCreate,
    user: User = Depends(require_role(*roles_for("laboratory", "create"))),
    storage: Storage = Depends(get_storage),
):
    return await laboratory_service.create_laboratory(storage, data)


@router.get("/{lab_id}", response_model=LaboratoryResponse)
async def get_laboratory(
    lab_id: UUID,
    user: User = Depends(require_role(*roles_for("laboratory", "read"))),
    storage: Storage = Depends(get_storage),
):
    return await laboratory_service.get_laboratory(storage, lab_id)


@router.put("/{lab_id}", response_model=LaboratoryResponse)
async def update_laboratory(
    lab_id: UUID,
    data: LaboratoryUpdate,
    user: User = Depends(require_role(*roles_for("laboratory", "update"))),
    storage: Storage = Depends(get_storage),
):
    return await laboratory_service.update_laboratory(storage, lab_id, data)


@router.delete("/{lab_id}", status_code=204)
async def delete_laboratory(
    lab_id: UUID,
    user: User = Depends(require_role(*roles_for("laboratory", "delete"))),
    storage: Storage = Depends(get_storage),
):
    """Elimina el laboratorio. Sus usuarios y órdenes se conservan."""
    await laboratory_service.delete_laboratory(storage, lab_id)


@router.patch("/{lab_id}/status", response_model=LabStatusResponse)
async def update_laboratory_status(
    lab_id: UUID,
    data: LabStatusUpdate,
    user: User = Depends(require_role(*roles_for("laboratory", "update"))),
    storage: Storage = Depends(get_storage),
):
    return await laboratory_service.update_status(storage, lab_id, data.status)


@router.get("/{lab_id}/users", response_model=list[LabUserResponse])
async def list_laboratory_users(
    lab_id: UUID,
    user: User = Depends(require_role(*roles_for("laboratory", "read"))),
    storage: Storage = Depends(get_storage),
):
    return await laboratory_service.list_lab_users(storage, lab_id)


@router.get("/{lab_id}/orders", response_model=list[LabOrderSummary])
async def list_laboratory_orders(
    lab_id: UUID,
    user: User = Depends(require_role(*roles_for("laboratory", "read"))),
    storage: Storage = Depends(get_storage),
):
    await laboratory_service.get_laboratory(storage, lab_id)
    return await order_service.list_lab_orders(storage, lab_id)


@router.get("/{lab_id}/doctors", response_model=list[DoctorResponse])
async def list_laboratory_doctors(
    lab_id: UUID,
    user: User = Depends(require_role(*roles_for("laboratory", "read_doctors"))),
    storage: Storage = Depends(get_storage),
):
    """Un laboratorio solo puede ver los doctores propios."""
    return await laboratory_service.list_lab_doctors(storage, user, lab_id)
