"""
Endpoints de doctores, acotados al laboratorio del usuario.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.auth.dependencies import require_role
from app.auth.rbac import roles_for
from app.models.user import User
from app.schemas.doctor import DoctorCreate, DoctorResponse, DoctorUpdate
from app.services import doctor_service
from app.storage import Storage, get_storage

router = APIRouter()


@router.get("", response_model=list[DoctorResponse])
async def list_doctors(
    lab_id: UUID | None = Query(None, description="Solo superadmin"),
    user: User = Depends(require_role(*roles_for("doctor", "read"))),
    storage: Storage = Depends(get_storage),
):
    return await doctor_service.list_doctors(storage, user, lab_id)


@router.post("", response_model=DoctorResponse, status_code=201)
async def create_doctor(
    data: DoctorCreate,
    user: User = Depends(require_role(*roles_for("doctor", "create"))),
    storage: Storage = Depends(get_storage),
):
    """Crea un doctor en el laboratorio del usuario autenticado."""
    return await doctor_service.create_doctor(storage, user, data)


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: UUID,
    user: User = Depends(require_role(*roles_for("doctor", "read"))),
    storage: Storage = Depends(get_storage),
):
    return await doctor_service.get_doctor(storage, user, doctor_id)


@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: UUID,
    data: DoctorUpdate,
    user: User = Depends(require_role(*roles_for("doctor", "update"))),
    storage: Storage = Depends(get_storage),
):
    return await doctor_service.update_doctor(storage, user, doctor_id, data)


@router.delete("/{doctor_id}", status_code=204)
async def delete_doctor(
    doctor_id: UUID,
    user: User = Depends(require_role(*roles_for("doctor", "delete"))),
    storage: Storage = Depends(get_storage),
):
    """Falla con 400 si el doctor tiene órdenes."""
    await doctor_service.delete_doctor(storage, user, doctor_id)
