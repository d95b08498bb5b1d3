"""
Endpoints de órdenes de trabajo.
La pertenencia por registro se verifica en order_service.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from app.auth.dependencies import require_role
from app.auth.rbac import roles_for
from app.models.user import User
from app.schemas.order import (
    OrderArchiveRequest,
    OrderCreate,
    OrderDetailResponse,
    OrderProgressUpdate,
    OrderResponse,
    OrderUpdate,
)
from app.services import order_service
from app.storage import Storage, get_storage

router = APIRouter()


@router.get("", response_model=list[OrderDetailResponse])
async def list_orders(
    user: User = Depends(require_role(*roles_for("order", "read"))),
    storage: Storage = Depends(get_storage),
):
    """doctor: sus órdenes; laboratorio: las de su lab; superadmin: todas."""
    return await order_service.list_orders(storage, user)


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    data: OrderCreate,
    user: User = Depends(require_role(*roles_for("order", "create"))),
    storage: Storage = Depends(get_storage),
):
    """
    Crea una orden. lab_id siempre sale de la sesión.
    Un laboratorio puede asignar `doctorId` de su propio laboratorio.
    """
    return await order_service.create_order(storage, user, data)


@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: UUID,
    user: User = Depends(require_role(*roles_for("order", "read"))),
    storage: Storage = Depends(get_storage),
):
    return await order_service.get_order(storage, user, order_id)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: UUID,
    data: OrderUpdate,
    user: User = Depends(require_role(*roles_for("order", "update"))),
    storage: Storage = Depends(get_storage),
):
    return await order_service.update_order(storage, user, order_id, data)


@router.patch("/{order_id}", response_model=OrderResponse)
async def archive_order(
    order_id: UUID,
    data: OrderArchiveRequest,
    user: User = Depends(require_role(*roles_for("order", "archive"))),
    storage: Storage = Depends(get_storage),
):
    """Archiva o desarchiva la orden."""
    return await order_service.archive_order(storage, user, order_id, data.archivado)


@router.put("/{order_id}/progress", response_model=OrderResponse)
async def update_order_progress(
    order_id: UUID,
    data: OrderProgressUpdate,
    user: User = Depends(require_role(*roles_for("order", "progress"))),
    storage: Storage = Depends(get_storage),
):
    """Reporta el avance de la orden (laboratorio o superadmin)."""
    return await order_service.update_progress(storage, user, order_id, data)
