"""
Endpoint de métricas del dashboard.
"""

from fastapi import APIRouter, Depends, Query

from app.auth.dependencies import get_current_user
from app.models.user import User
from app.schemas.dashboard import DashboardStats
from app.services import dashboard_service
from app.storage import Storage, get_storage

router = APIRouter()


@router.get("", response_model=DashboardStats, response_model_exclude_none=True)
async def get_dashboard(
    include_archived: bool = Query(False),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Métricas sobre las órdenes visibles para el usuario."""
    return await dashboard_service.get_dashboard(storage, user, include_archived)
