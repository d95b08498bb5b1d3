"""
Schemas del dashboard: métricas derivadas de órdenes, usuarios y laboratorios.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel


class LabOrderStats(BaseModel):
    lab_id: UUID
    lab_name: str
    total_orders: int
    revenue: Decimal


class DashboardStats(BaseModel):
    total_orders: int
    orders_by_status: dict[str, int]
    total_revenue: Decimal
    orders_by_lab: list[LabOrderStats]

    # Solo superadmin
    total_laboratories: int | None = None
    active_laboratories: int | None = None
    total_users: int | None = None

    # superadmin (global) y laboratorio (su lab)
    total_doctors: int | None = None
