"""
Servicio de dashboard: métricas calculadas en cada petición
sobre las órdenes visibles para el usuario.
"""

from collections import defaultdict
from decimal import Decimal
from uuid import UUID

from app.models.order import Order, OrderStatus
from app.models.user import User, UserRole, UserStatus
from app.schemas.dashboard import DashboardStats, LabOrderStats
from app.services.order_service import UNKNOWN_LAB, scoped_orders
from app.storage import Storage


# ── Agregaciones puras ──────────────────────────────

def count_by_status(orders: list[Order]) -> dict[str, int]:
    counts = {s.value: 0 for s in OrderStatus}
    for order in orders:
        counts[order.status.value] += 1
    return counts


def sum_revenue(orders: list[Order]) -> Decimal:
    return sum((o.value for o in orders if o.value is not None), Decimal("0"))


def group_by_lab(
    orders: list[Order],
    lab_names: dict[UUID, str],
    include_empty: bool = False,
) -> list[LabOrderStats]:
    """
    Órdenes e ingresos por laboratorio, de mayor a menor cantidad.
    Con include_empty también aparecen los laboratorios de lab_names sin órdenes.
    """
    grouped: dict[UUID, list[Order]] = defaultdict(list)
    if include_empty:
        for lab_id in lab_names:
            grouped[lab_id] = []
    for order in orders:
        grouped[order.lab_id].append(order)

    stats = [
        LabOrderStats(
            lab_id=lab_id,
            lab_name=lab_names.get(lab_id, UNKNOWN_LAB),
            total_orders=len(lab_orders),
            revenue=sum_revenue(lab_orders),
        )
        for lab_id, lab_orders in grouped.items()
    ]
    stats.sort(key=lambda s: (-s.total_orders, s.lab_name))
    return stats


# ── Dashboard por rol ───────────────────────────────

async def get_dashboard(
    storage: Storage, user: User, include_archived: bool = False
) -> DashboardStats:
    orders = await scoped_orders(storage, user)
    if not include_archived:
        orders = [o for o in orders if not o.archivado]

    if user.role == UserRole.SUPERADMIN:
        labs = await storage.list_laboratories()
        lab_names = {lab.id: lab.name for lab in labs}
    else:
        lab_names = {}
        for lab_id in {o.lab_id for o in orders}:
            lab = await storage.get_laboratory(lab_id)
            if lab:
                lab_names[lab_id] = lab.name

    stats = DashboardStats(
        total_orders=len(orders),
        orders_by_status=count_by_status(orders),
        total_revenue=sum_revenue(orders),
        orders_by_lab=group_by_lab(
            orders, lab_names, include_empty=user.role == UserRole.SUPERADMIN
        ),
    )

    if user.role == UserRole.SUPERADMIN:
        users = await storage.list_users()
        stats.total_laboratories = len(labs)
        stats.active_laboratories = sum(1 for lab in labs if lab.status == UserStatus.ACTIVE)
        stats.total_users = len(users)
        stats.total_doctors = sum(1 for u in users if u.role == UserRole.DOCTOR)
    elif user.role == UserRole.LABORATORIO:
        doctors = []
        if user.lab_id is not None:
            doctors = await storage.list_users(role=UserRole.DOCTOR, lab_id=user.lab_id)
        stats.total_doctors = len(doctors)

    return stats
