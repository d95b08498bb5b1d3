"""
Definición de permisos RBAC por rol y reglas de pertenencia por registro.

El chequeo de rol se hace en el router (require_role). La pertenencia
(doctor -> sus órdenes, laboratorio -> su laboratorio, superadmin -> todo)
se decide aquí con predicados puros que cada servicio vuelve a aplicar.
"""

from uuid import UUID

from app.core.exceptions import ForbiddenException
from app.models.order import Order
from app.models.user import User, UserRole

# ── Permisos por recurso ─────────────────────────────
# Formato: {recurso: {acción: [roles permitidos]}}
PERMISSIONS: dict[str, dict[str, list[UserRole]]] = {
    "user": {
        "list": [UserRole.SUPERADMIN],
        "update_status": [UserRole.SUPERADMIN],
    },
    "laboratory": {
        "create": [UserRole.SUPERADMIN],
        "read": [UserRole.SUPERADMIN],
        "update": [UserRole.SUPERADMIN],
        "delete": [UserRole.SUPERADMIN],
        "read_doctors": [UserRole.SUPERADMIN, UserRole.LABORATORIO],
    },
    "doctor": {
        "create": [UserRole.LABORATORIO],
        "read": [UserRole.SUPERADMIN, UserRole.LABORATORIO],
        "update": [UserRole.SUPERADMIN, UserRole.LABORATORIO],
        "delete": [UserRole.SUPERADMIN, UserRole.LABORATORIO],
    },
    "order": {
        "create": [UserRole.DOCTOR, UserRole.LABORATORIO],
        "read": [UserRole.SUPERADMIN, UserRole.LABORATORIO, UserRole.DOCTOR],
        "update": [UserRole.SUPERADMIN, UserRole.LABORATORIO, UserRole.DOCTOR],
        "archive": [UserRole.SUPERADMIN, UserRole.LABORATORIO, UserRole.DOCTOR],
        "progress": [UserRole.SUPERADMIN, UserRole.LABORATORIO],
    },
}


def has_permission(role: UserRole, resource: str, action: str) -> bool:
    """Verifica si un rol tiene permiso para una acción en un recurso."""
    resource_perms = PERMISSIONS.get(resource, {})
    allowed_roles = resource_perms.get(action, [])
    return role in allowed_roles


def roles_for(resource: str, action: str) -> tuple[UserRole, ...]:
    """Roles permitidos para una acción, listos para require_role(*roles)."""
    return tuple(PERMISSIONS.get(resource, {}).get(action, []))


# ── Pertenencia por registro ─────────────────────────

def belongs_to_lab(user: User, lab_id: UUID | None) -> bool:
    """True si el usuario es superadmin o pertenece al laboratorio indicado."""
    if user.role == UserRole.SUPERADMIN:
        return True
    return user.lab_id is not None and user.lab_id == lab_id


def can_access_order(user: User, order: Order) -> bool:
    """Lectura y escritura de una orden (incluye archivar)."""
    if user.role == UserRole.SUPERADMIN:
        return True
    if user.role == UserRole.DOCTOR:
        return order.doctor_id == user.id
    if user.role == UserRole.LABORATORIO:
        return user.lab_id is not None and order.lab_id == user.lab_id
    return False


def can_update_progress(user: User, order: Order) -> bool:
    """El avance solo lo reporta el laboratorio dueño o un superadmin."""
    if not has_permission(user.role, "order", "progress"):
        return False
    return can_access_order(user, order)


def can_manage_doctor(user: User, doctor: User) -> bool:
    """Ver, editar o eliminar a un doctor."""
    if user.role == UserRole.SUPERADMIN:
        return True
    if user.role == UserRole.LABORATORIO:
        return user.lab_id is not None and doctor.lab_id == user.lab_id
    return False


def ensure_order_access(user: User, order: Order) -> None:
    if not can_access_order(user, order):
        raise ForbiddenException("Permisos insuficientes sobre esta orden")
