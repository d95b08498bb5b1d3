"""
Modelo User: Usuarios del sistema con roles RBAC.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class UserRole(str, enum.Enum):
    """Roles del sistema."""
    SUPERADMIN = "superadmin"
    LABORATORIO = "laboratorio"
    DOCTOR = "doctor"


class UserStatus(str, enum.Enum):
    """Estado de una cuenta (también usado por laboratorios)."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )

    # ── Datos de acceso ──────────────────────────────
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    password: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="Hash bcrypt, nunca se expone"
    )
    phone: Mapped[str | None] = mapped_column(String(30))
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, name="user_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserStatus.ACTIVE,
    )

    # ── Tenant ───────────────────────────────────────
    # Referencia blanda a laboratories.id: borrar un laboratorio no
    # afecta a sus usuarios.
    lab_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, index=True, comment="Laboratorio del usuario (null para superadmin)"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"
