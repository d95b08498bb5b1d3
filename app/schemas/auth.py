"""
Schemas de autenticación: login y registro.
"""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole, UserStatus


# ── Login ────────────────────────────────────────────
class LoginRequest(BaseModel):
    # Sin validar formato: un email mal formado es simplemente un usuario inexistente
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class PublicUser(BaseModel):
    """Vista pública de un usuario (nunca incluye la contraseña)."""
    id: UUID
    name: str
    email: str
    role: UserRole
    lab_id: UUID | None = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: PublicUser


# ── Registro ─────────────────────────────────────────
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    phone: str | None = Field(None, max_length=30)
    role: UserRole = UserRole.DOCTOR
    status: UserStatus = UserStatus.ACTIVE
    lab_id: UUID | None = None
