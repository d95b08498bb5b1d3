"""
Schemas para la gestión de doctores desde un laboratorio.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole, UserStatus


class DoctorCreate(BaseModel):
    """Rol, estado y laboratorio los fija el servidor."""
    name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    phone: str = Field(
        ..., min_length=1, max_length=30, pattern=r"^\d+$",
        description="Solo números",
    )


class DoctorUpdate(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(None, min_length=10, max_length=30)
    status: UserStatus | None = None


class DoctorResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None
    role: UserRole
    status: UserStatus
    lab_id: UUID | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
