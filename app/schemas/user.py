"""
Schemas para User.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from app.models.user import UserRole, UserStatus


class UserResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None
    role: UserRole
    status: UserStatus
    lab_id: UUID | None = None
    lab_name: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LabUserResponse(BaseModel):
    """Usuario listado dentro de un laboratorio."""
    id: UUID
    name: str
    email: str
    role: UserRole
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserMe(BaseModel):
    """Respuesta para el endpoint /me con el nombre del laboratorio."""
    id: UUID
    name: str
    email: str
    role: UserRole
    lab_id: UUID | None = None
    lab_name: str | None = None


class UserStatusUpdate(BaseModel):
    status: UserStatus
