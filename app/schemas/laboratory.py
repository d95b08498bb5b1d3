"""
Schemas para Laboratory.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.user import UserStatus


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class LaboratoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    phone: str = Field(..., min_length=1, max_length=30)
    email: EmailStr | None = None
    status: UserStatus = UserStatus.ACTIVE

    email_blank = field_validator("email", mode="before")(_blank_to_none)


class LaboratoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    address: str | None = Field(None, min_length=1, max_length=500)
    phone: str | None = Field(None, min_length=1, max_length=30)
    email: EmailStr | None = None
    status: UserStatus | None = None

    email_blank = field_validator("email", mode="before")(_blank_to_none)


class LaboratoryResponse(BaseModel):
    id: UUID
    name: str
    address: str
    phone: str
    email: str | None = None
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LabStatusUpdate(BaseModel):
    status: UserStatus


class LabStatusResponse(BaseModel):
    id: UUID
    name: str
    status: UserStatus
    message: str
