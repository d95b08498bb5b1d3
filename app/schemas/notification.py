"""
Schemas para Notification.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: UUID
    user_id: UUID
    type: str
    message: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
