from datetime import datetime

from pydantic import field_validator

from app.models.notification import NOTIFICATION_TYPES
from app.schemas.base import CamelModel


class NotificationResponse(CamelModel):
    id: str
    recipient_id: str
    type: str
    message: str
    application_id: str | None = None
    offer_id: str | None = None
    interview_details: dict | None = None
    extra_data: dict | None = None
    is_read: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None


class NotificationCreate(CamelModel):
    recipient_id: str
    type: str
    message: str | None = None
    application_id: str | None = None
    offer_id: str | None = None
    company_name: str | None = None
    interview_details: dict | None = None

    @field_validator("type")
    @classmethod
    def known_type(cls, v: str) -> str:
        if v not in NOTIFICATION_TYPES:
            raise ValueError(f"type must be one of: {', '.join(NOTIFICATION_TYPES)}")
        return v


class UnreadCountResponse(CamelModel):
    count: int
