from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.sql import func

from app.database import Base, JSONDocument

TYPE_JOB_APPLICATION = "job_application"
TYPE_APPLICATION_STATUS = "application_status"
TYPE_INTERVIEW_SCHEDULED = "interview_scheduled"
TYPE_APPLICATION_ACCEPTED = "application_accepted"

NOTIFICATION_TYPES = (
    TYPE_JOB_APPLICATION,
    TYPE_APPLICATION_STATUS,
    TYPE_INTERVIEW_SCHEDULED,
    TYPE_APPLICATION_ACCEPTED,
)


class Notification(Base):
    """Recipient-scoped, pre-rendered event record. Only is_read/read_at ever change."""

    __tablename__ = "notifications"

    id = Column(String(24), primary_key=True, index=True)
    recipient_id = Column(String(24), nullable=False, index=True)
    type = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    application_id = Column(String(24), index=True)
    offer_id = Column(String(24))
    interview_details = Column(JSONDocument)
    extra_data = Column(JSONDocument)  # positions, applicantName, status
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    read_at = Column(DateTime(timezone=True))
