from sqlalchemy import Boolean, Column, DateTime, String, UniqueConstraint
from sqlalchemy.sql import func

from app.database import Base, JSONDocument

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
STATUS_INTERVIEW_SCHEDULED = "interview_scheduled"

POSITION_STATUSES = (STATUS_PENDING, STATUS_ACCEPTED, STATUS_REJECTED)
APPLICATION_STATUSES = POSITION_STATUSES + (STATUS_INTERVIEW_SCHEDULED,)


class JobApplication(Base):
    """A candidate's submission against one or more positions of one offer.

    offer_id/company_id are plain references (no FK) so the application outlives
    its offer; offer_deleted marks that case explicitly.
    """

    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("offer_id", "applicant_email", name="uq_job_applications_offer_applicant"),
    )

    id = Column(String(24), primary_key=True, index=True)
    offer_id = Column(String(24), nullable=False, index=True)
    company_id = Column(String(24), nullable=False, index=True)
    applicant_id = Column(String(24), nullable=False)
    applicant_email = Column(String, nullable=False, index=True)
    applicant_name = Column(String)
    positions = Column(JSONDocument, nullable=False)  # [{title, status}]
    status = Column(String, nullable=False, default=STATUS_PENDING)
    interview = Column(JSONDocument)  # {date, time, location, notes, scheduledAt, companyId}
    offer_deleted = Column(Boolean, nullable=False, default=False)
    applied_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
