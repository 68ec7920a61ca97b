from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base, JSONDocument


class JobRequest(Base):
    """A candidate's public "looking for work" posting."""

    __tablename__ = "job_requests"

    id = Column(String(24), primary_key=True, index=True)
    user_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    first_name = Column(String)
    last_name = Column(String)
    birth_date = Column(Date)
    state = Column(String)
    municipality = Column(String)
    phone = Column(String)
    education_level = Column(String)
    academic_years = Column(String)
    diploma = Column(String)
    diploma_name = Column(String)
    specialization = Column(String)
    about_me = Column(Text)
    has_experience = Column(Boolean, default=False)
    experience_duration = Column(String)
    previous_position = Column(String)
    images = Column(JSONDocument)  # URLs already uploaded to object storage
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="job_requests")
