from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base, JSONDocument


class JobOffer(Base):
    """A company's posting. positions is an ordered, non-empty list of position documents."""

    __tablename__ = "job_offers"

    id = Column(String(24), primary_key=True, index=True)
    user_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String, nullable=False)
    company_location = Column(JSONDocument)  # {state, municipality, address}
    description = Column(Text)
    positions = Column(JSONDocument, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="job_offers")

    @property
    def position_titles(self) -> list[str]:
        return [p.get("title") for p in (self.positions or []) if p.get("title")]
