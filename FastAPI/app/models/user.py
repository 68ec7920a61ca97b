from sqlalchemy import Boolean, Column, Date, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base, JSONDocument

USER_TYPE_INDIVIDUAL = "individual"
USER_TYPE_COMPANY = "company"
USER_TYPES = (USER_TYPE_INDIVIDUAL, USER_TYPE_COMPANY)


class User(Base):
    """Identity record. Created incomplete on first sign-in, completed via profile setup."""

    __tablename__ = "users"

    id = Column(String(24), primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    user_type = Column(String, nullable=True)  # individual | company | NULL until setup
    is_profile_complete = Column(Boolean, default=False, nullable=False)

    # Individual fields
    first_name = Column(String)
    last_name = Column(String)
    phone = Column(String)
    birth_date = Column(Date)

    avatar = Column(String)
    cover_image = Column(String)

    # {companyName, about, headquarters, contacts: [{email, phone}]}
    company_details = Column(JSONDocument)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    job_offers = relationship(
        "JobOffer",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    job_requests = relationship(
        "JobRequest",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_company(self) -> bool:
        return self.user_type == USER_TYPE_COMPANY

    @property
    def is_individual(self) -> bool:
        return self.user_type == USER_TYPE_INDIVIDUAL

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()

    @property
    def company_name(self) -> str | None:
        return (self.company_details or {}).get("companyName")
