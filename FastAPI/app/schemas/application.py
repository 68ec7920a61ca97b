from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.base import CamelModel


class ApplyRequest(CamelModel):
    company_id: str | None = None
    position_titles: list[str] = Field(default_factory=list)


class HasAppliedResponse(CamelModel):
    has_applied: bool


class PositionStatus(CamelModel):
    title: str
    status: str


class ApplicationResponse(CamelModel):
    id: str
    offer_id: str
    company_id: str
    applicant_id: str
    applicant_email: str
    applicant_name: str | None = None
    positions: list[PositionStatus]
    status: str
    interview: dict | None = None
    offer_deleted: bool = False
    applied_at: datetime | None = None
    updated_at: datetime | None = None


class OfferDetails(CamelModel):
    company_name: str | None = None
    location: dict | None = None


class MyApplicationResponse(CamelModel):
    """Candidate view: application joined with its offer and company."""

    id: str
    positions: list[PositionStatus]
    status: str
    applied_at: datetime | None = None
    interview: dict | None = None
    offer_details: OfferDetails


class StatusUpdate(CamelModel):
    status: str | None = None


class PositionStatusUpdate(CamelModel):
    position_title: str | None = None
    status: str | None = None


class InterviewRequest(CamelModel):
    date: str = Field(min_length=1, max_length=50)
    time: str = Field(min_length=1, max_length=50)
    location: str = Field(min_length=1, max_length=500)
    notes: str | None = Field(default=None, max_length=5000)

    @field_validator("date", "time", "location")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()
