from datetime import date, datetime
from typing import Literal

from pydantic import EmailStr, Field, computed_field, model_validator

from app.schemas.base import CamelModel
from app.schemas.job_offer import Pagination
from app.schemas.job_request import JobRequestResponse, age_on


class Contact(CamelModel):
    email: EmailStr | None = None
    phone: str | None = None


class CompanyDetails(CamelModel):
    company_name: str = Field(min_length=1, max_length=200)
    about: str | None = None
    headquarters: str | None = None
    contacts: list[Contact] = Field(default_factory=list)


class ProfileSetup(CamelModel):
    user_type: Literal["individual", "company"]
    company_details: CompanyDetails | None = None
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    birth_date: date | None = None

    @model_validator(mode="after")
    def company_requires_details(self):
        if self.user_type == "company" and self.company_details is None:
            raise ValueError("Company details are required")
        return self


class ProfileResponse(CamelModel):
    id: str
    email: str
    user_type: str | None = None
    is_profile_complete: bool = False
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    avatar: str | None = None
    cover_image: str | None = None
    company_details: dict | None = None
    created_at: datetime | None = None


class PublicUserResponse(CamelModel):
    id: str
    user_type: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None
    cover_image: str | None = None
    company_details: dict | None = None


class CandidateStats(CamelModel):
    age: int | None = None


class CandidateResponse(CamelModel):
    """Public card of a completed individual profile."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field
    @property
    def stats(self) -> CandidateStats:
        return CandidateStats(age=age_on(self.birth_date))


class CandidatesPage(CamelModel):
    candidates: list[CandidateResponse]
    pagination: Pagination


class PublicJobRequests(CamelModel):
    profile: PublicUserResponse
    requests: list[JobRequestResponse]
