from datetime import datetime

from pydantic import Field, field_validator, model_validator

from app.schemas.base import CamelModel

_EDUCATION_LABELS = {
    "moyen": "{years}ème année moyenne",
    "secondaire": "{years}ème année secondaire",
    "universitaire": "{years}ème année universitaire",
}


def education_label(level: str | None, years: str | None) -> str:
    """Human label for an education requirement, e.g. ("secondaire", "3") -> "3ème année secondaire"."""
    if level == "sans_condition":
        return "Aucune condition requise"
    template = _EDUCATION_LABELS.get(level or "")
    if not template:
        return ""
    return template.format(years=years or "")


class Education(CamelModel):
    level: str | None = None
    years: str | None = None
    details: str | None = None

    @model_validator(mode="after")
    def fill_details(self):
        self.details = education_label(self.level, self.years)
        return self


class Position(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    required_experience: str | None = None
    available_positions: int = Field(default=1, ge=1)
    education: Education | None = None
    salary: str | None = None
    contract_type: str | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Position title must not be blank")
        return v.strip()


class CompanyLocation(CamelModel):
    state: str | None = None
    municipality: str | None = None
    address: str | None = None


def _unique_titles(positions: list[Position] | None) -> list[Position] | None:
    if positions is None:
        return positions
    titles = [p.title for p in positions]
    if len(titles) != len(set(titles)):
        raise ValueError("Position titles must be unique within an offer")
    return positions


class JobOfferCreate(CamelModel):
    company_name: str = Field(min_length=1, max_length=200)
    company_location: CompanyLocation | None = None
    description: str | None = Field(default=None, max_length=20000)
    positions: list[Position] = Field(min_length=1)

    @field_validator("positions")
    @classmethod
    def unique_titles(cls, v):
        return _unique_titles(v)


class JobOfferUpdate(CamelModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=200)
    company_location: CompanyLocation | None = None
    description: str | None = Field(default=None, max_length=20000)
    positions: list[Position] | None = Field(default=None, min_length=1)

    @field_validator("positions")
    @classmethod
    def unique_titles(cls, v):
        return _unique_titles(v)


class JobOfferResponse(CamelModel):
    id: str
    user_id: str
    company_name: str
    company_location: dict | None = None
    description: str | None = None
    positions: list[dict]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class JobOfferCreated(CamelModel):
    success: bool = True
    offer_id: str


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    pages: int


class OffersPage(CamelModel):
    offers: list[JobOfferResponse]
    pagination: Pagination
