from datetime import date, datetime

from pydantic import Field, computed_field

from app.schemas.base import CamelModel


def age_on(birth_date: date | None, today: date | None = None) -> int | None:
    if birth_date is None:
        return None
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


class _JobRequestFields(CamelModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    birth_date: date | None = None
    state: str | None = None
    municipality: str | None = None
    phone: str | None = Field(default=None, max_length=50)
    education_level: str | None = None
    academic_years: str | None = None
    diploma: str | None = None
    diploma_name: str | None = None
    specialization: str | None = None
    about_me: str | None = Field(default=None, max_length=5000)
    has_experience: bool | None = None
    experience_duration: str | None = None
    previous_position: str | None = None


class JobRequestCreate(_JobRequestFields):
    # URLs returned by the object-storage upload step
    images: list[str] = Field(min_length=1)
    has_experience: bool = False


class JobRequestUpdate(_JobRequestFields):
    images: list[str] | None = Field(default=None, min_length=1)


class JobRequestResponse(_JobRequestFields):
    id: str
    user_id: str
    images: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field
    @property
    def age(self) -> int | None:
        return age_on(self.birth_date)


class JobRequestCreated(CamelModel):
    success: bool = True
    request_id: str
