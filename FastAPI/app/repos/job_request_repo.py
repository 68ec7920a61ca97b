from sqlalchemy.orm import Session

from app.models.job_request import JobRequest
from app.core.security import generate_id

UPDATABLE_FIELDS = (
    "first_name",
    "last_name",
    "birth_date",
    "state",
    "municipality",
    "phone",
    "education_level",
    "academic_years",
    "diploma",
    "diploma_name",
    "specialization",
    "about_me",
    "has_experience",
    "experience_duration",
    "previous_position",
    "images",
)


def create(db: Session, user_id: str, data: dict) -> JobRequest:
    fields = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
    job_request = JobRequest(id=generate_id(), user_id=user_id, **fields)
    db.add(job_request)
    db.commit()
    db.refresh(job_request)
    return job_request


def get_by_id(db: Session, request_id: str, user_id: str) -> JobRequest | None:
    return (
        db.query(JobRequest)
        .filter(JobRequest.id == request_id, JobRequest.user_id == user_id)
        .first()
    )


def get_for_user(db: Session, user_id: str) -> list[JobRequest]:
    return (
        db.query(JobRequest)
        .filter(JobRequest.user_id == user_id)
        .order_by(JobRequest.created_at.desc())
        .all()
    )


def update(db: Session, request_id: str, user_id: str, data: dict) -> JobRequest | None:
    job_request = get_by_id(db, request_id, user_id)
    if not job_request:
        return None
    for key, value in data.items():
        if key in UPDATABLE_FIELDS:
            setattr(job_request, key, value)
    db.commit()
    db.refresh(job_request)
    return job_request


def delete(db: Session, request_id: str, user_id: str) -> bool:
    job_request = get_by_id(db, request_id, user_id)
    if not job_request:
        return False
    db.delete(job_request)
    db.commit()
    return True


def delete_all_for_user(db: Session, user_id: str, commit: bool = True) -> int:
    deleted = (
        db.query(JobRequest)
        .filter(JobRequest.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return deleted
