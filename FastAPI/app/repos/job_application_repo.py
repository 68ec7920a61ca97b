from sqlalchemy.orm import Session

from app.models.job_application import JobApplication, STATUS_PENDING
from app.models.job_offer import JobOffer
from app.models.user import User
from app.core.security import generate_id, utcnow


def create(
    db: Session,
    *,
    offer_id: str,
    company_id: str,
    applicant_id: str,
    applicant_email: str,
    applicant_name: str | None,
    position_titles: list[str],
    commit: bool = True,
) -> JobApplication:
    now = utcnow()
    application = JobApplication(
        id=generate_id(),
        offer_id=offer_id,
        company_id=company_id,
        applicant_id=applicant_id,
        applicant_email=applicant_email,
        applicant_name=applicant_name,
        positions=[{"title": title, "status": STATUS_PENDING} for title in position_titles],
        status=STATUS_PENDING,
        offer_deleted=False,
        applied_at=now,
        updated_at=now,
    )
    db.add(application)
    if commit:
        db.commit()
        db.refresh(application)
    return application


def get_by_id(db: Session, application_id: str) -> JobApplication | None:
    return db.query(JobApplication).filter(JobApplication.id == application_id).first()


def get_for_company(db: Session, application_id: str, company_id: str) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .filter(JobApplication.id == application_id, JobApplication.company_id == company_id)
        .first()
    )


def get_for_applicant(db: Session, application_id: str, applicant_email: str) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .filter(
            JobApplication.id == application_id,
            JobApplication.applicant_email == applicant_email,
        )
        .first()
    )


def get_existing(db: Session, offer_id: str, applicant_email: str) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .filter(
            JobApplication.offer_id == offer_id,
            JobApplication.applicant_email == applicant_email,
        )
        .first()
    )


def list_for_company(db: Session, company_id: str) -> list[JobApplication]:
    return (
        db.query(JobApplication)
        .filter(JobApplication.company_id == company_id)
        .order_by(JobApplication.applied_at.desc())
        .all()
    )


def list_for_applicant(db: Session, applicant_email: str) -> list[JobApplication]:
    return (
        db.query(JobApplication)
        .filter(JobApplication.applicant_email == applicant_email)
        .order_by(JobApplication.applied_at.desc())
        .all()
    )


def _enriched_query(db: Session):
    """applications -> offers -> offer owner, outer joined so a missing offer yields None rows."""
    return (
        db.query(JobApplication, JobOffer, User)
        .outerjoin(JobOffer, JobOffer.id == JobApplication.offer_id)
        .outerjoin(User, User.id == JobOffer.user_id)
    )


def get_enriched_for_applicant(
    db: Session, application_id: str, applicant_email: str
) -> tuple[JobApplication, JobOffer | None, User | None] | None:
    row = (
        _enriched_query(db)
        .filter(
            JobApplication.id == application_id,
            JobApplication.applicant_email == applicant_email,
        )
        .first()
    )
    if row is None:
        return None
    return row[0], row[1], row[2]


def list_enriched_for_applicant(
    db: Session, applicant_email: str
) -> list[tuple[JobApplication, JobOffer | None, User | None]]:
    rows = (
        _enriched_query(db)
        .filter(JobApplication.applicant_email == applicant_email)
        .order_by(JobApplication.applied_at.desc())
        .all()
    )
    return [(r[0], r[1], r[2]) for r in rows]


def mark_offer_deleted(db: Session, offer_id: str) -> int:
    """Tombstone every application of an offer. Caller commits."""
    return (
        db.query(JobApplication)
        .filter(JobApplication.offer_id == offer_id)
        .update(
            {JobApplication.offer_deleted: True, JobApplication.updated_at: utcnow()},
            synchronize_session=False,
        )
    )


def delete(db: Session, application: JobApplication, commit: bool = True) -> None:
    db.delete(application)
    if commit:
        db.commit()
