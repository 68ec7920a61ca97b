"""
Application lifecycle: submit, status/position updates, interview scheduling, deletion.

Overall status is always derived by fold_status() from the position statuses plus the
interview overlay; every mutation path writes positions/interview first and then folds.
Writes that come with a notification are committed together with it.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import utcnow
from app.models.job_application import (
    JobApplication,
    POSITION_STATUSES,
    STATUS_ACCEPTED,
    STATUS_INTERVIEW_SCHEDULED,
    STATUS_PENDING,
    STATUS_REJECTED,
)
from app.models.job_offer import JobOffer
from app.models.user import User
from app.repos import job_application_repo, job_offer_repo, notification_repo
from app.services import notification_service
from app.services.errors import (
    AlreadyAppliedError,
    ApplicationAccessError,
    ApplicationNotFoundError,
    InvalidCompanyError,
    NoPositionsSelectedError,
    NotApplicationOwnerError,
    OfferNotFoundError,
    OfferUnavailableError,
    OwnOfferError,
    PositionNotFoundError,
)

logger = logging.getLogger(__name__)


def fold_status(positions: list[dict], interview: dict | None = None) -> str:
    """all accepted -> accepted, all rejected -> rejected, else interview_scheduled if an
    interview is set, else pending."""
    statuses = [p.get("status") for p in positions or []]
    if statuses and all(s == STATUS_ACCEPTED for s in statuses):
        return STATUS_ACCEPTED
    if statuses and all(s == STATUS_REJECTED for s in statuses):
        return STATUS_REJECTED
    if interview:
        return STATUS_INTERVIEW_SCHEDULED
    return STATUS_PENDING


def _apply_fold(application: JobApplication) -> str:
    application.status = fold_status(application.positions, application.interview)
    application.updated_at = utcnow()
    return application.status


def _dedupe(titles: list[str]) -> list[str]:
    seen = []
    for title in titles:
        title = (title or "").strip()
        if title and title not in seen:
            seen.append(title)
    return seen


def has_applied(db: Session, offer_id: str, applicant_email: str) -> bool:
    return job_application_repo.get_existing(db, offer_id, applicant_email) is not None


def submit_application(
    db: Session,
    offer_id: str,
    applicant: User,
    position_titles: list[str],
    company_id: str | None = None,
) -> JobApplication:
    """Create one application (all positions pending) plus the company's notification."""
    titles = _dedupe(position_titles)
    if not titles:
        raise NoPositionsSelectedError()
    offer = job_offer_repo.get_by_id(db, offer_id)
    if not offer or any(t not in offer.position_titles for t in titles):
        raise OfferNotFoundError()
    if offer.user_id == applicant.id:
        raise OwnOfferError()
    if company_id and company_id != offer.user_id:
        raise InvalidCompanyError()
    if job_application_repo.get_existing(db, offer_id, applicant.email):
        raise AlreadyAppliedError()

    try:
        application = job_application_repo.create(
            db,
            offer_id=offer.id,
            company_id=offer.user_id,
            applicant_id=applicant.id,
            applicant_email=applicant.email,
            applicant_name=applicant.full_name or applicant.email,
            position_titles=titles,
            commit=False,
        )
        db.flush()
        notification_service.notify_new_application(db, application)
        db.commit()
    except IntegrityError as e:
        # Lost the race against a concurrent submit for the same (offer, applicant)
        db.rollback()
        logger.info("Duplicate application rejected by constraint: offer=%s email=%s", offer_id, applicant.email)
        raise AlreadyAppliedError() from e

    db.refresh(application)
    logger.info("Application submitted: id=%s offer=%s applicant=%s positions=%s", application.id, offer_id, applicant.email, titles)
    return application


def _get_owned(db: Session, application_id: str, company: User) -> JobApplication:
    application = job_application_repo.get_by_id(db, application_id)
    if not application:
        raise ApplicationNotFoundError()
    if application.company_id != company.id:
        raise NotApplicationOwnerError()
    return application


def get_for_actor(db: Session, application_id: str, user: User) -> JobApplication:
    """Raw application, visible to the owning company and to the applicant only."""
    application = job_application_repo.get_by_id(db, application_id)
    if not application:
        raise ApplicationNotFoundError()
    if application.company_id != user.id and application.applicant_email != user.email:
        raise ApplicationAccessError()
    return application


def update_status(
    db: Session,
    application_id: str,
    company: User,
    status: str,
    notify: bool = False,
) -> JobApplication:
    """Set every position to `status` and refold.

    interview_scheduled is not a position status: positions go back to pending and the
    interview overlay is kept (or opened) so the fold lands on interview_scheduled.
    pending clears the interview.
    """
    application = _get_owned(db, application_id, company)

    position_status = status if status in POSITION_STATUSES else STATUS_PENDING
    application.positions = [{**p, "status": position_status} for p in application.positions or []]
    if status == STATUS_INTERVIEW_SCHEDULED and not application.interview:
        application.interview = {"scheduledAt": utcnow().isoformat(), "companyId": company.id}
    elif status == STATUS_PENDING:
        application.interview = None
    _apply_fold(application)

    if notify:
        notification_service.notify_status_change(db, application, status, company.company_name)
    db.commit()
    db.refresh(application)
    logger.info("Application %s status set to %s by company=%s (notify=%s)", application_id, application.status, company.id, notify)
    return application


def update_position_status(
    db: Session,
    application_id: str,
    company: User,
    position_title: str,
    status: str,
) -> JobApplication:
    application = job_application_repo.get_for_company(db, application_id, company.id)
    if not application:
        raise PositionNotFoundError()
    positions = [dict(p) for p in application.positions or []]
    matched = False
    for position in positions:
        if position.get("title") == position_title:
            position["status"] = status
            matched = True
            break
    if not matched:
        raise PositionNotFoundError()

    application.positions = positions
    _apply_fold(application)
    db.commit()
    db.refresh(application)
    logger.info("Application %s position %r -> %s; overall=%s", application_id, position_title, status, application.status)
    return application


def schedule_interview(
    db: Session,
    application_id: str,
    company: User,
    interview_details: dict,
) -> JobApplication:
    """Store the interview, refold (positions untouched) and notify the applicant once."""
    application = _get_owned(db, application_id, company)
    application.interview = {
        **interview_details,
        "scheduledAt": utcnow().isoformat(),
        "companyId": company.id,
    }
    _apply_fold(application)
    notification_service.notify_interview_scheduled(db, application, interview_details, company.company_name)
    db.commit()
    db.refresh(application)
    logger.info("Interview scheduled for application %s by company=%s", application_id, company.id)
    return application


def _delete(db: Session, application: JobApplication) -> None:
    application_id = application.id
    purged = notification_repo.delete_for_application(db, application_id, commit=False)
    job_application_repo.delete(db, application, commit=False)
    db.commit()
    logger.info("Application %s deleted with %d notifications", application_id, purged)


def delete_for_company(db: Session, application_id: str, company: User) -> None:
    application = _get_owned(db, application_id, company)
    _delete(db, application)


def delete_for_applicant(db: Session, application_id: str, applicant_email: str) -> None:
    application = job_application_repo.get_for_applicant(db, application_id, applicant_email)
    if not application:
        raise ApplicationNotFoundError()
    _delete(db, application)


def _enriched(application: JobApplication, offer: JobOffer | None, company: User | None) -> dict:
    return {
        "id": application.id,
        "positions": application.positions,
        "status": application.status,
        "applied_at": application.applied_at,
        "interview": application.interview,
        "offer_details": {
            "company_name": company.company_name if company else None,
            "location": offer.company_location if offer else None,
        },
    }


def _is_available(application: JobApplication, offer: JobOffer | None, company: User | None) -> bool:
    return not application.offer_deleted and offer is not None and company is not None


def get_for_applicant(db: Session, application_id: str, applicant_email: str) -> dict:
    """Candidate view joined with offer location and company name."""
    row = job_application_repo.get_enriched_for_applicant(db, application_id, applicant_email)
    if row is None:
        raise ApplicationNotFoundError()
    application, offer, company = row
    if not _is_available(application, offer, company):
        raise OfferUnavailableError()
    return _enriched(application, offer, company)


def list_for_applicant(db: Session, applicant_email: str) -> list[dict]:
    """Candidate list; applications whose offer is gone are left out."""
    rows = job_application_repo.list_enriched_for_applicant(db, applicant_email)
    return [_enriched(a, o, c) for a, o, c in rows if _is_available(a, o, c)]


def list_for_actor(db: Session, user: User) -> list[JobApplication]:
    if user.is_company:
        return job_application_repo.list_for_company(db, user.id)
    return job_application_repo.list_for_applicant(db, user.email)
